"""Course content tree endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session as DbSession

from academy.content.render import render_content
from academy.database import get_db
from academy.dependencies.auth import get_current_user
from academy.models import (
    ContentCreate,
    ContentResponse,
    ContentUpdate,
    MessageResponse,
    RenderedContent,
    ReorderRequest,
)
from academy.models.db.user import User
from academy.services import content_service, course_service, ordering_service

router = APIRouter(prefix="/api/courses/{course_id}/contents", tags=["contents"])


@router.get("", response_model=list[ContentResponse])
def list_contents(
    course_id: str,
    db: Annotated[DbSession, Depends(get_db)],
) -> list[ContentResponse]:
    """Main topics in order, each with its sub-topics under ``subContents``."""
    course_service.get_course(db, course_id)
    return content_service.content_tree(db, course_id)


@router.post("", response_model=ContentResponse, status_code=status.HTTP_201_CREATED)
def create_content(
    course_id: str,
    payload: ContentCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> ContentResponse:
    """Add a main topic, or a sub-topic when ``parentId`` is set."""
    course = course_service.get_course(db, course_id)
    course_service.require_editor(current_user, course)
    node = content_service.create_content(db, course, payload)
    return content_service.to_response(node)


@router.put("/{content_id}", response_model=ContentResponse)
def update_content(
    course_id: str,
    content_id: str,
    payload: ContentUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> ContentResponse:
    course = course_service.get_course(db, course_id)
    course_service.require_editor(current_user, course)
    node = content_service.get_content(db, course_id, content_id)
    node = content_service.update_content(db, node, payload)
    return content_service.to_response(node)


@router.delete("/{content_id}", response_model=MessageResponse)
def delete_content(
    course_id: str,
    content_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Delete a node; deleting a main topic removes its sub-topics too."""
    course = course_service.get_course(db, course_id)
    course_service.require_editor(current_user, course)
    node = content_service.get_content(db, course_id, content_id)
    content_service.delete_content(db, node)
    return MessageResponse(message="Content deleted successfully")


@router.put("/{content_id}/reorder")
def reorder_content(
    course_id: str,
    content_id: str,
    payload: ReorderRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, bool]:
    """Swap a node with its previous or next sibling."""
    course = course_service.get_course(db, course_id)
    course_service.require_editor(current_user, course)
    ordering_service.move(db, course_id, content_id, payload.direction, payload.mainContentId)
    return {"success": True}


@router.get("/{content_id}/render", response_model=RenderedContent)
def render(
    course_id: str,
    content_id: str,
    db: Annotated[DbSession, Depends(get_db)],
) -> RenderedContent:
    """Render instruction for one node (sanitized HTML, embed source or quiz)."""
    node = content_service.get_content(db, course_id, content_id)
    return render_content(node)

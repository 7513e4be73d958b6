"""Course content node store.

Every write keeps each sibling group ``(course_id, parent_id)`` numbered
``1..n`` without gaps or duplicates.
"""
import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DbSession

from academy.content import codec, embed
from academy.content.tree import build_tree, contiguous_orders, next_order
from academy.errors import MalformedPayload, NotFound, ValidationError
from academy.models.contents import ContentCreate, ContentResponse, ContentUpdate
from academy.models.db import ContentType, Course, CourseContent

logger = logging.getLogger(__name__)


def list_by_course(db: DbSession, course_id: str) -> list[CourseContent]:
    """All nodes of a course, ordered by ``order`` ascending."""
    stmt = (
        select(CourseContent)
        .where(CourseContent.course_id == course_id)
        .order_by(CourseContent.order)
    )
    return list(db.execute(stmt).scalars())


def get_siblings(
    db: DbSession,
    course_id: str,
    parent_id: str | None,
    for_update: bool = False,
) -> list[CourseContent]:
    """Nodes sharing ``parent_id`` (``None`` selects the main topics)."""
    stmt = select(CourseContent).where(CourseContent.course_id == course_id)
    if parent_id is None:
        stmt = stmt.where(CourseContent.parent_id.is_(None))
    else:
        stmt = stmt.where(CourseContent.parent_id == parent_id)
    stmt = stmt.order_by(CourseContent.order)
    if for_update:
        stmt = stmt.with_for_update()
    return list(db.execute(stmt).scalars())


def get_content(db: DbSession, course_id: str, content_id: str) -> CourseContent:
    """Get a node of this course or raise ``NotFound``."""
    node = db.get(CourseContent, content_id)
    if node is None or node.course_id != course_id:
        raise NotFound("Content not found")
    return node


def to_response(node: CourseContent, children: list[CourseContent] | None = None) -> ContentResponse:
    return ContentResponse(
        id=node.id,
        courseId=node.course_id,
        parentId=node.parent_id,
        title=node.title,
        type=node.content_type,
        content=node.content,
        order=node.order,
        createdAt=node.created_at,
        updatedAt=node.updated_at,
        subContents=[to_response(child) for child in children] if children is not None else None,
    )


def content_tree(db: DbSession, course_id: str) -> list[ContentResponse]:
    """Main topics with their sub-topics nested under ``subContents``."""
    tree = build_tree(list_by_course(db, course_id))
    return [
        to_response(topic.source, [child.source for child in topic.children])
        for topic in tree
    ]


def encode_payload(content_type: ContentType, value: object) -> str:
    """Validate and serialize a payload for storage.

    Raises:
        ValidationError: payload does not fit ``content_type``.
    """
    try:
        raw = codec.encode(content_type, value)
    except (MalformedPayload, TypeError) as exc:
        raise ValidationError(f"Invalid {content_type.value} content: {exc}", field="content") from exc

    if not raw.strip():
        if content_type is ContentType.QUIZ:
            raise ValidationError("Quiz content is required", field="content")
        return raw
    if content_type is ContentType.VIDEO and not embed.is_allowed_video_url(raw):
        raise ValidationError("Video URL host is not allowed", field="content")
    if content_type is ContentType.AUDIO and not embed.is_allowed_audio_url(raw):
        raise ValidationError("Audio URL host is not allowed", field="content")
    if content_type is ContentType.H5P and embed.h5p_embed_url(raw) is None:
        raise ValidationError("Invalid H5P content id", field="content")
    return raw


def _check_order_free(siblings: list[CourseContent], order: int, node_id: str | None = None) -> None:
    for sibling in siblings:
        if sibling.order == order and sibling.id != node_id:
            raise ValidationError(f"Order {order} is already taken", field="order")


def _compact(siblings: list[CourseContent]) -> None:
    for node, position in contiguous_orders(siblings):
        node.order = position


def _resolve_parent(db: DbSession, course_id: str, parent_id: str | None) -> CourseContent | None:
    if parent_id is None:
        return None
    parent = db.get(CourseContent, parent_id)
    if parent is None or parent.course_id != course_id:
        raise ValidationError("Parent topic not found in this course", field="parentId")
    if not parent.is_main_topic:
        raise ValidationError("Sub-topics cannot have children", field="parentId")
    return parent


def create_content(db: DbSession, course: Course, data: ContentCreate) -> CourseContent:
    """Add a main topic (no ``parentId``) or a sub-topic."""
    parent = _resolve_parent(db, course.id, data.parentId)
    parent_id = parent.id if parent else None
    raw = encode_payload(data.type, data.content)

    siblings = get_siblings(db, course.id, parent_id, for_update=True)
    if data.order is not None:
        _check_order_free(siblings, data.order)
        order = data.order
    else:
        order = next_order(siblings)

    node = CourseContent(
        course_id=course.id,
        parent_id=parent_id,
        title=data.title.strip(),
        type=data.type.value,
        content=raw,
        order=order,
    )
    try:
        db.add(node)
        db.flush()
        _compact(siblings + [node])
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create content in course %s", course.id)
        raise
    db.refresh(node)
    logger.info("Content %s created in course %s", node.id, course.id)
    return node


def update_content(db: DbSession, node: CourseContent, data: ContentUpdate) -> CourseContent:
    """Partial update of title, type, content and order."""
    fields = data.model_fields_set
    new_type = data.type if "type" in fields and data.type is not None else node.content_type
    if "content" in fields:
        raw = encode_payload(new_type, data.content)
    elif new_type is not node.content_type:
        # Existing payload must still make sense under the new type
        raw = encode_payload(new_type, node.content)
    else:
        raw = node.content

    siblings = None
    if "order" in fields and data.order is not None and data.order != node.order:
        siblings = get_siblings(db, node.course_id, node.parent_id, for_update=True)
        _check_order_free(siblings, data.order, node.id)

    try:
        if "title" in fields and data.title is not None:
            node.title = data.title.strip()
        node.type = new_type.value
        node.content = raw
        if siblings is not None:
            node.order = data.order
            _compact(siblings)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update content %s", node.id)
        raise
    db.refresh(node)
    return node


def delete_content(db: DbSession, node: CourseContent) -> int:
    """Delete a node; a main topic takes its sub-topics with it.

    Returns:
        Number of nodes removed.
    """
    course_id, parent_id, node_id = node.course_id, node.parent_id, node.id
    try:
        removed = 1
        if node.is_main_topic:
            for child in get_siblings(db, course_id, node_id):
                db.delete(child)
                removed += 1
        db.delete(node)
        db.flush()
        _compact(get_siblings(db, course_id, parent_id, for_update=True))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete content %s", node_id)
        raise
    logger.info("Deleted %d content node(s) starting at %s", removed, node_id)
    return removed

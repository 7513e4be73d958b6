"""Admin user management routes."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DbSession

from academy.database import get_db
from academy.dependencies.auth import require_admin
from academy.models.auth import (
    AdminUserResponse,
    RoleUpdateRequest,
    StatusUpdateRequest,
    UserResponse,
)
from academy.models.db.user import User
from academy.services import user_service

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/users", response_model=list[AdminUserResponse])
def list_users(
    admin: Annotated[User, Depends(require_admin)],
    db: Annotated[DbSession, Depends(get_db)],
) -> list[AdminUserResponse]:
    return user_service.list_users(db)


@router.patch("/users/{user_id}/role", response_model=UserResponse)
def update_role(
    user_id: int,
    data: RoleUpdateRequest,
    admin: Annotated[User, Depends(require_admin)],
    db: Annotated[DbSession, Depends(get_db)],
) -> User:
    """Promote or demote a user."""
    return user_service.set_role(db, admin, user_id, data.role)


@router.patch("/users/{user_id}/status", response_model=UserResponse)
def update_status(
    user_id: int,
    data: StatusUpdateRequest,
    admin: Annotated[User, Depends(require_admin)],
    db: Annotated[DbSession, Depends(get_db)],
) -> User:
    """Activate or deactivate a user; deactivation ends their sessions."""
    return user_service.set_active(db, admin, user_id, data.is_active)

"""User profile and follow routes."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DbSession

from academy.database import get_db
from academy.dependencies.auth import get_current_user
from academy.models.auth import (
    FollowListResponse,
    FollowStatusResponse,
    MessageResponse,
    ProfileResponse,
    ProfileUpdateRequest,
)
from academy.models.db.user import User
from academy.services import follow_service, user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me/profile", response_model=ProfileResponse)
async def get_profile(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Get current user's profile."""
    return current_user


@router.patch("/me/profile", response_model=ProfileResponse)
async def update_profile(
    data: ProfileUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> User:
    """Update display name and bio."""
    return user_service.update_profile(db, current_user, data)


@router.post("/{user_id}/follow", response_model=MessageResponse)
async def follow_user(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    edge = follow_service.follow(db, current_user, user_id)
    return MessageResponse(message=f"You now follow {edge.following.full_name}")


@router.delete("/{user_id}/follow", response_model=MessageResponse)
async def unfollow_user(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    follow_service.unfollow(db, current_user, user_id)
    return MessageResponse(message="User unfollowed successfully")


@router.get("/{user_id}/follow", response_model=FollowStatusResponse)
async def get_follow_status(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> FollowStatusResponse:
    """Whether the current user follows ``user_id``."""
    return follow_service.follow_status(db, current_user, user_id)


@router.get("/{user_id}/followers", response_model=FollowListResponse)
async def get_followers(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> FollowListResponse:
    return follow_service.list_followers(db, user_id)


@router.get("/{user_id}/following", response_model=FollowListResponse)
async def get_following(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> FollowListResponse:
    return follow_service.list_following(db, user_id)

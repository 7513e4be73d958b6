"""Follow graph between users."""
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession, joinedload

from academy.errors import NotFound, ValidationError
from academy.models.auth import FollowListResponse, FollowStatusResponse, FollowUserResponse
from academy.models.db import Follow, User
from academy.services.user_service import get_user

logger = logging.getLogger(__name__)


def get_follow(db: DbSession, follower_id: int, following_id: int) -> Follow | None:
    stmt = select(Follow).where(
        Follow.follower_id == follower_id, Follow.following_id == following_id
    )
    return db.execute(stmt).scalar_one_or_none()


def follow(db: DbSession, follower: User, user_id: int) -> Follow:
    """Make ``follower`` follow ``user_id``.

    Raises:
        NotFound: target user does not exist.
        ValidationError: following oneself, or already following.
    """
    target = get_user(db, user_id)
    if target.id == follower.id:
        raise ValidationError("You cannot follow yourself")
    if get_follow(db, follower.id, target.id) is not None:
        raise ValidationError("You already follow this user")

    edge = Follow(follower_id=follower.id, following_id=target.id)
    db.add(edge)
    db.commit()
    db.refresh(edge)
    logger.info("User %s now follows user %s", follower.id, target.id)
    return edge


def unfollow(db: DbSession, follower: User, user_id: int) -> None:
    edge = get_follow(db, follower.id, user_id)
    if edge is None:
        raise NotFound("You do not follow this user")
    db.delete(edge)
    db.commit()
    logger.info("User %s unfollowed user %s", follower.id, user_id)


def follow_status(db: DbSession, follower: User, user_id: int) -> FollowStatusResponse:
    edge = get_follow(db, follower.id, user_id)
    return FollowStatusResponse(
        is_following=edge is not None,
        followed_at=edge.created_at if edge else None,
    )


def _to_list(edges: list[Follow], side: str) -> FollowListResponse:
    users = []
    for edge in edges:
        user = getattr(edge, side)
        users.append(
            FollowUserResponse(
                id=user.id,
                username=user.username,
                display_name=user.display_name,
                followed_at=edge.created_at,
            )
        )
    return FollowListResponse(users=users)


def list_followers(db: DbSession, user_id: int) -> FollowListResponse:
    """Users following ``user_id``, newest first."""
    get_user(db, user_id)
    stmt = (
        select(Follow)
        .options(joinedload(Follow.follower))
        .where(Follow.following_id == user_id)
        .order_by(Follow.created_at.desc(), Follow.id.desc())
    )
    return _to_list(list(db.execute(stmt).scalars()), "follower")


def list_following(db: DbSession, user_id: int) -> FollowListResponse:
    """Users ``user_id`` follows, newest first."""
    get_user(db, user_id)
    stmt = (
        select(Follow)
        .options(joinedload(Follow.following))
        .where(Follow.follower_id == user_id)
        .order_by(Follow.created_at.desc(), Follow.id.desc())
    )
    return _to_list(list(db.execute(stmt).scalars()), "following")

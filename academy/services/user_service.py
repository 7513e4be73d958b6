"""Profile edits and admin user management."""
import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session as DbSession

from academy.errors import NotFound, ValidationError
from academy.models.auth import AdminUserResponse, ProfileUpdateRequest
from academy.models.db import Certificate, Course, User, UserRole
from academy.services.auth_service import invalidate_all_user_sessions

logger = logging.getLogger(__name__)


def update_profile(db: DbSession, user: User, data: ProfileUpdateRequest) -> User:
    """Apply the fields present in the request; an empty string clears a field."""
    for field in data.model_fields_set:
        value = getattr(data, field)
        setattr(user, field, value or None)
    db.commit()
    db.refresh(user)
    return user


def get_user(db: DbSession, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def list_users(db: DbSession) -> list[AdminUserResponse]:
    """Every user with the number of courses taught and certificates held."""
    courses = (
        select(Course.instructor_id, func.count(Course.id).label("count"))
        .group_by(Course.instructor_id)
        .subquery()
    )
    certificates = (
        select(Certificate.user_id, func.count(Certificate.id).label("count"))
        .group_by(Certificate.user_id)
        .subquery()
    )
    stmt = (
        select(
            User,
            func.coalesce(courses.c.count, 0),
            func.coalesce(certificates.c.count, 0),
        )
        .outerjoin(courses, courses.c.instructor_id == User.id)
        .outerjoin(certificates, certificates.c.user_id == User.id)
        .order_by(User.created_at.desc(), User.id.desc())
    )
    return [
        AdminUserResponse(
            id=user.id,
            username=user.username,
            email=user.email,
            display_name=user.display_name,
            role=UserRole(user.role),
            is_active=user.is_active,
            created_at=user.created_at,
            last_login=user.last_login,
            course_count=course_count,
            certificate_count=certificate_count,
        )
        for user, course_count, certificate_count in db.execute(stmt).all()
    ]


def set_role(db: DbSession, admin: User, user_id: int, role: UserRole) -> User:
    user = get_user(db, user_id)
    if user.id == admin.id and role is not UserRole.ADMIN:
        raise ValidationError("Admins cannot remove their own admin role", field="role")
    user.role = role.value
    db.commit()
    db.refresh(user)
    logger.info("Admin %s set role of user %s to %s", admin.id, user.id, role.value)
    return user


def set_active(db: DbSession, admin: User, user_id: int, is_active: bool) -> User:
    user = get_user(db, user_id)
    if user.id == admin.id and not is_active:
        raise ValidationError("Admins cannot deactivate themselves", field="is_active")
    user.is_active = is_active
    db.commit()
    if not is_active:
        invalidate_all_user_sessions(db, user.id)
    db.refresh(user)
    logger.info("Admin %s set active=%s for user %s", admin.id, is_active, user.id)
    return user

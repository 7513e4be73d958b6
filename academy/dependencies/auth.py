"""Authentication dependencies for FastAPI."""
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session as DbSession

from academy.database import get_db
from academy.errors import Forbidden, Unauthenticated
from academy.models.db.user import User
from academy.services.auth_service import resolve_token

# HTTP Bearer scheme for JWT
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[DbSession, Depends(get_db)],
) -> User:
    """Get the current authenticated user.

    Raises:
        Unauthenticated: no token, or token/session/user is not valid.
    """
    if credentials is None:
        raise Unauthenticated()
    return resolve_token(db, credentials.credentials)


async def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    if not current_user.is_admin:
        raise Forbidden("Admin access required")
    return current_user

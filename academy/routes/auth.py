"""Authentication routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session as DbSession

from academy.config import ACCESS_TOKEN_EXPIRE_MINUTES
from academy.database import get_db
from academy.dependencies.auth import get_current_user, security
from academy.errors import Unauthenticated
from academy.models.auth import (
    MessageResponse,
    TokenResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from academy.models.db.user import User
from academy.services.auth_service import (
    authenticate,
    create_user,
    invalidate_session,
    refresh_session,
    start_session,
    verify_token,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _token_response(token: str) -> TokenResponse:
    return TokenResponse(
        access_token=token,
        token_type="bearer",
        expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserRegister,
    db: Annotated[DbSession, Depends(get_db)],
) -> User:
    """Register a new user."""
    return create_user(db, data.username, data.email, data.password)


@router.post("/login", response_model=TokenResponse)
async def login(
    data: UserLogin,
    db: Annotated[DbSession, Depends(get_db)],
) -> TokenResponse:
    """Login with username or email and get a JWT."""
    user = authenticate(db, data.username, data.password)
    return _token_response(start_session(db, user))


@router.post("/logout", response_model=MessageResponse)
async def logout(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Invalidate the current session."""
    if credentials is None:
        return MessageResponse(message="Already logged out")

    payload = verify_token(credentials.credentials)
    if payload and payload.get("jti"):
        invalidate_session(db, payload["jti"])
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    return current_user


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[DbSession, Depends(get_db)],
) -> TokenResponse:
    """Exchange a valid token for a fresh one."""
    if credentials is None:
        raise Unauthenticated()
    return _token_response(refresh_session(db, credentials.credentials))

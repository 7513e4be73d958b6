"""Pydantic models for authentication and user management."""
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from academy.models.db.user import UserRole


class UserRegister(BaseModel):
    """User registration request."""

    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=100)


class UserLogin(BaseModel):
    """User login request."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int


class UserResponse(BaseModel):
    """User response (public info)."""

    id: int
    username: str
    email: str
    role: UserRole
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str


class ProfileResponse(BaseModel):
    """User profile response."""

    id: int
    username: str
    email: str
    display_name: str | None
    bio: str | None
    role: UserRole
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class ProfileUpdateRequest(BaseModel):
    """Profile update request."""

    display_name: str | None = Field(None, max_length=100)
    bio: str | None = Field(None, max_length=2000)


class AdminUserResponse(BaseModel):
    """User row in the admin user list."""

    id: int
    username: str
    email: str
    display_name: str | None
    role: UserRole
    is_active: bool
    created_at: datetime
    last_login: datetime | None
    course_count: int = 0
    certificate_count: int = 0


class RoleUpdateRequest(BaseModel):
    """Change a user's role (admin only)."""

    role: UserRole


class StatusUpdateRequest(BaseModel):
    """Activate or deactivate a user (admin only)."""

    is_active: bool


class FollowStatusResponse(BaseModel):
    """Whether the current user follows another user."""

    is_following: bool
    followed_at: datetime | None = None


class FollowUserResponse(BaseModel):
    """Entry in a followers or following list."""

    id: int
    username: str
    display_name: str | None
    followed_at: datetime


class FollowListResponse(BaseModel):
    users: list[FollowUserResponse]

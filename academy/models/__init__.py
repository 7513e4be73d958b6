"""Pydantic models."""
from academy.models.auth import (
    AdminUserResponse,
    FollowListResponse,
    FollowStatusResponse,
    FollowUserResponse,
    MessageResponse,
    ProfileResponse,
    ProfileUpdateRequest,
    RoleUpdateRequest,
    StatusUpdateRequest,
    TokenResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from academy.models.certificates import CertificateResponse, CertificateVerification
from academy.models.contents import (
    ContentCreate,
    ContentResponse,
    ContentUpdate,
    RenderedContent,
    ReorderRequest,
)
from academy.models.courses import (
    CourseCreate,
    CourseDetail,
    CourseSummary,
    EnrollmentResponse,
)
from academy.models.quiz import QuizPayload, QuizQuestion

__all__ = [
    "AdminUserResponse",
    "CertificateResponse",
    "CertificateVerification",
    "ContentCreate",
    "ContentResponse",
    "ContentUpdate",
    "CourseCreate",
    "CourseDetail",
    "CourseSummary",
    "EnrollmentResponse",
    "FollowListResponse",
    "FollowStatusResponse",
    "FollowUserResponse",
    "MessageResponse",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "QuizPayload",
    "QuizQuestion",
    "RenderedContent",
    "ReorderRequest",
    "RoleUpdateRequest",
    "StatusUpdateRequest",
    "TokenResponse",
    "UserLogin",
    "UserRegister",
    "UserResponse",
]

"""Course-related Pydantic models."""
from datetime import datetime

from pydantic import BaseModel, Field


class CourseCreate(BaseModel):
    """Model for creating a course."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    startDate: datetime | None = None
    endDate: datetime | None = None
    price: float | None = Field(None, ge=0)
    currency: str | None = Field(None, min_length=3, max_length=3)
    maxStudents: int | None = Field(None, ge=1)


class CourseSummary(BaseModel):
    """Course list entry."""

    id: str
    title: str
    instructor: str
    duration: str
    startDate: str | None
    endDate: str | None
    category: str | None
    participants: int


class CourseDetail(BaseModel):
    """Single course as seen by enrolled users."""

    id: str
    name: str
    description: str | None
    instructorId: int
    createdAt: datetime
    updatedAt: datetime


class EnrollmentResponse(BaseModel):
    courseId: str
    userId: int
    enrolledAt: datetime

"""Course endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session as DbSession

from academy.database import get_db
from academy.dependencies.auth import get_current_user
from academy.errors import Forbidden
from academy.models import CourseCreate, CourseDetail, CourseSummary, EnrollmentResponse, MessageResponse
from academy.models.db.user import User
from academy.services import course_service

router = APIRouter(prefix="/api/courses", tags=["courses"])


@router.get("", response_model=list[CourseSummary])
def list_courses(
    db: Annotated[DbSession, Depends(get_db)],
) -> list[CourseSummary]:
    """List all courses."""
    return course_service.list_courses(db)


@router.post("", response_model=CourseDetail, status_code=status.HTTP_201_CREATED)
def create_course(
    payload: CourseCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> CourseDetail:
    """Create a course taught by the current user."""
    course = course_service.create_course(db, payload, current_user)
    return course_service.to_detail(course)


@router.get("/{course_id}", response_model=CourseDetail)
def get_course(
    course_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> CourseDetail:
    """Course details for enrolled users, the instructor and admins."""
    course = course_service.get_course(db, course_id)
    if not course_service.can_view_course(db, current_user, course):
        raise Forbidden("You are not enrolled in this course")
    return course_service.to_detail(course)


@router.delete("/{course_id}", response_model=MessageResponse)
def delete_course(
    course_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> MessageResponse:
    """Delete a course with all its contents, enrollments and certificates."""
    course = course_service.get_course(db, course_id)
    course_service.require_editor(current_user, course)
    course_service.delete_course(db, course)
    return MessageResponse(message="Course deleted successfully")


@router.post("/{course_id}/enroll", response_model=EnrollmentResponse)
def enroll(
    course_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> EnrollmentResponse:
    enrollment = course_service.enroll(db, current_user, course_id)
    return EnrollmentResponse(
        courseId=enrollment.course_id,
        userId=enrollment.user_id,
        enrolledAt=enrollment.enrolled_at,
    )

"""Course lifecycle: listing, creation, access checks, enrollment, deletion."""
import logging
import math

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DbSession, joinedload

from academy.errors import Forbidden, NotFound, ValidationError
from academy.models.courses import CourseCreate, CourseDetail, CourseSummary
from academy.models.db import Certificate, Course, CourseContent, Enrollment, Lesson, User

logger = logging.getLogger(__name__)


def get_course(db: DbSession, course_id: str) -> Course:
    """Get a course or raise ``NotFound``."""
    course = db.get(Course, course_id)
    if course is None:
        raise NotFound("Course not found")
    return course


def is_enrolled(db: DbSession, user_id: int, course_id: str) -> bool:
    stmt = select(Enrollment.id).where(
        Enrollment.user_id == user_id, Enrollment.course_id == course_id
    )
    return db.execute(stmt).first() is not None


def can_edit_course(user: User | None, course: Course) -> bool:
    """Instructor of the course or an admin."""
    return user is not None and (user.is_admin or course.instructor_id == user.id)


def require_editor(user: User, course: Course) -> None:
    if not can_edit_course(user, course):
        raise Forbidden("Only the course instructor can modify this course")


def can_view_course(db: DbSession, user: User, course: Course) -> bool:
    return can_edit_course(user, course) or is_enrolled(db, user.id, course.id)


def _duration_label(course: Course) -> str:
    if course.start_date and course.end_date:
        days = (course.end_date - course.start_date).total_seconds() / 86400
        return f"{math.ceil(days / 7)} weeks"
    return "Flexible"


def list_courses(db: DbSession) -> list[CourseSummary]:
    """All courses with instructor name and participant count."""
    participants = (
        select(Enrollment.course_id, func.count(Enrollment.id).label("count"))
        .group_by(Enrollment.course_id)
        .subquery()
    )
    stmt = (
        select(Course, func.coalesce(participants.c.count, 0))
        .options(joinedload(Course.instructor))
        .outerjoin(participants, participants.c.course_id == Course.id)
        .order_by(Course.created_at.desc())
    )
    summaries = []
    for course, count in db.execute(stmt).all():
        summaries.append(
            CourseSummary(
                id=course.id,
                title=course.title,
                instructor=course.instructor.full_name,
                duration=_duration_label(course),
                startDate=course.start_date.date().isoformat() if course.start_date else None,
                endDate=course.end_date.date().isoformat() if course.end_date else None,
                category=course.description,
                participants=count,
            )
        )
    return summaries


def to_detail(course: Course) -> CourseDetail:
    return CourseDetail(
        id=course.id,
        name=course.title,
        description=course.description,
        instructorId=course.instructor_id,
        createdAt=course.created_at,
        updatedAt=course.updated_at,
    )


def create_course(db: DbSession, data: CourseCreate, instructor: User) -> Course:
    if data.startDate and data.endDate and data.endDate < data.startDate:
        raise ValidationError("End date must not be before start date", field="endDate")

    course = Course(
        title=data.title.strip(),
        description=data.description,
        instructor_id=instructor.id,
        start_date=data.startDate,
        end_date=data.endDate,
        price=data.price,
        currency=data.currency.upper() if data.currency else None,
        max_students=data.maxStudents,
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    logger.info("Course %s created by user %s", course.id, instructor.id)
    return course


def enroll(db: DbSession, user: User, course_id: str) -> Enrollment:
    """Enroll ``user``; enrolling twice returns the existing enrollment."""
    course = get_course(db, course_id)
    stmt = select(Enrollment).where(
        Enrollment.user_id == user.id, Enrollment.course_id == course.id
    )
    existing = db.execute(stmt).scalar_one_or_none()
    if existing:
        return existing

    if course.max_students is not None:
        taken = db.execute(
            select(func.count(Enrollment.id)).where(Enrollment.course_id == course.id)
        ).scalar_one()
        if taken >= course.max_students:
            raise ValidationError("Course is full")

    enrollment = Enrollment(user_id=user.id, course_id=course.id)
    db.add(enrollment)
    db.commit()
    db.refresh(enrollment)
    return enrollment


def delete_course(db: DbSession, course: Course) -> None:
    """Delete a course and everything hanging off it in one transaction."""
    course_id = course.id
    try:
        db.execute(delete(Certificate).where(Certificate.course_id == course_id))
        db.execute(delete(Enrollment).where(Enrollment.course_id == course_id))
        db.execute(delete(Lesson).where(Lesson.course_id == course_id))
        db.execute(
            delete(CourseContent).where(
                CourseContent.course_id == course_id,
                CourseContent.parent_id.is_not(None),
            )
        )
        db.execute(delete(CourseContent).where(CourseContent.course_id == course_id))
        db.delete(course)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete course %s", course_id)
        raise
    logger.info("Course %s deleted", course_id)

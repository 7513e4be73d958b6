"""Database models."""
from academy.models.db.user import User, Session, UserRole, Follow
from academy.models.db.course import Course, Enrollment, Lesson
from academy.models.db.content import ContentType, CourseContent
from academy.models.db.certificate import Certificate

__all__ = [
    "User",
    "Session",
    "UserRole",
    "Follow",
    "Course",
    "Enrollment",
    "Lesson",
    "ContentType",
    "CourseContent",
    "Certificate",
]

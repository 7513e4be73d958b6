"""
Course content node model.

Nodes form a two-level tree: rows with ``parent_id`` NULL are main topics,
rows pointing at a main topic are its sub-topics.
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from academy.database import Base
from academy.models.db.course import new_id


class ContentType(str, enum.Enum):
    """Kind of payload stored in ``CourseContent.content``."""

    TEXT = "TEXT"  # rich-text HTML
    VIDEO = "VIDEO"  # video URL
    AUDIO = "AUDIO"  # audio URL
    H5P = "H5P"  # H5P embed id
    QUIZ = "QUIZ"  # serialized quiz payload


class CourseContent(Base):
    """A main topic or sub-topic inside a course."""

    __tablename__ = "course_contents"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    course_id: Mapped[str] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    parent_id: Mapped[str | None] = mapped_column(
        ForeignKey("course_contents.id", ondelete="CASCADE"), nullable=True, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(
        String(10), default=ContentType.TEXT.value, nullable=False
    )
    content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    order: Mapped[int] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    @property
    def is_main_topic(self) -> bool:
        return self.parent_id is None

    @property
    def content_type(self) -> ContentType:
        return ContentType(self.type)

    def __repr__(self) -> str:
        return (
            f"<CourseContent(id='{self.id}', parent_id={self.parent_id!r}, "
            f"order={self.order}, type='{self.type}')>"
        )

"""Course content Pydantic models."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from academy.models.db.content import ContentType
from academy.models.quiz import QuizPayload


class ContentCreate(BaseModel):
    """Model for adding a main topic or sub-topic."""

    title: str = Field(..., min_length=1, max_length=255)
    type: ContentType = ContentType.TEXT
    content: str | QuizPayload | None = None
    order: int | None = Field(None, ge=0)
    parentId: str | None = None


class ContentUpdate(BaseModel):
    """Partial update of a content node."""

    title: str | None = Field(None, min_length=1, max_length=255)
    type: ContentType | None = None
    content: str | QuizPayload | None = None
    order: int | None = Field(None, ge=0)


class ReorderRequest(BaseModel):
    """Move a node one slot up or down among its siblings."""

    direction: Literal["up", "down"]
    mainContentId: str | None = None


class ContentResponse(BaseModel):
    """Content node as returned to clients."""

    id: str
    courseId: str
    parentId: str | None
    title: str
    type: ContentType
    content: str
    order: int
    createdAt: datetime | None = None
    updatedAt: datetime | None = None
    subContents: list[ContentResponse] | None = None


class RenderedContent(BaseModel):
    """Render instruction for a single content node.

    ``kind`` tells the client which widget to use. Only the fields that
    belong to that widget are set.
    """

    kind: Literal["html", "video", "audio", "h5p", "quiz", "notice"]
    contentId: str
    title: str
    html: str | None = None
    src: str | None = None
    quiz: QuizPayload | None = None
    notice: str | None = None

"""Turn a stored content node into a render instruction for the client.

Each content type has exactly one render function; ``render_content``
dispatches through ``RENDERERS``, which covers every ``ContentType``.
"""
import logging
from typing import Callable

import bleach

from academy.content import codec, embed
from academy.errors import MalformedPayload
from academy.models.contents import RenderedContent
from academy.models.db.content import ContentType, CourseContent
from academy.models.quiz import QuizPayload

logger = logging.getLogger(__name__)

ALLOWED_TAGS = {
    "p", "br", "strong", "em", "u", "h1", "h2", "h3", "h4", "h5", "h6",
    "ul", "ol", "li", "a", "img", "blockquote", "code", "pre", "span", "div",
}
ALLOWED_ATTRIBUTES = {
    "*": ["class"],
    "a": ["href", "target", "rel"],
    "img": ["src", "alt"],
}
ALLOWED_PROTOCOLS = {"http", "https", "mailto"}

UNSAFE_VIDEO_NOTICE = "This video URL is unsupported for security reasons."
UNSAFE_AUDIO_NOTICE = "This audio URL is unsupported for security reasons."
INVALID_H5P_NOTICE = "This interactive content id is invalid."
BROKEN_QUIZ_NOTICE = "This quiz could not be loaded."
EMPTY_QUIZ_NOTICE = "This quiz has no questions yet."


def sanitize_html(html: str) -> str:
    """Strip tags and attributes outside the rich-text allow-list."""
    return bleach.clean(
        html or "",
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
    )


def _notice(node: CourseContent, message: str) -> RenderedContent:
    return RenderedContent(
        kind="notice", contentId=node.id, title=node.title, notice=message
    )


def _quiz(node: CourseContent, payload: QuizPayload) -> RenderedContent:
    if not payload.questions:
        return _notice(node, EMPTY_QUIZ_NOTICE)
    return RenderedContent(kind="quiz", contentId=node.id, title=node.title, quiz=payload)


def render_text(node: CourseContent) -> RenderedContent:
    legacy = codec.sniff_legacy_quiz(node.content)
    if legacy is not None:
        logger.info("Rendering TEXT content %s as a legacy quiz", node.id)
        return _quiz(node, legacy)
    return RenderedContent(
        kind="html", contentId=node.id, title=node.title, html=sanitize_html(node.content)
    )


def render_video(node: CourseContent) -> RenderedContent:
    src = embed.video_embed_url(node.content)
    if src is None:
        return _notice(node, UNSAFE_VIDEO_NOTICE)
    return RenderedContent(kind="video", contentId=node.id, title=node.title, src=src)


def render_audio(node: CourseContent) -> RenderedContent:
    src = embed.audio_source_url(node.content)
    if src is None:
        return _notice(node, UNSAFE_AUDIO_NOTICE)
    return RenderedContent(kind="audio", contentId=node.id, title=node.title, src=src)


def render_h5p(node: CourseContent) -> RenderedContent:
    src = embed.h5p_embed_url(node.content)
    if src is None:
        return _notice(node, INVALID_H5P_NOTICE)
    return RenderedContent(kind="h5p", contentId=node.id, title=node.title, src=src)


def render_quiz(node: CourseContent) -> RenderedContent:
    try:
        payload = codec.decode_quiz(node.content)
    except MalformedPayload as exc:
        logger.error("Malformed quiz payload in content %s: %s", node.id, exc)
        return _notice(node, BROKEN_QUIZ_NOTICE)
    return _quiz(node, payload)


RENDERERS: dict[ContentType, Callable[[CourseContent], RenderedContent]] = {
    ContentType.TEXT: render_text,
    ContentType.VIDEO: render_video,
    ContentType.AUDIO: render_audio,
    ContentType.H5P: render_h5p,
    ContentType.QUIZ: render_quiz,
}


def render_content(node: CourseContent) -> RenderedContent:
    """Render one node; never raises for bad stored payloads."""
    return RENDERERS[node.content_type](node)

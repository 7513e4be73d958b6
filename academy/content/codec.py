"""Encode and decode the ``content`` column of course content nodes.

TEXT, VIDEO, AUDIO and H5P payloads are plain strings stored verbatim.
QUIZ payloads are ``QuizPayload`` objects stored as JSON.
"""
import logging
from typing import Callable, Union

from pydantic import ValidationError as PydanticValidationError

from academy.errors import MalformedPayload
from academy.models.db.content import ContentType
from academy.models.quiz import QuizPayload

logger = logging.getLogger(__name__)

# Marker left by the old editor when a quiz was saved into a TEXT node
LEGACY_QUIZ_MARKER = '"questions":['

Payload = Union[str, QuizPayload]


def _encode_string(value: object) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"expected a string payload, got {type(value).__name__}")
    return value


def _decode_string(raw: str) -> str:
    return raw or ""


def encode_quiz(value: object) -> str:
    """Serialize a quiz payload (model, dict or JSON string) to JSON."""
    if isinstance(value, QuizPayload):
        payload = value
    elif isinstance(value, str):
        payload = decode_quiz(value)
    elif isinstance(value, dict):
        try:
            payload = QuizPayload.model_validate(value)
        except PydanticValidationError as exc:
            raise MalformedPayload(str(exc)) from exc
    else:
        raise MalformedPayload(f"cannot encode {type(value).__name__} as a quiz")
    return payload.model_dump_json()


def decode_quiz(raw: str) -> QuizPayload:
    """Parse stored quiz JSON.

    Raises:
        MalformedPayload: invalid JSON or missing/invalid fields.
    """
    if not raw or not raw.strip():
        raise MalformedPayload("quiz payload is empty")
    try:
        return QuizPayload.model_validate_json(raw)
    except PydanticValidationError as exc:
        raise MalformedPayload(str(exc)) from exc


_ENCODERS: dict[ContentType, Callable[[object], str]] = {
    ContentType.TEXT: _encode_string,
    ContentType.VIDEO: _encode_string,
    ContentType.AUDIO: _encode_string,
    ContentType.H5P: _encode_string,
    ContentType.QUIZ: encode_quiz,
}

_DECODERS: dict[ContentType, Callable[[str], Payload]] = {
    ContentType.TEXT: _decode_string,
    ContentType.VIDEO: _decode_string,
    ContentType.AUDIO: _decode_string,
    ContentType.H5P: _decode_string,
    ContentType.QUIZ: decode_quiz,
}


def encode(content_type: ContentType | str, value: object) -> str:
    """Turn a typed value into the string stored in the database."""
    return _ENCODERS[ContentType(content_type)](value)


def decode(content_type: ContentType | str, raw: str) -> Payload:
    """Inverse of :func:`encode`."""
    return _DECODERS[ContentType(content_type)](raw)


def looks_like_legacy_quiz(raw: str | None) -> bool:
    return bool(raw) and LEGACY_QUIZ_MARKER in raw


def sniff_legacy_quiz(raw: str | None) -> QuizPayload | None:
    """Return the quiz hidden in a TEXT payload, or ``None``.

    Quizzes written by an older editor ended up in TEXT nodes. Only
    payloads carrying the JSON ``"questions":[`` marker are tried.
    """
    if not looks_like_legacy_quiz(raw):
        return None
    try:
        return decode_quiz(raw)
    except MalformedPayload:
        logger.debug("TEXT payload carries quiz marker but is not a quiz")
        return None

"""Error taxonomy shared by services and routes.

HTTP-facing errors subclass ``HTTPException`` so services can raise them
directly and FastAPI turns them into responses. ``MalformedPayload`` and
``InvalidTransition`` never reach the client as HTTP errors.
"""
from fastapi import HTTPException, status


class Unauthenticated(HTTPException):
    """No valid session."""

    def __init__(self, detail: str = "Not authenticated") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(HTTPException):
    """Authenticated, but not the owner, instructor or an admin."""

    def __init__(self, detail: str = "Access denied") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    """Referenced resource does not exist."""

    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ValidationError(HTTPException):
    """Request is well-formed JSON but semantically invalid."""

    def __init__(self, detail: str, field: str | None = None) -> None:
        body: str | dict[str, str] = detail
        if field is not None:
            body = {"field": field, "message": detail}
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=body)


class InvalidMove(HTTPException):
    """Reorder past the start or end of a sibling list."""

    def __init__(self, detail: str = "Cannot move content further") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class MalformedPayload(ValueError):
    """Stored quiz JSON could not be parsed into a quiz payload."""


class InvalidTransition(RuntimeError):
    """Quiz runtime action not allowed in the current phase."""

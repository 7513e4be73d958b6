"""Swap-based reordering of content nodes within a sibling group."""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DbSession

from academy.content.tree import find_swap_partner
from academy.errors import NotFound
from academy.services.content_service import get_content, get_siblings

logger = logging.getLogger(__name__)


def move(
    db: DbSession,
    course_id: str,
    content_id: str,
    direction: str,
    main_content_id: str | None = None,
) -> None:
    """Swap ``content_id`` with its previous (up) or next (down) sibling.

    ``main_content_id`` names the main topic whose sub-topics are being
    reordered; ``None`` reorders the main topics themselves.

    Raises:
        NotFound: node is not part of the selected sibling group.
        InvalidMove: node is already first or last; nothing is changed.
    """
    if main_content_id is not None:
        get_content(db, course_id, main_content_id)

    siblings = get_siblings(db, course_id, main_content_id, for_update=True)
    if not siblings:
        raise NotFound("Content not found")
    node, neighbour = find_swap_partner(siblings, content_id, direction)

    try:
        node.order, neighbour.order = neighbour.order, node.order
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to reorder content %s %s", content_id, direction)
        raise
    logger.debug("Moved content %s %s (now order %d)", content_id, direction, node.order)


def move_up(db: DbSession, course_id: str, content_id: str, main_content_id: str | None = None) -> None:
    move(db, course_id, content_id, "up", main_content_id)


def move_down(db: DbSession, course_id: str, content_id: str, main_content_id: str | None = None) -> None:
    move(db, course_id, content_id, "down", main_content_id)

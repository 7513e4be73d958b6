"""Client-local tracking of visited content nodes.

The visited set lives on the learner's machine only, as a JSON document of
the form ``{course_id: {content_id: true}}``. Completion is derived from a
content tree snapshot (see ``academy.content.tree``).
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from academy.config import PROGRESS_DIR, PROGRESS_FILE_NAME
from academy.content.tree import TreeNode
from academy.utils.json_utils import read_json_file, write_json_file

logger = logging.getLogger(__name__)


class VisitedStore:
    """Storage backend for visited node ids, keyed by course."""

    def load(self) -> dict[str, dict[str, bool]]:
        raise NotImplementedError

    def save(self, pages: dict[str, dict[str, bool]]) -> None:
        raise NotImplementedError


class MemoryVisitedStore(VisitedStore):
    def __init__(self, pages: dict[str, dict[str, bool]] | None = None):
        self._pages = pages if pages is not None else {}

    def load(self) -> dict[str, dict[str, bool]]:
        return {course: dict(ids) for course, ids in self._pages.items()}

    def save(self, pages: dict[str, dict[str, bool]]) -> None:
        self._pages = {course: dict(ids) for course, ids in pages.items()}


class LocalVisitedStore(VisitedStore):
    """JSON file in the learner's profile directory."""

    def __init__(self, path: Path | None = None):
        self.path = path or PROGRESS_DIR / PROGRESS_FILE_NAME

    def load(self) -> dict[str, dict[str, bool]]:
        try:
            data = read_json_file(self.path, {})
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable progress file %s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring progress file %s with unexpected layout", self.path)
            return {}
        return {
            str(course): {str(node): True for node, seen in ids.items() if seen}
            for course, ids in data.items()
            if isinstance(ids, dict)
        }

    def save(self, pages: dict[str, dict[str, bool]]) -> None:
        write_json_file(self.path, pages)


@dataclass
class TopicStatus:
    """Progress of one main topic."""

    topic_id: str
    visited: int
    total: int

    @property
    def completed(self) -> bool:
        return self.visited == self.total

    @property
    def partially_completed(self) -> bool:
        return 0 < self.visited < self.total

    @property
    def percent(self) -> int:
        if not self.total:
            return 0
        return round(self.visited / self.total * 100)


class ProgressTracker:
    """Visited-page bookkeeping on top of a ``VisitedStore``."""

    def __init__(self, store: VisitedStore | None = None):
        self.store = store or LocalVisitedStore()

    def visited(self, course_id: str) -> set[str]:
        return set(self.store.load().get(course_id, {}))

    def is_visited(self, course_id: str, node_id: str) -> bool:
        return node_id in self.visited(course_id)

    def mark_visited(self, course_id: str, node_id: str) -> None:
        pages = self.store.load()
        pages.setdefault(course_id, {})[node_id] = True
        self.store.save(pages)

    def unmark_visited(self, course_id: str, node_id: str) -> None:
        pages = self.store.load()
        if node_id in pages.get(course_id, {}):
            del pages[course_id][node_id]
            self.store.save(pages)

    def toggle_visited(self, course_id: str, node_id: str) -> bool:
        """Flip the visited flag and return the new state."""
        if self.is_visited(course_id, node_id):
            self.unmark_visited(course_id, node_id)
            return False
        self.mark_visited(course_id, node_id)
        return True

    def topic_status(self, course_id: str, topic: TreeNode) -> TopicStatus:
        """A topic without sub-topics counts itself as its only page."""
        visited = self.visited(course_id)
        pages = [child.id for child in topic.children] or [topic.id]
        return TopicStatus(
            topic_id=topic.id,
            visited=sum(1 for page in pages if page in visited),
            total=len(pages),
        )

    def is_course_complete(self, course_id: str, tree: Sequence[TreeNode]) -> bool:
        """True when every main topic is complete; an empty course never is."""
        if not tree:
            return False
        return all(self.topic_status(course_id, topic).completed for topic in tree)

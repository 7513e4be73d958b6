import json
from pathlib import Path

from academy.content.tree import TreeNode
from academy.progress import LocalVisitedStore, MemoryVisitedStore, ProgressTracker


def _tree() -> list[TreeNode]:
    return [
        TreeNode(
            id="m1",
            title="Basics",
            order=1,
            children=[
                TreeNode(id="s1", title="Variables", order=1, parent_id="m1"),
                TreeNode(id="s2", title="Loops", order=2, parent_id="m1"),
            ],
        ),
        TreeNode(
            id="m2",
            title="Advanced",
            order=2,
            children=[
                TreeNode(id="s3", title="Classes", order=1, parent_id="m2"),
                TreeNode(id="s4", title="Generators", order=2, parent_id="m2"),
            ],
        ),
    ]


def test_course_complete_only_when_every_subtopic_visited() -> None:
    tracker = ProgressTracker(MemoryVisitedStore())
    tree = _tree()
    for node_id in ("s1", "s2", "s3"):
        tracker.mark_visited("c1", node_id)
    assert tracker.is_course_complete("c1", tree) is False

    tracker.mark_visited("c1", "s4")
    assert tracker.is_course_complete("c1", tree) is True


def test_toggle_flips_state() -> None:
    tracker = ProgressTracker(MemoryVisitedStore())
    assert tracker.toggle_visited("c1", "s1") is True
    assert tracker.is_visited("c1", "s1")
    assert tracker.toggle_visited("c1", "s1") is False
    assert not tracker.is_visited("c1", "s1")


def test_courses_are_tracked_separately() -> None:
    tracker = ProgressTracker(MemoryVisitedStore())
    tracker.mark_visited("c1", "s1")
    assert not tracker.is_visited("c2", "s1")
    tracker.unmark_visited("c2", "s1")
    assert tracker.is_visited("c1", "s1")


def test_topic_status_partial_and_leaf_topics() -> None:
    tracker = ProgressTracker(MemoryVisitedStore())
    basics, advanced = _tree()
    tracker.mark_visited("c1", "s1")

    status = tracker.topic_status("c1", basics)
    assert (status.visited, status.total) == (1, 2)
    assert status.partially_completed
    assert not status.completed
    assert status.percent == 50

    leaf = TreeNode(id="m3", title="Wrap up", order=3)
    assert not tracker.topic_status("c1", leaf).completed
    tracker.mark_visited("c1", "m3")
    assert tracker.topic_status("c1", leaf).completed


def test_empty_course_is_never_complete() -> None:
    tracker = ProgressTracker(MemoryVisitedStore())
    assert tracker.is_course_complete("c1", []) is False


def test_local_store_persists_json(tmp_path: Path) -> None:
    path = tmp_path / "profile" / "visited_pages.json"
    ProgressTracker(LocalVisitedStore(path)).mark_visited("c1", "s1")

    assert json.loads(path.read_text(encoding="utf-8")) == {"c1": {"s1": True}}
    assert ProgressTracker(LocalVisitedStore(path)).is_visited("c1", "s1")


def test_local_store_ignores_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "visited_pages.json"
    path.write_text("{not json", encoding="utf-8")
    tracker = ProgressTracker(LocalVisitedStore(path))

    assert tracker.visited("c1") == set()
    tracker.mark_visited("c1", "s1")
    assert tracker.is_visited("c1", "s1")


def test_memory_store_keeps_the_given_pages() -> None:
    seeded = MemoryVisitedStore({"c1": {"s1": True}})
    assert ProgressTracker(seeded).is_visited("c1", "s1")

    pages: dict[str, dict[str, bool]] = {}
    empty = MemoryVisitedStore(pages)
    assert empty._pages is pages
    assert ProgressTracker(empty).visited("c1") == set()

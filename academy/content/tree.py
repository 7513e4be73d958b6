"""Pure helpers over a snapshot of a course's content nodes.

Work on any objects exposing ``id``, ``title``, ``order`` and ``parent_id``
(ORM rows, or nodes parsed from an API response).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from academy.errors import InvalidMove, NotFound


@dataclass
class TreeNode:
    """Main topic or sub-topic in a two-level content tree."""

    id: str
    title: str
    order: int
    parent_id: str | None = None
    children: list[TreeNode] = field(default_factory=list)
    source: Any = field(default=None, repr=False, compare=False)

    @property
    def is_main_topic(self) -> bool:
        return self.parent_id is None


def sort_siblings(nodes: Iterable[Any]) -> list[Any]:
    """Order a sibling group by ``order``; there is no secondary key."""
    return sorted(nodes, key=lambda node: node.order)


def build_tree(nodes: Iterable[Any]) -> list[TreeNode]:
    """Group sub-topics under their main topic.

    Sub-topics whose parent is missing, or is itself a sub-topic, are
    dropped.
    """
    nodes = list(nodes)
    topics: dict[str, TreeNode] = {}
    for node in sort_siblings(n for n in nodes if n.parent_id is None):
        topics[node.id] = TreeNode(
            id=node.id, title=node.title, order=node.order, source=node
        )

    for node in sort_siblings(n for n in nodes if n.parent_id is not None):
        parent = topics.get(node.parent_id)
        if parent is None:
            continue
        parent.children.append(
            TreeNode(
                id=node.id,
                title=node.title,
                order=node.order,
                parent_id=node.parent_id,
                source=node,
            )
        )

    return list(topics.values())


def tree_from_json(data: Sequence[dict[str, Any]]) -> list[TreeNode]:
    """Rebuild a tree from ``GET /contents`` output (``subContents`` nested)."""
    topics = []
    for item in data:
        topic = TreeNode(
            id=str(item["id"]),
            title=str(item.get("title", "")),
            order=int(item.get("order", 0)),
        )
        for child in item.get("subContents") or []:
            topic.children.append(
                TreeNode(
                    id=str(child["id"]),
                    title=str(child.get("title", "")),
                    order=int(child.get("order", 0)),
                    parent_id=topic.id,
                )
            )
        topic.children.sort(key=lambda node: node.order)
        topics.append(topic)
    topics.sort(key=lambda node: node.order)
    return topics


def find_swap_partner(siblings: Sequence[Any], node_id: str, direction: str) -> tuple[Any, Any]:
    """Locate ``node_id`` and the neighbour it swaps with.

    Raises:
        NotFound: node is not in this sibling group.
        InvalidMove: node is already first (up) or last (down).
    """
    ordered = sort_siblings(siblings)
    index = next((i for i, node in enumerate(ordered) if node.id == node_id), None)
    if index is None:
        raise NotFound("Content not found")

    if direction == "up":
        target = index - 1
    elif direction == "down":
        target = index + 1
    else:
        raise ValueError(f"unknown direction: {direction!r}")

    if target < 0 or target >= len(ordered):
        raise InvalidMove()
    return ordered[index], ordered[target]


def next_order(siblings: Sequence[Any]) -> int:
    """Order value for a node appended to a sibling group."""
    return max((node.order for node in siblings), default=0) + 1


def contiguous_orders(siblings: Sequence[Any], start: int = 1) -> list[tuple[Any, int]]:
    """Pairs of (node, new order) closing gaps, only for nodes that change."""
    changes = []
    for position, node in enumerate(sort_siblings(siblings), start=start):
        if node.order != position:
            changes.append((node, position))
    return changes

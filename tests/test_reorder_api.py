import pytest
from sqlalchemy import select

from academy.errors import InvalidMove
from academy.models.db import CourseContent
from academy.services import ordering_service


@pytest.fixture
def topics(make_node):
    main_a = make_node("A", 1)
    main_b = make_node("B", 2)
    main_c = make_node("C", 3)
    subs = [make_node(f"A.{i}", i, main_a) for i in (1, 2, 3)]
    return main_a, main_b, main_c, subs


def _group(db, course_id, parent_id=None) -> list[tuple[str, int]]:
    db.expire_all()
    stmt = select(CourseContent).where(CourseContent.course_id == course_id)
    if parent_id is None:
        stmt = stmt.where(CourseContent.parent_id.is_(None))
    else:
        stmt = stmt.where(CourseContent.parent_id == parent_id)
    stmt = stmt.order_by(CourseContent.order)
    return [(node.title, node.order) for node in db.execute(stmt).scalars()]


def _reorder(client, course, node, direction, headers, main=None):
    return client.put(
        f"/api/courses/{course.id}/contents/{node.id}/reorder",
        json={"direction": direction, "mainContentId": main.id if main else None},
        headers=headers,
    )


def test_move_main_topic_down(client, db, course, instructor, topics) -> None:
    _, headers = instructor
    main_a = topics[0]

    response = _reorder(client, course, main_a, "down", headers)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert _group(db, course.id) == [("B", 1), ("A", 2), ("C", 3)]


def test_move_sub_topic_up_within_its_parent(client, db, course, instructor, topics) -> None:
    _, headers = instructor
    main_a, _, _, subs = topics

    response = _reorder(client, course, subs[2], "up", headers, main=main_a)

    assert response.status_code == 200
    assert _group(db, course.id, main_a.id) == [("A.1", 1), ("A.3", 2), ("A.2", 3)]
    assert _group(db, course.id) == [("A", 1), ("B", 2), ("C", 3)]


@pytest.mark.parametrize(("index", "direction"), [(0, "up"), (2, "down")])
def test_boundary_move_is_rejected_without_changes(client, db, course, instructor, topics, index, direction) -> None:
    _, headers = instructor
    before = _group(db, course.id)

    response = _reorder(client, course, topics[index], direction, headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot move content further"
    assert _group(db, course.id) == before


def test_up_then_down_restores_order(client, db, course, instructor, topics) -> None:
    _, headers = instructor
    main_a, _, _, subs = topics
    before = _group(db, course.id, main_a.id)

    assert _reorder(client, course, subs[1], "up", headers, main=main_a).status_code == 200
    assert _reorder(client, course, subs[1], "down", headers, main=main_a).status_code == 200

    assert _group(db, course.id, main_a.id) == before


def test_orders_stay_unique_after_many_moves(client, db, course, instructor, topics) -> None:
    _, headers = instructor
    main_a, main_b, main_c, _ = topics
    for node, direction in [(main_c, "up"), (main_c, "up"), (main_a, "down"), (main_b, "down")]:
        _reorder(client, course, node, direction, headers)

    orders = [order for _, order in _group(db, course.id)]
    assert sorted(orders) == [1, 2, 3]


def test_node_outside_named_group_is_404(client, course, instructor, topics) -> None:
    _, headers = instructor
    main_a, main_b, _, _ = topics
    response = _reorder(client, course, main_b, "up", headers, main=main_a)
    assert response.status_code == 404


def test_reorder_requires_instructor(client, course, enrolled_student, topics) -> None:
    _, headers = enrolled_student
    response = _reorder(client, course, topics[1], "up", headers)
    assert response.status_code == 403


def test_invalid_direction_is_422(client, course, instructor, topics) -> None:
    _, headers = instructor
    response = client.put(
        f"/api/courses/{course.id}/contents/{topics[0].id}/reorder",
        json={"direction": "sideways"},
        headers=headers,
    )
    assert response.status_code == 422


def test_move_helpers_swap_sub_topics(db, course, topics) -> None:
    main_a, _, _, subs = topics

    ordering_service.move_down(db, course.id, subs[0].id, main_a.id)
    assert _group(db, course.id, main_a.id) == [("A.2", 1), ("A.1", 2), ("A.3", 3)]

    ordering_service.move_up(db, course.id, subs[0].id, main_a.id)
    assert _group(db, course.id, main_a.id) == [("A.1", 1), ("A.2", 2), ("A.3", 3)]

    with pytest.raises(InvalidMove):
        ordering_service.move_up(db, course.id, subs[0].id, main_a.id)

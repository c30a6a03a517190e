"""
Course store: tree mutations behind the outline's edit controls.

Why:
    Moving, merging and adding sections must keep the section set a forest
    with stable sibling order; these are the invariants the renderer takes
    for granted.
"""

from __future__ import annotations

import pytest

from backend.flexsections.domain import CollapsedState
from backend.flexsections.store import CourseStore


@pytest.fixture
def tree(store: CourseStore) -> CourseStore:
    """Root with A(1) -> [A1(3), A2(4)] and B(2)."""
    store.create_course("c1", "Physics")
    a = store.add_section("c1", 0, name="A")
    store.add_section("c1", 0, name="B")
    store.add_section("c1", a.number, name="A1")
    store.add_section("c1", a.number, name="A2")
    return store


def test_create_course_adds_root_section(store: CourseStore) -> None:
    course = store.create_course("c1", "Physics")
    root = store.section("c1", 0)
    assert root.parent is None and root.is_root
    assert store.children("c1", 0) == []
    assert course.marker == 0
    with pytest.raises(ValueError):
        store.create_course("c1", "Again")


def test_add_section_numbers_and_orders_children(tree: CourseStore) -> None:
    assert tree.children("c1", 0) == [1, 2]
    assert tree.children("c1", 1) == [3, 4]
    new = tree.add_section("c1", 1, name="A0", before=3)
    assert new.number == 5
    assert tree.children("c1", 1) == [5, 3, 4]


def test_unknown_course_or_section_raises_lookup_error(tree: CourseStore) -> None:
    with pytest.raises(LookupError):
        tree.get("missing")
    with pytest.raises(LookupError):
        tree.section("c1", 42)
    with pytest.raises(LookupError):
        tree.add_section("c1", 42)


def test_invalid_summary_format_is_rejected(tree: CourseStore) -> None:
    with pytest.raises(ValueError):
        tree.add_section("c1", 0, summary_format="rtf")


def test_move_section_to_other_parent_before_sibling(tree: CourseStore) -> None:
    tree.start_moving("c1", 2)
    moved = tree.move_section("c1", 2, 1, before=4)
    assert moved.parent == 1
    assert tree.children("c1", 0) == [1]
    assert tree.children("c1", 1) == [3, 2, 4]
    assert tree.get("c1").moving_section is None


def test_move_section_to_end_of_parent(tree: CourseStore) -> None:
    tree.move_section("c1", 3, 0)
    assert tree.children("c1", 0) == [1, 2, 3]
    assert tree.children("c1", 1) == [4]


def test_move_in_front_of_itself_keeps_position(tree: CourseStore) -> None:
    tree.start_moving("c1", 3)
    tree.move_section("c1", 3, 1, before=3)
    assert tree.children("c1", 1) == [3, 4]
    assert tree.get("c1").moving_section is None


@pytest.mark.parametrize(
    "number, parent, before",
    [
        (0, 1, None),  # root cannot move
        (1, 1, None),  # into itself
        (1, 3, None),  # into its own subtree
        (2, 1, 2),  # "before" is not a child of the target parent
        (2, 0, 3),
    ],
)
def test_invalid_moves_are_refused(tree: CourseStore, number: int, parent: int, before) -> None:
    with pytest.raises(ValueError, match="invalid_move"):
        tree.move_section("c1", number, parent, before)
    assert tree.children("c1", 0) == [1, 2]
    assert tree.children("c1", 1) == [3, 4]


def test_is_descendant(tree: CourseStore) -> None:
    assert tree.is_descendant("c1", 3, 1)
    assert tree.is_descendant("c1", 3, 0)
    assert not tree.is_descendant("c1", 1, 3)
    assert not tree.is_descendant("c1", 2, 1)


def test_merge_up_moves_children_and_activities_into_parent(tree: CourseStore) -> None:
    tree.add_section("c1", 3, name="A1a")  # number 5
    tree.add_activity("c1", 3, "Lab", "assign")
    tree.add_activity("c1", 1, "Intro", "page")
    tree.set_marker("c1", 3)

    parent = tree.merge_up("c1", 3)

    assert parent.number == 1
    assert tree.children("c1", 1) == [5, 4]
    assert tree.section("c1", 5).parent == 1
    assert [a.name for a in tree.activities("c1", 1)] == ["Intro", "Lab"]
    assert tree.get("c1").course.marker == 0
    with pytest.raises(LookupError):
        tree.section("c1", 3)


def test_section_numbers_are_not_reused_after_merge(tree: CourseStore) -> None:
    tree.merge_up("c1", 4)

    added = tree.add_section("c1", 0, name="C")

    assert added.number == 5
    with pytest.raises(LookupError):
        tree.section("c1", 4)


def test_merge_up_root_is_refused(tree: CourseStore) -> None:
    with pytest.raises(ValueError, match="cannot_merge_root"):
        tree.merge_up("c1", 0)


def test_switch_collapsed_toggles(tree: CourseStore) -> None:
    assert tree.switch_collapsed("c1", 1) == CollapsedState.COLLAPSED
    assert tree.switch_collapsed("c1", 1) == CollapsedState.EXPANDED


def test_visibility_marker_and_moving_state(tree: CourseStore) -> None:
    tree.set_visibility("c1", 2, False)
    assert tree.section("c1", 2).visible is False
    with pytest.raises(ValueError):
        tree.set_visibility("c1", 0, False)

    tree.set_marker("c1", 2)
    assert tree.get("c1").course.marker == 2
    tree.set_marker("c1", 0)
    assert tree.get("c1").course.marker == 0

    tree.start_moving("c1", 4)
    assert tree.get("c1").moving_section == 4
    tree.cancel_moving("c1")
    assert tree.get("c1").moving_section is None
    with pytest.raises(ValueError):
        tree.start_moving("c1", 0)

from types import SimpleNamespace

import pytest

from gsd.core import list_invariants
from gsd.core.list_invariants import DeletionCompensation
from gsd.exceptions import InvariantViolation, NotFound


def make_list(list_id, order_index, kind="intermediate"):
    return SimpleNamespace(
        id=list_id,
        order_index=order_index,
        is_backlog=kind == "backlog",
        is_done=kind == "done",
    )


@pytest.fixture
def default_lists():
    return [
        make_list("backlog", 1000, "backlog"),
        make_list("today", 2000),
        make_list("done", 3000, "done"),
    ]


def test_done_list_can_never_be_deleted(default_lists):
    done = default_lists[2]
    assert not list_invariants.can_delete(done, default_lists)
    with pytest.raises(InvariantViolation) as exc:
        list_invariants.ensure_deletable(done, default_lists)
    assert exc.value.detail == "Cannot delete Done list"


def test_intermediate_list_is_always_deletable(default_lists):
    assert list_invariants.can_delete(default_lists[1], default_lists)


def test_last_backlog_is_deletable_only_with_an_intermediate_to_promote(default_lists):
    backlog = default_lists[0]
    assert list_invariants.can_delete(backlog, default_lists)

    without_intermediate = [backlog, default_lists[2]]
    assert not list_invariants.can_delete(backlog, without_intermediate)
    with pytest.raises(InvariantViolation) as exc:
        list_invariants.resolve_deletion_compensation(backlog, without_intermediate)
    assert exc.value.detail == "Cannot delete last backlog with no intermediate lists to promote"


def test_deleting_sole_backlog_promotes_leftmost_intermediate():
    lists = [
        make_list("backlog", 1000, "backlog"),
        make_list("later", 3000),
        make_list("today", 2000),
        make_list("done", 4000, "done"),
    ]
    compensation = list_invariants.resolve_deletion_compensation(lists[0], lists)
    assert compensation == DeletionCompensation(
        promote="today", reassign_origin_from="backlog", reassign_origin_to="today"
    )


def test_deleting_one_of_several_backlogs_reassigns_to_first_remaining():
    lists = [
        make_list("b1", 1000, "backlog"),
        make_list("b2", 2000, "backlog"),
        make_list("b3", 1500, "backlog"),
        make_list("done", 4000, "done"),
    ]
    compensation = list_invariants.resolve_deletion_compensation(lists[0], lists)
    assert compensation.promote is None
    assert compensation.reassign_origin_to == "b3"


def test_explicit_destination_is_validated(default_lists):
    backlog, today, done = default_lists

    assert list_invariants.resolve_destination(today, "backlog", default_lists) == "backlog"

    with pytest.raises(NotFound) as exc:
        list_invariants.resolve_destination(today, "missing", default_lists)
    assert exc.value.detail == "Destination list not found"

    with pytest.raises(InvariantViolation) as exc:
        list_invariants.resolve_destination(today, done.id, default_lists)
    assert exc.value.detail == "Cannot move tasks to Done list"

    with pytest.raises(InvariantViolation) as exc:
        list_invariants.resolve_destination(today, today.id, default_lists)
    assert exc.value.detail == "Cannot move tasks to same list"


def test_default_destination_prefers_first_intermediate():
    lists = [
        make_list("backlog", 1000, "backlog"),
        make_list("doomed", 1500),
        make_list("week", 3000),
        make_list("today", 2000),
        make_list("done", 4000, "done"),
    ]
    assert list_invariants.resolve_destination(lists[1], None, lists) == "today"


def test_default_destination_falls_back_to_first_backlog():
    lists = [
        make_list("b2", 2000, "backlog"),
        make_list("b1", 1000, "backlog"),
        make_list("doomed", 3000),
        make_list("done", 4000, "done"),
    ]
    assert list_invariants.resolve_destination(lists[2], None, lists) == "b1"


def test_default_destination_skips_promoted_intermediate_when_another_exists():
    lists = [
        make_list("backlog", 1000, "backlog"),
        make_list("today", 2000),
        make_list("week", 3000),
        make_list("done", 4000, "done"),
    ]
    compensation = list_invariants.resolve_deletion_compensation(lists[0], lists)
    assert compensation.promote == "today"
    assert list_invariants.resolve_destination(lists[0], None, lists, compensation) == "week"


def test_default_destination_uses_promoted_list_when_it_is_the_only_candidate(default_lists):
    backlog = default_lists[0]
    compensation = list_invariants.resolve_deletion_compensation(backlog, default_lists)
    assert list_invariants.resolve_destination(backlog, None, default_lists, compensation) == "today"


def test_no_destination_available():
    lists = [make_list("only", 1000), make_list("done", 2000, "done")]
    with pytest.raises(InvariantViolation) as exc:
        list_invariants.resolve_destination(lists[0], None, lists)
    assert exc.value.detail == "No alternative destination found"


def test_toggle_rules(default_lists):
    backlog, today, done = default_lists

    assert list_invariants.can_toggle_backlog_on(today)
    assert not list_invariants.can_toggle_backlog_on(done)
    assert not list_invariants.can_toggle_backlog_off(backlog, 1)
    assert list_invariants.can_toggle_backlog_off(backlog, 2)

    with pytest.raises(InvariantViolation) as exc:
        list_invariants.ensure_can_toggle_backlog(backlog, 1)
    assert exc.value.detail == "Cannot unmark the last backlog. At least one backlog must exist."

    with pytest.raises(InvariantViolation) as exc:
        list_invariants.ensure_can_toggle_backlog(done, 1)
    assert exc.value.detail == "Cannot toggle backlog status of the Done list"

    list_invariants.ensure_can_toggle_backlog(today, 1)


def test_done_list_cannot_be_renamed_or_reordered(default_lists):
    done = default_lists[2]
    with pytest.raises(InvariantViolation):
        list_invariants.ensure_renameable(done)
    with pytest.raises(InvariantViolation):
        list_invariants.ensure_reorderable(done)
    list_invariants.ensure_renameable(default_lists[1])

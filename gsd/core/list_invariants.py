"""Structural rules over the set of lists owned by one user.

Every user keeps at least one backlog list and exactly one Done list. The Done
list never changes: it cannot be deleted, renamed, reordered or toggled. A
list is in one of three states, ``backlog``, ``intermediate`` or ``done``;
backlog and intermediate lists may switch as long as one backlog remains.

The functions here are pure. They receive the user's lists (anything exposing
``id``, ``order_index``, ``is_backlog`` and ``is_done``) and either answer a
question or raise the matching :mod:`gsd.exceptions` error.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from gsd.exceptions import InvariantViolation, NotFound

DELETE_DONE = "Cannot delete Done list"
DELETE_LAST_BACKLOG = "Cannot delete last backlog with no intermediate lists to promote"
DEST_NOT_FOUND = "Destination list not found"
DEST_IS_DONE = "Cannot move tasks to Done list"
DEST_IS_SOURCE = "Cannot move tasks to same list"
NO_DESTINATION = "No alternative destination found"
TOGGLE_DONE = "Cannot toggle backlog status of the Done list"
TOGGLE_LAST_BACKLOG = "Cannot unmark the last backlog. At least one backlog must exist."
RENAME_DONE = "Cannot rename the Done list"
REORDER_DONE = "Cannot reorder the Done list"


@dataclass(frozen=True)
class DeletionCompensation:
    """Follow-up writes needed to delete a list without breaking invariants."""

    promote: Optional[str] = None
    reassign_origin_from: Optional[str] = None
    reassign_origin_to: Optional[str] = None


def _ordered(lists: Iterable) -> List:
    return sorted(lists, key=lambda item: item.order_index)


def is_intermediate(lst) -> bool:
    return not lst.is_backlog and not lst.is_done


def backlogs(lists: Iterable) -> List:
    return [item for item in _ordered(lists) if item.is_backlog]


def intermediates(lists: Iterable) -> List:
    return [item for item in _ordered(lists) if is_intermediate(item)]


def can_delete(lst, all_lists: Sequence) -> bool:
    if lst.is_done:
        return False
    if not lst.is_backlog:
        return True

    other_backlogs = [item for item in backlogs(all_lists) if item.id != lst.id]
    if other_backlogs:
        return True
    return any(item.id != lst.id for item in intermediates(all_lists))


def ensure_deletable(lst, all_lists: Sequence) -> None:
    if lst.is_done:
        raise InvariantViolation(DELETE_DONE)
    if not can_delete(lst, all_lists):
        raise InvariantViolation(DELETE_LAST_BACKLOG)


def resolve_deletion_compensation(lst, all_lists: Sequence) -> DeletionCompensation:
    """Work out which list to promote and where origin backlogs should point.

    When the sole backlog is deleted, the leftmost intermediate list is
    promoted. Tasks whose origin backlog is the deleted list are re-tagged with
    the first remaining backlog, which may be the promoted list.
    """
    ensure_deletable(lst, all_lists)

    remaining = [item for item in backlogs(all_lists) if item.id != lst.id]
    promote = None
    if not remaining:
        candidates = [item for item in intermediates(all_lists) if item.id != lst.id]
        if not candidates:
            raise InvariantViolation(DELETE_LAST_BACKLOG)
        promote = candidates[0]
        remaining = [promote]

    return DeletionCompensation(
        promote=promote.id if promote is not None else None,
        reassign_origin_from=lst.id,
        reassign_origin_to=remaining[0].id,
    )


def resolve_destination(
    lst,
    explicit_dest_id: Optional[str],
    all_lists: Sequence,
    compensation: Optional[DeletionCompensation] = None,
) -> str:
    """Pick the list that receives the tasks of a deleted list.

    An explicit destination wins when valid. Otherwise the first intermediate
    list, then the first backlog, both by ``order_index`` and never the list
    being deleted. A list promoted by ``compensation`` counts as a backlog.
    """
    if explicit_dest_id is not None:
        dest = next((item for item in all_lists if item.id == explicit_dest_id), None)
        if dest is None:
            raise NotFound(DEST_NOT_FOUND)
        if dest.is_done:
            raise InvariantViolation(DEST_IS_DONE)
        if dest.id == lst.id:
            raise InvariantViolation(DEST_IS_SOURCE)
        return dest.id

    promoted_id = compensation.promote if compensation else None
    candidates = [item for item in all_lists if item.id != lst.id and not item.is_done]

    for item in intermediates(candidates):
        if item.id != promoted_id:
            return item.id

    for item in _ordered(candidates):
        if item.is_backlog or item.id == promoted_id:
            return item.id

    raise InvariantViolation(NO_DESTINATION)


def can_toggle_backlog_off(lst, backlog_count: int) -> bool:
    return not lst.is_done and backlog_count > 1


def can_toggle_backlog_on(lst) -> bool:
    return not lst.is_done


def ensure_can_toggle_backlog(lst, backlog_count: int) -> None:
    if lst.is_done:
        raise InvariantViolation(TOGGLE_DONE)
    if lst.is_backlog and not can_toggle_backlog_off(lst, backlog_count):
        raise InvariantViolation(TOGGLE_LAST_BACKLOG)


def ensure_renameable(lst) -> None:
    if lst.is_done:
        raise InvariantViolation(RENAME_DONE)


def ensure_reorderable(lst) -> None:
    if lst.is_done:
        raise InvariantViolation(REORDER_DONE)

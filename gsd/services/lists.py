"""List use cases: create, rename, reorder, toggle backlog, delete."""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from gsd.core import list_invariants
from gsd.core.color_pool import ColorPool, normalize_color
from gsd.core.order_index import (
    calculate_between,
    calculate_top_position,
    generate_reindexed_order,
)
from gsd.exceptions import (
    CapacityExceeded,
    Conflict,
    Forbidden,
    InvariantViolation,
    NotFound,
    OrderIndexExhausted,
)
from gsd.models import TaskList
from gsd.repositories import lists as lists_repo
from gsd.repositories import tasks as tasks_repo
from gsd.repositories import users as users_repo
from gsd.schemas import ListCreate, ListReorder, ListUpdate

logger = logging.getLogger(__name__)

MAX_NON_DONE_LISTS = 10


def get_owned_list(db: Session, user_id: str, list_id: str, not_found: str = "List not found") -> TaskList:
    task_list = lists_repo.find_any_by_id(db, list_id)
    if task_list is None:
        raise NotFound(not_found)
    if task_list.user_id != user_id:
        raise Forbidden("You don't have permission to access this list")
    return task_list


def claim_color(pool: ColorPool, user_id: str, preferred: Optional[str] = None, strict: bool = False) -> str:
    """Reserve ``preferred`` when possible, otherwise the next free palette color.

    With ``strict`` an unusable ``preferred`` color is an error instead.
    """
    if preferred:
        try:
            pool.mark_used(user_id, preferred)
            return normalize_color(preferred)
        except (Conflict, InvariantViolation):
            if strict:
                raise
    return pool.allocate(user_id)


def get_lists(db: Session, user_id: str, include_done: bool = False) -> List[TaskList]:
    return lists_repo.find_many_by_user(db, user_id, include_done=include_done)


def create_list(db: Session, user_id: str, list_in: ListCreate, pool: ColorPool) -> TaskList:
    current_count = lists_repo.count_by_user(db, user_id)
    if current_count >= MAX_NON_DONE_LISTS:
        raise CapacityExceeded(
            f"Cannot create list - maximum of {MAX_NON_DONE_LISTS} non-Done lists reached"
        )

    color = None
    if list_in.is_backlog:
        color = claim_color(pool, user_id, list_in.color, strict=True)
    elif list_in.color:
        color = normalize_color(list_in.color)

    try:
        task_list = lists_repo.create(
            db,
            user_id=user_id,
            name=list_in.name,
            order_index=calculate_top_position(lists_repo.find_max_order_index(db, user_id)),
            is_backlog=list_in.is_backlog,
            color=color,
        )
        db.commit()
    except Exception:
        db.rollback()
        if list_in.is_backlog:
            pool.release(user_id, color)
        raise

    db.refresh(task_list)
    logger.info("Created list %s (%s) for user %s", task_list.id, task_list.kind, user_id)
    return task_list


def update_list(db: Session, user_id: str, list_id: str, list_update: ListUpdate) -> TaskList:
    task_list = get_owned_list(db, user_id, list_id)
    list_invariants.ensure_renameable(task_list)

    task_list.name = list_update.name
    db.commit()
    db.refresh(task_list)
    logger.info("Renamed list %s for user %s", list_id, user_id)
    return task_list


def toggle_backlog(db: Session, user_id: str, list_id: str, pool: ColorPool) -> TaskList:
    users_repo.lock_user(db, user_id)
    task_list = get_owned_list(db, user_id, list_id)
    list_invariants.ensure_can_toggle_backlog(task_list, lists_repo.count_backlogs(db, user_id))

    making_backlog = not task_list.is_backlog
    claimed = None
    try:
        if making_backlog:
            claimed = claim_color(pool, user_id, task_list.color)
            task_list.color = claimed
        task_list.is_backlog = making_backlog
        db.commit()
    except Exception:
        db.rollback()
        pool.release(user_id, claimed)
        raise

    if not making_backlog:
        # The color stays on the row so tasks tagged with this list keep it.
        pool.release(user_id, task_list.color)

    db.refresh(task_list)
    logger.info("Toggled backlog status of list %s to %s", list_id, making_backlog)
    return task_list


def _reindex_lists(db: Session, user_id: str) -> None:
    """Renumber the user's lists in display order, keeping Done last."""
    siblings = lists_repo.find_many_by_user(db, user_id, include_done=False)
    done_list = lists_repo.find_done_list(db, user_id)
    if done_list is not None:
        siblings.append(done_list)
    for task_list, new_index in zip(siblings, generate_reindexed_order(len(siblings))):
        task_list.order_index = new_index
    db.flush()


def _order_index_after(db: Session, user_id: str, moving: TaskList, target: TaskList) -> float:
    siblings = [
        item for item in lists_repo.find_many_by_user(db, user_id, include_done=False)
        if item.id != moving.id
    ]
    position = next(i for i, item in enumerate(siblings) if item.id == target.id)
    following = siblings[position + 1] if position + 1 < len(siblings) else None
    return calculate_between(
        target.order_index, following.order_index if following is not None else None
    )


def reorder_list(db: Session, user_id: str, list_id: str, reorder_in: ListReorder) -> TaskList:
    task_list = get_owned_list(db, user_id, list_id)
    list_invariants.ensure_reorderable(task_list)

    if reorder_in.after_list_id:
        target = get_owned_list(
            db, user_id, reorder_in.after_list_id, not_found="Target list (after_list_id) not found"
        )
        if target.id == task_list.id:
            raise InvariantViolation("Cannot place a list after itself")
        if target.is_done:
            raise InvariantViolation("Cannot place a list after the Done list")
        try:
            new_order_index = _order_index_after(db, user_id, task_list, target)
        except OrderIndexExhausted:
            logger.warning("List order space exhausted for user %s, reindexing", user_id)
            _reindex_lists(db, user_id)
            new_order_index = _order_index_after(db, user_id, task_list, target)
    elif reorder_in.new_order_index is not None:
        if reorder_in.new_order_index < 0:
            raise InvariantViolation("new_order_index must be non-negative")
        new_order_index = reorder_in.new_order_index
    else:
        raise InvariantViolation("Either new_order_index or after_list_id must be provided")

    task_list.order_index = new_order_index
    db.commit()
    db.refresh(task_list)
    logger.info("Reordered list %s to order_index %s", list_id, new_order_index)
    return task_list


def delete_list(
    db: Session,
    user_id: str,
    list_id: str,
    pool: ColorPool,
    destination_list_id: Optional[str] = None,
) -> None:
    """Delete a list after relocating its tasks, all in one transaction.

    Deleting the last backlog promotes the leftmost intermediate list. Tasks
    tagged with the deleted list as origin backlog are re-tagged.
    """
    users_repo.lock_user(db, user_id)
    task_list = get_owned_list(db, user_id, list_id)
    all_lists = lists_repo.find_many_by_user(db, user_id, include_done=True)

    compensation = list_invariants.resolve_deletion_compensation(task_list, all_lists)
    destination_id = list_invariants.resolve_destination(
        task_list, destination_list_id, all_lists, compensation
    )

    released_color = task_list.color if task_list.is_backlog else None
    claimed = None
    try:
        if compensation.promote:
            promoted = next(item for item in all_lists if item.id == compensation.promote)
            claimed = claim_color(pool, user_id, promoted.color)
            lists_repo.promote_to_backlog(db, promoted, claimed)
            logger.info("Promoted list %s to backlog for user %s", promoted.id, user_id)

        moved = tasks_repo.move_all(db, user_id, task_list.id, destination_id)
        tasks_repo.reassign_origin_backlog(
            db, user_id, compensation.reassign_origin_from, compensation.reassign_origin_to
        )
        db.delete(task_list)
        db.commit()
    except Exception:
        db.rollback()
        pool.release(user_id, claimed)
        raise

    pool.release(user_id, released_color)
    logger.info(
        "Deleted list %s for user %s, moved %d tasks to %s", list_id, user_id, moved, destination_id
    )

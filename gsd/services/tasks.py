"""Task use cases.

Open tasks live in backlog or intermediate lists and are ordered ascending by
``order_index``. Completing a task moves it to the user's Done list, after
which it is read-only.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from gsd.core.color_pool import DEFAULT_TASK_COLOR
from gsd.core.order_index import (
    INITIAL_ORDER_INDEX,
    ORDER_STEP,
    calculate_between,
    calculate_insert_at_top,
    calculate_top_position,
    needs_reindexing,
)
from gsd.exceptions import (
    CapacityExceeded,
    DataIntegrityError,
    Forbidden,
    InvariantViolation,
    NotFound,
    OrderIndexExhausted,
)
from gsd.models import Task, TaskList
from gsd.repositories import lists as lists_repo
from gsd.repositories import tasks as tasks_repo
from gsd.schemas import (
    BulkAddTasksRequest,
    BulkAddTasksResponse,
    MoveTaskRequest,
    ReorderTaskRequest,
    TaskCreate,
    TaskResponse,
    TaskUpdate,
)
from gsd.services.lists import get_owned_list

logger = logging.getLogger(__name__)

MAX_TASKS_PER_LIST = 100
MAX_BULK_TASKS = 10


def task_color(task: Task) -> str:
    origin = task.origin_backlog
    if origin is None or not origin.color:
        logger.warning("Task %s has no origin backlog color, using default", task.id)
        return DEFAULT_TASK_COLOR
    return origin.color


def to_task_response(task: Task) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        user_id=task.user_id,
        list_id=task.list_id,
        origin_backlog_id=task.origin_backlog_id,
        title=task.title,
        description=task.description,
        order_index=task.order_index,
        color=task_color(task),
        is_completed=task.is_completed,
        created_at=task.created_at,
        completed_at=task.completed_at,
    )


def get_owned_task(db: Session, user_id: str, task_id: str) -> Task:
    task = tasks_repo.find_any_by_id(db, task_id)
    if task is None:
        raise NotFound("Task not found")
    if task.user_id != user_id:
        raise Forbidden("You don't have permission to access this task")
    return task


def _ensure_open_list(task_list: TaskList, message: str) -> None:
    if task_list.is_done:
        raise InvariantViolation(message)


def _ensure_capacity(db: Session, user_id: str, task_list: TaskList, incoming: int = 1) -> None:
    current = tasks_repo.count_by_list(db, user_id, task_list.id)
    if current + incoming > MAX_TASKS_PER_LIST:
        raise CapacityExceeded(
            f"List has reached maximum capacity of {MAX_TASKS_PER_LIST} tasks"
        )


def _ensure_editable(task: Task) -> None:
    if task.is_completed:
        raise InvariantViolation("Cannot modify a completed task")


def resolve_origin_backlog(db: Session, user_id: str, task_list: TaskList) -> str:
    """A task created in a backlog belongs to it; otherwise to the first backlog."""
    if task_list.is_backlog:
        return task_list.id
    backlog = lists_repo.find_first_backlog(db, user_id)
    if backlog is None:
        logger.error("User %s has no backlog list", user_id)
        raise DataIntegrityError("No backlog list found for user")
    return backlog.id


def get_tasks(
    db: Session,
    user_id: str,
    list_id: Optional[str] = None,
    include_completed: bool = False,
    limit: int = 100,
    offset: int = 0,
) -> Tuple[List[Task], int]:
    if list_id:
        get_owned_list(db, user_id, list_id)
        tasks = tasks_repo.find_many_by_list(db, user_id, list_id, limit, offset, include_completed)
        total = tasks_repo.count_by_list(db, user_id, list_id, include_completed)
    else:
        tasks = tasks_repo.find_many_by_user(db, user_id, limit, offset, include_completed)
        total = tasks_repo.count_by_user(db, user_id, include_completed)
    return tasks, total


def create_task(db: Session, user_id: str, task_in: TaskCreate) -> Task:
    task_list = get_owned_list(db, user_id, task_in.list_id)
    _ensure_open_list(task_list, "Cannot create tasks in Done list")
    _ensure_capacity(db, user_id, task_list)

    try:
        task = tasks_repo.create(
            db,
            user_id=user_id,
            list_id=task_list.id,
            origin_backlog_id=resolve_origin_backlog(db, user_id, task_list),
            title=task_in.title,
            description=task_in.description,
            order_index=calculate_top_position(
                tasks_repo.find_max_order_index(db, user_id, task_list.id)
            ),
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(task)
    logger.info("Created task %s in list %s", task.id, task_list.id)
    return task


def bulk_add_tasks(db: Session, user_id: str, bulk_in: BulkAddTasksRequest) -> BulkAddTasksResponse:
    """Create up to ``MAX_BULK_TASKS`` tasks in one transaction."""
    if len(bulk_in.tasks) > MAX_BULK_TASKS:
        raise CapacityExceeded(f"Cannot add more than {MAX_BULK_TASKS} tasks at once")

    if bulk_in.list_id:
        task_list = get_owned_list(db, user_id, bulk_in.list_id)
    else:
        task_list = lists_repo.find_first_backlog(db, user_id)
        if task_list is None:
            raise NotFound("No backlog list found")
    _ensure_open_list(task_list, "Cannot create tasks in Done list")
    _ensure_capacity(db, user_id, task_list, incoming=len(bulk_in.tasks))

    origin_backlog_id = resolve_origin_backlog(db, user_id, task_list)
    order_index = tasks_repo.find_max_order_index(db, user_id, task_list.id)
    created = []
    try:
        for item in bulk_in.tasks:
            order_index = calculate_top_position(order_index)
            created.append(
                tasks_repo.create(
                    db,
                    user_id=user_id,
                    list_id=task_list.id,
                    origin_backlog_id=origin_backlog_id,
                    title=item.title,
                    description=item.description,
                    order_index=order_index,
                )
            )
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Bulk add of %d tasks failed for user %s", len(bulk_in.tasks), user_id)
        raise

    for task in created:
        db.refresh(task)
    logger.info("Bulk added %d tasks to list %s", len(created), task_list.id)
    return BulkAddTasksResponse(
        tasks=[to_task_response(task) for task in created],
        created=len(created),
        failed=0,
        message=f"Successfully created {len(created)} tasks",
    )


def update_task(db: Session, user_id: str, task_id: str, task_update: TaskUpdate) -> Task:
    task = get_owned_task(db, user_id, task_id)
    _ensure_editable(task)

    changes = task_update.model_dump(exclude_unset=True)
    if not changes:
        raise InvariantViolation("At least one field (title or description) must be provided")
    if "title" in changes and changes["title"] is None:
        raise InvariantViolation("Title cannot be empty")

    for field, value in changes.items():
        setattr(task, field, value)
    db.commit()
    db.refresh(task)
    return task


def move_task(db: Session, user_id: str, task_id: str, move_in: MoveTaskRequest) -> Task:
    task = get_owned_task(db, user_id, task_id)
    if task.is_completed:
        raise InvariantViolation("Cannot move a completed task")

    destination = get_owned_list(db, user_id, move_in.list_id, not_found="Destination list not found")
    _ensure_open_list(destination, "Cannot move task to Done list. Use complete endpoint instead.")
    if destination.id == task.list_id:
        raise InvariantViolation("Task is already in this list")
    _ensure_capacity(db, user_id, destination)

    source_list_id = task.list_id
    task.order_index = calculate_top_position(
        tasks_repo.find_max_order_index(db, user_id, destination.id)
    )
    task.list_id = destination.id
    if destination.is_backlog:
        task.origin_backlog_id = destination.id
    db.commit()
    db.refresh(task)
    logger.info("Moved task %s from list %s to %s", task.id, source_list_id, destination.id)
    return task


def _position_after(db: Session, user_id: str, task: Task, anchor: Task) -> float:
    siblings = [
        item for item in tasks_repo.find_many_ordered_by_index(db, user_id, anchor.list_id)
        if item.id != task.id
    ]
    position = next(i for i, item in enumerate(siblings) if item.id == anchor.id)
    following = siblings[position + 1] if position + 1 < len(siblings) else None
    return calculate_between(
        anchor.order_index, following.order_index if following is not None else None
    )


def _position_at_top(db: Session, user_id: str, task: Task) -> float:
    current_min = tasks_repo.find_min_order_index(db, user_id, task.list_id)
    if current_min is not None and needs_reindexing(current_min):
        logger.info("Reindexing list %s before inserting at top", task.list_id)
        tasks_repo.reindex_list(db, user_id, task.list_id, start_index=INITIAL_ORDER_INDEX + ORDER_STEP)
        current_min = tasks_repo.find_min_order_index(db, user_id, task.list_id)
    return calculate_insert_at_top(current_min)


def reorder_task(db: Session, user_id: str, task_id: str, reorder_in: ReorderTaskRequest) -> Task:
    task = get_owned_task(db, user_id, task_id)
    _ensure_editable(task)

    try:
        if reorder_in.new_order_index is not None:
            if reorder_in.new_order_index < 0:
                raise InvariantViolation("new_order_index must be non-negative")
            task.order_index = reorder_in.new_order_index
        elif reorder_in.after_task_id:
            anchor = get_owned_task(db, user_id, reorder_in.after_task_id)
            if anchor.id == task.id:
                raise InvariantViolation("Cannot place a task after itself")
            if anchor.list_id != task.list_id:
                raise InvariantViolation("Target task must be in the same list")
            try:
                task.order_index = _position_after(db, user_id, task, anchor)
            except OrderIndexExhausted:
                logger.warning("Order space exhausted in list %s, reindexing", task.list_id)
                tasks_repo.reindex_list(db, user_id, task.list_id)
                task.order_index = _position_after(db, user_id, task, anchor)
        elif reorder_in.position == "top":
            task.order_index = _position_at_top(db, user_id, task)
        else:
            raise InvariantViolation(
                "One of new_order_index, after_task_id or position must be provided"
            )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(task)
    return task


def complete_task(db: Session, user_id: str, task_id: str) -> Task:
    task = get_owned_task(db, user_id, task_id)
    if task.is_completed:
        raise InvariantViolation("Task is already completed")

    done_list = lists_repo.find_done_list(db, user_id)
    if done_list is None:
        logger.error("User %s has no Done list", user_id)
        raise DataIntegrityError("Done list not found for user")

    task.order_index = calculate_top_position(
        tasks_repo.find_max_order_index(db, user_id, done_list.id)
    )
    task.list_id = done_list.id
    task.completed_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(task)
    logger.info("Completed task %s", task.id)
    return task


def delete_task(db: Session, user_id: str, task_id: str) -> None:
    task = get_owned_task(db, user_id, task_id)
    db.delete(task)
    db.commit()
    logger.info("Deleted task %s", task_id)

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from gsd.core.order_index import (
    INITIAL_ORDER_INDEX,
    calculate_top_position,
    generate_reindexed_order,
)
from gsd.models import Task


def _scoped(db: Session, user_id: str):
    return db.query(Task).filter(Task.user_id == user_id)


def _open_only(query, include_completed: bool):
    if include_completed:
        return query
    return query.filter(Task.completed_at.is_(None))


def find_any_by_id(db: Session, task_id: str) -> Optional[Task]:
    return db.query(Task).filter(Task.id == task_id).first()


def find_many_by_list(
    db: Session,
    user_id: str,
    list_id: str,
    limit: int = 100,
    offset: int = 0,
    include_completed: bool = False,
) -> List[Task]:
    query = _open_only(_scoped(db, user_id).filter(Task.list_id == list_id), include_completed)
    return (
        query.order_by(Task.order_index.asc(), Task.created_at.asc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def find_many_by_user(
    db: Session,
    user_id: str,
    limit: int = 100,
    offset: int = 0,
    include_completed: bool = False,
) -> List[Task]:
    query = _open_only(_scoped(db, user_id), include_completed)
    return (
        query.order_by(Task.list_id.asc(), Task.order_index.asc(), Task.created_at.asc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def count_by_list(db: Session, user_id: str, list_id: str, include_completed: bool = False) -> int:
    return _open_only(_scoped(db, user_id).filter(Task.list_id == list_id), include_completed).count()


def count_by_user(db: Session, user_id: str, include_completed: bool = False) -> int:
    return _open_only(_scoped(db, user_id), include_completed).count()


def find_max_order_index(db: Session, user_id: str, list_id: str) -> Optional[float]:
    return (
        db.query(func.max(Task.order_index))
        .filter(Task.user_id == user_id, Task.list_id == list_id)
        .scalar()
    )


def find_min_order_index(db: Session, user_id: str, list_id: str) -> Optional[float]:
    return (
        db.query(func.min(Task.order_index))
        .filter(Task.user_id == user_id, Task.list_id == list_id)
        .scalar()
    )


def find_many_ordered_by_index(db: Session, user_id: str, list_id: str) -> List[Task]:
    return (
        _scoped(db, user_id)
        .filter(Task.list_id == list_id)
        .order_by(Task.order_index.asc(), Task.created_at.asc())
        .all()
    )


def create(
    db: Session,
    user_id: str,
    list_id: str,
    origin_backlog_id: str,
    title: str,
    description: Optional[str],
    order_index: float,
) -> Task:
    task = Task(
        user_id=user_id,
        list_id=list_id,
        origin_backlog_id=origin_backlog_id,
        title=title,
        description=description,
        order_index=order_index,
    )
    db.add(task)
    db.flush()
    return task


def reindex_list(
    db: Session, user_id: str, list_id: str, start_index: float = INITIAL_ORDER_INDEX
) -> List[Task]:
    """Renumber every task of a list, keeping its current relative order."""
    tasks = find_many_ordered_by_index(db, user_id, list_id)
    for task, new_index in zip(tasks, generate_reindexed_order(len(tasks), start_index)):
        task.order_index = new_index
    db.flush()
    return tasks


def move_all(db: Session, user_id: str, source_list_id: str, destination_list_id: str) -> int:
    """Append every task of ``source_list_id`` to the end of ``destination_list_id``."""
    tasks = find_many_ordered_by_index(db, user_id, source_list_id)
    current_max = find_max_order_index(db, user_id, destination_list_id)
    for task in tasks:
        current_max = calculate_top_position(current_max)
        task.list_id = destination_list_id
        task.order_index = current_max
    db.flush()
    return len(tasks)


def reassign_origin_backlog(db: Session, user_id: str, from_list_id: str, to_list_id: str) -> int:
    updated = (
        _scoped(db, user_id)
        .filter(Task.origin_backlog_id == from_list_id)
        .update({Task.origin_backlog_id: to_list_id}, synchronize_session="fetch")
    )
    db.flush()
    return updated


def _completed(db: Session, user_id: str):
    return _scoped(db, user_id).filter(Task.completed_at.isnot(None))


def find_completed(db: Session, user_id: str, limit: int, offset: int) -> List[Task]:
    return (
        _completed(db, user_id)
        .options(selectinload(Task.list), selectinload(Task.origin_backlog))
        .order_by(Task.completed_at.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def count_completed(db: Session, user_id: str) -> int:
    return _completed(db, user_id).count()


def find_completed_between(db: Session, user_id: str, start: datetime, end: datetime) -> List[Task]:
    return (
        _completed(db, user_id)
        .filter(Task.completed_at >= start, Task.completed_at <= end)
        .order_by(Task.completed_at.asc())
        .all()
    )


def find_users_with_completed_over(db: Session, limit: int) -> List[str]:
    rows = (
        db.query(Task.user_id)
        .filter(Task.completed_at.isnot(None))
        .group_by(Task.user_id)
        .having(func.count(Task.id) > limit)
        .all()
    )
    return [row[0] for row in rows]


def delete_oldest_completed(db: Session, user_id: str, keep: int) -> int:
    """Delete the user's completed tasks except the ``keep`` most recent ones."""
    keep_ids = [
        row[0]
        for row in _completed(db, user_id)
        .with_entities(Task.id)
        .order_by(Task.completed_at.desc())
        .limit(keep)
        .all()
    ]
    query = _completed(db, user_id)
    if keep_ids:
        query = query.filter(Task.id.notin_(keep_ids))
    deleted = query.delete(synchronize_session=False)
    db.flush()
    return deleted

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from gsd.models import TaskList


def _scoped(db: Session, user_id: str, include_done: bool = True):
    query = db.query(TaskList).filter(TaskList.user_id == user_id)
    if not include_done:
        query = query.filter(TaskList.is_done.is_(False))
    return query


def _ordered(query):
    return query.order_by(TaskList.order_index.asc(), TaskList.created_at.asc())


def find_any_by_id(db: Session, list_id: str) -> Optional[TaskList]:
    return db.query(TaskList).filter(TaskList.id == list_id).first()


def find_many_by_user(db: Session, user_id: str, include_done: bool = False) -> List[TaskList]:
    return _ordered(_scoped(db, user_id, include_done)).all()


def count_by_user(db: Session, user_id: str, include_done: bool = False) -> int:
    return _scoped(db, user_id, include_done).count()


def count_backlogs(db: Session, user_id: str) -> int:
    return _scoped(db, user_id).filter(TaskList.is_backlog.is_(True)).count()


def find_first_backlog(db: Session, user_id: str) -> Optional[TaskList]:
    return _ordered(_scoped(db, user_id).filter(TaskList.is_backlog.is_(True))).first()


def find_done_list(db: Session, user_id: str) -> Optional[TaskList]:
    return _scoped(db, user_id).filter(TaskList.is_done.is_(True)).first()


def find_max_order_index(db: Session, user_id: str) -> Optional[float]:
    return db.query(func.max(TaskList.order_index)).filter(TaskList.user_id == user_id).scalar()


def create(
    db: Session,
    user_id: str,
    name: str,
    order_index: float,
    is_backlog: bool = False,
    is_done: bool = False,
    color: Optional[str] = None,
) -> TaskList:
    task_list = TaskList(
        user_id=user_id,
        name=name,
        order_index=order_index,
        is_backlog=is_backlog,
        is_done=is_done,
        color=color,
    )
    db.add(task_list)
    db.flush()
    return task_list


def promote_to_backlog(db: Session, task_list: TaskList, color: str) -> TaskList:
    task_list.is_backlog = True
    task_list.color = color
    db.flush()
    return task_list

from sqlalchemy.orm import Session

from gsd.repositories import tasks as tasks_repo
from gsd.schemas import DonePage, DoneTaskResponse
from gsd.services.tasks import task_color


def get_done_tasks(db: Session, user_id: str, limit: int = 50, offset: int = 0) -> DonePage:
    """Completed tasks, most recently completed first."""
    tasks = tasks_repo.find_completed(db, user_id, limit, offset)
    return DonePage(
        tasks=[
            DoneTaskResponse(
                id=task.id,
                title=task.title,
                description=task.description,
                completed_at=task.completed_at,
                list_id=task.list_id,
                list_name=task.list.name,
                color=task_color(task),
                origin_backlog_id=task.origin_backlog_id,
            )
            for task in tasks
        ],
        total=tasks_repo.count_completed(db, user_id),
        limit=limit,
        offset=offset,
    )

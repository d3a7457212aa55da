"""Task endpoints"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from gsd.database import get_db
from gsd.dependencies import get_current_user
from gsd.models import User
from gsd.schemas import (
    BulkAddTasksRequest,
    BulkAddTasksResponse,
    MoveTaskRequest,
    ReorderTaskRequest,
    TaskCreate,
    TaskResponse,
    TasksPage,
    TaskUpdate,
)
from gsd.services import tasks as tasks_service
from gsd.services.tasks import to_task_response

router = APIRouter()


@router.get("", response_model=TasksPage)
def get_tasks(
    list_id: Optional[str] = Query(None),
    include_completed: bool = Query(False),
    limit: int = Query(100, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    tasks, total = tasks_service.get_tasks(
        db, current_user.id, list_id, include_completed, limit, offset
    )
    return TasksPage(
        tasks=[to_task_response(task) for task in tasks],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_in: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return to_task_response(tasks_service.create_task(db, current_user.id, task_in))


@router.post("/bulk", response_model=BulkAddTasksResponse, status_code=status.HTTP_201_CREATED)
def bulk_add_tasks(
    bulk_in: BulkAddTasksRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create up to ten tasks at once, by default in the first backlog."""
    return tasks_service.bulk_add_tasks(db, current_user.id, bulk_in)


@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return to_task_response(tasks_service.update_task(db, current_user.id, task_id, task_update))


@router.post("/{task_id}/move", response_model=TaskResponse)
def move_task(
    task_id: str,
    move_in: MoveTaskRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return to_task_response(tasks_service.move_task(db, current_user.id, task_id, move_in))


@router.post("/{task_id}/reorder", response_model=TaskResponse)
def reorder_task(
    task_id: str,
    reorder_in: ReorderTaskRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return to_task_response(tasks_service.reorder_task(db, current_user.id, task_id, reorder_in))


@router.post("/{task_id}/complete", response_model=TaskResponse)
def complete_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return to_task_response(tasks_service.complete_task(db, current_user.id, task_id))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    tasks_service.delete_task(db, current_user.id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

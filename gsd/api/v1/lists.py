"""List endpoints"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from gsd.core.color_pool import ColorPool, get_color_pool
from gsd.database import get_db
from gsd.dependencies import get_current_user
from gsd.models import User
from gsd.schemas import ListCreate, ListReorder, ListResponse, ListsResponse, ListUpdate
from gsd.services import lists as lists_service

router = APIRouter()


@router.get("", response_model=ListsResponse)
def get_lists(
    include_done: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    lists = lists_service.get_lists(db, current_user.id, include_done=include_done)
    return ListsResponse(lists=[ListResponse.model_validate(item) for item in lists])


@router.post("", response_model=ListResponse, status_code=status.HTTP_201_CREATED)
def create_list(
    list_in: ListCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    pool: ColorPool = Depends(get_color_pool),
):
    return lists_service.create_list(db, current_user.id, list_in, pool)


@router.patch("/{list_id}", response_model=ListResponse)
def update_list(
    list_id: str,
    list_update: ListUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return lists_service.update_list(db, current_user.id, list_id, list_update)


@router.post("/{list_id}/toggle-backlog", response_model=ListResponse)
def toggle_backlog(
    list_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    pool: ColorPool = Depends(get_color_pool),
):
    return lists_service.toggle_backlog(db, current_user.id, list_id, pool)


@router.post("/{list_id}/reorder", response_model=ListResponse)
def reorder_list(
    list_id: str,
    reorder_in: ListReorder,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return lists_service.reorder_list(db, current_user.id, list_id, reorder_in)


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_list(
    list_id: str,
    destination_list_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    pool: ColorPool = Depends(get_color_pool),
):
    """Delete a list, moving its tasks to ``destination_list_id`` or a default list."""
    lists_service.delete_list(db, current_user.id, list_id, pool, destination_list_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

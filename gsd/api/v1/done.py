"""Completed-task archive"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from gsd.database import get_db
from gsd.dependencies import get_current_user
from gsd.models import User
from gsd.schemas import DonePage
from gsd.services.done import get_done_tasks

router = APIRouter()


@router.get("", response_model=DonePage)
def get_done(
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_done_tasks(db, current_user.id, limit, offset)

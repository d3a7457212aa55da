"""Completion metrics"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from gsd.database import get_db
from gsd.dependencies import get_current_user
from gsd.models import User
from gsd.schemas import DailyMetricsResponse, WeeklyMetricsResponse
from gsd.services import metrics as metrics_service

router = APIRouter()


@router.get("/daily", response_model=DailyMetricsResponse)
def get_daily_metrics(
    start_date: Optional[str] = Query(None, description="YYYY-MM-DD, defaults to 30 days before end_date"),
    end_date: Optional[str] = Query(None, description="YYYY-MM-DD, defaults to today"),
    timezone: Optional[str] = Query(None, description="IANA timezone, defaults to UTC"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return metrics_service.get_daily_metrics(db, current_user.id, start_date, end_date, timezone)


@router.get("/weekly", response_model=WeeklyMetricsResponse)
def get_weekly_metrics(
    start_date: Optional[str] = Query(None, description="YYYY-MM-DD, defaults to 84 days before end_date"),
    end_date: Optional[str] = Query(None, description="YYYY-MM-DD, defaults to today"),
    timezone: Optional[str] = Query(None, description="IANA timezone, defaults to UTC"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return metrics_service.get_weekly_metrics(db, current_user.id, start_date, end_date, timezone)

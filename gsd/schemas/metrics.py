"""Schemas for completion metrics"""
from datetime import date
from typing import List

from pydantic import BaseModel


class DailyMetric(BaseModel):
    date: date
    count: int
    timezone: str


class DailyMetricsResponse(BaseModel):
    metrics: List[DailyMetric]
    start_date: date
    end_date: date
    timezone: str
    total_completed: int


class WeeklyMetric(BaseModel):
    week_start_date: date
    week_end_date: date
    count: int
    timezone: str


class WeeklyMetricsResponse(BaseModel):
    metrics: List[WeeklyMetric]
    start_date: date
    end_date: date
    timezone: str
    total_completed: int
    total_weeks: int

"""Schemas for the completed-task archive"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class DoneTaskResponse(BaseModel):
    id: str
    title: str
    description: Optional[str]
    completed_at: datetime
    list_id: str
    list_name: str
    color: str
    origin_backlog_id: str


class DonePage(BaseModel):
    tasks: List[DoneTaskResponse]
    total: int
    limit: int
    offset: int

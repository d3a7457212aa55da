"""Schemas for tasks"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=5000)
    list_id: str

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value):
        return value.strip() if isinstance(value, str) else value


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=5000)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value):
        return value.strip() if isinstance(value, str) else value


class BulkTaskInput(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=5000)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value):
        return value.strip() if isinstance(value, str) else value


class BulkAddTasksRequest(BaseModel):
    tasks: List[BulkTaskInput] = Field(..., min_length=1, max_length=10)
    list_id: Optional[str] = None


class MoveTaskRequest(BaseModel):
    list_id: str


class ReorderTaskRequest(BaseModel):
    new_order_index: Optional[float] = None
    after_task_id: Optional[str] = None
    position: Optional[Literal["top"]] = None


class TaskResponse(BaseModel):
    id: str
    user_id: str
    list_id: str
    origin_backlog_id: str
    title: str
    description: Optional[str]
    order_index: float
    color: str
    is_completed: bool
    created_at: datetime
    completed_at: Optional[datetime]


class TasksPage(BaseModel):
    tasks: List[TaskResponse]
    total: int
    limit: int
    offset: int


class BulkAddTasksResponse(BaseModel):
    tasks: List[TaskResponse]
    created: int
    failed: int
    message: str

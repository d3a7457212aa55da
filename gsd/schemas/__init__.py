"""
Pydantic schemas for request/response validation
"""
from gsd.schemas.user import UserResponse, GoogleProfile, DevLoginRequest, SessionResponse
from gsd.schemas.task_list import ListCreate, ListUpdate, ListReorder, ListResponse, ListsResponse
from gsd.schemas.task import (
    TaskCreate,
    TaskUpdate,
    BulkTaskInput,
    BulkAddTasksRequest,
    BulkAddTasksResponse,
    MoveTaskRequest,
    ReorderTaskRequest,
    TaskResponse,
    TasksPage,
)
from gsd.schemas.done import DoneTaskResponse, DonePage
from gsd.schemas.metrics import DailyMetric, DailyMetricsResponse, WeeklyMetric, WeeklyMetricsResponse
from gsd.schemas.health import HealthStatus, ReadinessStatus, ErrorResponse, FieldError

__all__ = [
    "UserResponse",
    "GoogleProfile",
    "DevLoginRequest",
    "SessionResponse",
    "ListCreate",
    "ListUpdate",
    "ListReorder",
    "ListResponse",
    "ListsResponse",
    "TaskCreate",
    "TaskUpdate",
    "BulkTaskInput",
    "BulkAddTasksRequest",
    "BulkAddTasksResponse",
    "MoveTaskRequest",
    "ReorderTaskRequest",
    "TaskResponse",
    "TasksPage",
    "DoneTaskResponse",
    "DonePage",
    "DailyMetric",
    "DailyMetricsResponse",
    "WeeklyMetric",
    "WeeklyMetricsResponse",
    "HealthStatus",
    "ReadinessStatus",
    "ErrorResponse",
    "FieldError",
]

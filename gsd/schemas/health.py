"""Schemas for health probes and error bodies"""
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel


class HealthStatus(BaseModel):
    status: Literal["ok", "error"]
    timestamp: str
    uptime: int


class ReadinessStatus(BaseModel):
    status: Literal["ready", "not_ready"]
    timestamp: str
    checks: Dict[str, Literal["up", "down"]]


class FieldError(BaseModel):
    field: str
    constraints: List[str]


class ErrorResponse(BaseModel):
    status_code: int
    message: str
    error: str
    timestamp: str
    path: str
    request_id: Optional[str] = None
    errors: Optional[List[FieldError]] = None

"""Schemas for task lists"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class ListCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    is_backlog: bool = False
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class ListUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class ListReorder(BaseModel):
    new_order_index: Optional[float] = None
    after_list_id: Optional[str] = None


class ListResponse(BaseModel):
    id: str
    user_id: str
    name: str
    order_index: float
    is_backlog: bool
    is_done: bool
    color: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ListsResponse(BaseModel):
    lists: List[ListResponse]

"""Schemas for users and sign-in"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    id: str
    email: str
    name: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class GoogleProfile(BaseModel):
    """Identity returned by the OAuth provider after a successful handshake."""

    id: str = Field(..., min_length=1)
    email: Optional[str] = None
    display_name: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None


class DevLoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    name: Optional[str] = Field(None, max_length=255)


class SessionResponse(BaseModel):
    user: UserResponse
    expires_in: int

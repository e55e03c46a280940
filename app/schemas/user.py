"""Pydantic schemas for user account endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Body for POST /users, sent after a successful GitHub sign-in."""

    github_id: str = Field(..., min_length=1, max_length=64)
    username: str = Field(..., min_length=1, max_length=255)
    display_name: Optional[str] = Field(None, max_length=255)


class UserRead(BaseModel):
    """Full user record returned by GET /users/{user_id}."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    github_id: str
    username: str
    display_name: Optional[str]
    created_at: datetime


class UserCreated(BaseModel):
    id: int
    created: bool

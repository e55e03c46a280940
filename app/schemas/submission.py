"""Pydantic schemas for the contact form and admin dashboard."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SubmissionCreate(BaseModel):
    """Body for POST /submit-dev-contact: email or WhatsApp plus a note."""

    contact: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1, max_length=5000)


class SubmissionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    contact: str
    message: str
    timestamp: datetime


class SubmissionListResponse(BaseModel):
    success: bool = True
    submissions: list[SubmissionRead]


class AdminLogin(BaseModel):
    """Body for POST /admin-login."""

    password: str = ""


class AdminLoginResponse(BaseModel):
    success: bool
    token: str

"""Pydantic schemas for the chat and render endpoints."""

from __future__ import annotations

import base64
import binascii
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InlineData(BaseModel):
    """An attached image or file, base64-encoded by the browser."""

    model_config = ConfigDict(populate_by_name=True)

    data: str = Field(..., min_length=1)
    mime_type: str = Field(..., alias="mimeType")

    @field_validator("data")
    @classmethod
    def must_be_base64(cls, value: str) -> str:
        try:
            base64.b64decode(value, validate=True)
        except binascii.Error as exc:
            raise ValueError("inline data must be base64") from exc
        return value


class Part(BaseModel):
    """One piece of a turn: text, inline data, or both."""

    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    inline_data: Optional[InlineData] = Field(None, alias="inlineData")

    @property
    def has_content(self) -> bool:
        return bool(self.text) or self.inline_data is not None


class ConversationTurn(BaseModel):
    """A single turn in the client-held chat history."""

    role: Literal["user", "model"]
    parts: list[Part] = Field(default_factory=list)


class ChatRequest(BaseModel):
    """Body for POST /chat. Carries the full history, newest turn last."""

    model_config = ConfigDict(populate_by_name=True)

    contents: list[ConversationTurn] = Field(default_factory=list)
    session_id: Optional[str] = Field(None, alias="sessionId", max_length=128)

    @property
    def last_user_text(self) -> str:
        """Lowercased text of the first text part of the newest turn."""
        if not self.contents:
            return ""
        for part in self.contents[-1].parts:
            if part.text:
                return part.text.lower()
        return ""


class ChatResponse(BaseModel):
    """Body returned by POST /chat."""

    model_config = ConfigDict(populate_by_name=True)

    response: str
    session_id: str = Field(..., alias="sessionId")
    html: str
    show_contact_form: bool = Field(False, alias="showContactForm")


class RenderRequest(BaseModel):
    """Body for POST /render."""

    text: str


class RenderResponse(BaseModel):
    html: str

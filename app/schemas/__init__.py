"""Pydantic schemas package."""

from app.schemas.chat import (
    ChatRequest,
    ChatResponse,
    ConversationTurn,
    InlineData,
    Part,
    RenderRequest,
    RenderResponse,
)
from app.schemas.submission import (
    AdminLogin,
    AdminLoginResponse,
    SubmissionCreate,
    SubmissionListResponse,
    SubmissionRead,
)
from app.schemas.user import UserCreate, UserCreated, UserRead

__all__ = [
    "ChatRequest", "ChatResponse", "ConversationTurn", "InlineData", "Part",
    "RenderRequest", "RenderResponse",
    "AdminLogin", "AdminLoginResponse",
    "SubmissionCreate", "SubmissionListResponse", "SubmissionRead",
    "UserCreate", "UserCreated", "UserRead",
]

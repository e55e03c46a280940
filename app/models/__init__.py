"""SQLAlchemy ORM models package."""

from app.database import Base
from app.models.user import User
from app.models.submission import Submission

__all__ = ["Base", "User", "Submission"]

"""User ORM model: accounts created after a GitHub sign-in."""

from sqlalchemy import Column, Integer, String, TIMESTAMP, func

from app.database import Base


class User(Base):
    """A signed-in chat user, keyed by the GitHub account id."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    github_id = Column(String(64), unique=True, nullable=False)
    username = Column(String(255), nullable=False)
    display_name = Column(String(255), nullable=True)

    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )

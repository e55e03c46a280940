"""Submission ORM model: collaboration requests from the contact form."""

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, func

from app.database import Base


class Submission(Base):
    """
    One "join the team" contact request. Read back newest-first by the
    admin dashboard.
    """

    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    contact = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)

    timestamp = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )

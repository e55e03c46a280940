"""
In-memory chat session registry.

Sessions are bounded by count and by idle time (cachetools TTLCache), so a
long-running process does not accumulate every session it has ever seen.
A session that expired is simply recreated on its next turn.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from cachetools import TTLCache

from app.config import settings

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ChatSession:
    session_id: str
    created_at: datetime = field(default_factory=_now)
    last_seen: datetime = field(default_factory=_now)
    turns: int = 0


class SessionStore:
    """Bounded map of session id → ChatSession."""

    def __init__(self, maxsize: int, ttl: float) -> None:
        self._sessions: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl)

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: str) -> Optional[ChatSession]:
        return self._sessions.get(session_id)

    def touch(self, session_id: Optional[str]) -> ChatSession:
        """
        Return the live session for session_id, creating it if needed.

        A missing id gets a fresh uuid4 hex id. Re-inserting on every turn
        restarts the idle timer.
        """
        sid = session_id or uuid.uuid4().hex
        session = self._sessions.get(sid)
        if session is None:
            session = ChatSession(session_id=sid)
            logger.debug("New chat session %s", sid)
        session.turns += 1
        session.last_seen = _now()
        self._sessions[sid] = session
        return session

    def clear(self) -> None:
        self._sessions.clear()


session_store = SessionStore(
    maxsize=settings.session_max_entries, ttl=settings.session_ttl_seconds
)


def get_session_store() -> SessionStore:
    """FastAPI dependency: the process-wide session store."""
    return session_store

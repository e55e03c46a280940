"""Shared fixtures. Settings are read at import time, so the environment is set first."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

_TMP_DIR = tempfile.mkdtemp(prefix="atomicend-tests-")

os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{Path(_TMP_DIR) / 'test.db'}")
os.environ.setdefault("GOOGLE_API_KEY", "test-key")
os.environ.setdefault("SERVICE_TOKEN", "test-service-token")
os.environ.setdefault("ADMIN_PASSWORD", "test-admin-password")
os.environ.setdefault("ADMIN_TOKEN", "test-admin-token")
os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402
from app.services.session_store import session_store  # noqa: E402


@pytest.fixture(scope="session")
def client():
    """One client for the whole run; its lifespan creates the tables."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def _clear_sessions():
    session_store.clear()
    yield
    session_store.clear()


def user_turn(text: str) -> dict:
    return {"role": "user", "parts": [{"text": text}]}


def file_block(name: str, content: str) -> str:
    return f"---FILE:{name}---\n{content}\n---END FILE---"

"""
User account endpoints — all protected by X-Service-Token header.
Called by the sign-in layer after a GitHub login succeeds.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.models.user import User
from app.schemas.user import UserCreate, UserCreated, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


# ── Auth dependency ──────────────────────────────────────────────────────────


async def verify_service_token(
    x_service_token: str = Header(..., alias="X-Service-Token"),
) -> None:
    """Verify that the inter-service token matches the configured secret."""
    if x_service_token != settings.service_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid service token",
            headers={"WWW-Authenticate": "Bearer"},
        )


# ── Endpoints ────────────────────────────────────────────────────────────────


@router.post("", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
async def create_or_get_user(
    body: UserCreate,
    db: AsyncSession = Depends(get_db),
    _: None = Depends(verify_service_token),
):
    """
    Create the account for a GitHub user, or return the existing one (idempotent).
    Returns 201 {"id": ..., "created": true} on first sign-in,
            200 {"id": ..., "created": false} afterwards.
    """
    result = await db.execute(
        text("SELECT id FROM users WHERE github_id = :github_id"),
        {"github_id": body.github_id},
    )
    existing = result.fetchone()
    if existing:
        return JSONResponse(
            content=UserCreated(id=existing.id, created=False).model_dump(),
            status_code=status.HTTP_200_OK,
        )

    user = User(
        github_id=body.github_id,
        username=body.username,
        display_name=body.display_name or body.username,
    )
    try:
        db.add(user)
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Failed to create user for github_id=%s: %s", body.github_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user",
        ) from exc

    logger.info("New user created: %s", user.username)
    return UserCreated(id=user.id, created=True)


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    _: None = Depends(verify_service_token),
) -> UserRead:
    """Return the stored account."""
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
            headers={"X-Error-Code": "USER_NOT_FOUND"},
        )
    return UserRead.model_validate(user)

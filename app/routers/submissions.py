"""
Contact form and admin dashboard endpoints.

  POST /submit-dev-contact  public; stores a collaboration request
  POST /admin-login        exchanges the admin password for the admin token
  GET  /admin-submissions  Bearer <admin token>; newest submissions first
"""

from __future__ import annotations

import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.models.submission import Submission
from app.schemas.submission import (
    AdminLogin,
    AdminLoginResponse,
    SubmissionCreate,
    SubmissionListResponse,
    SubmissionRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["submissions"])


# ── Auth dependency ──────────────────────────────────────────────────────────


async def verify_admin_token(
    authorization: Optional[str] = Header(None),
) -> None:
    """Require `Authorization: Bearer <ADMIN_TOKEN>`."""
    expected = f"Bearer {settings.admin_token}"
    if not authorization or not secrets.compare_digest(authorization, expected):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Invalid or missing token.",
        )


# ── Endpoints ────────────────────────────────────────────────────────────────


@router.post("/submit-dev-contact")
async def submit_dev_contact(
    body: SubmissionCreate,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Store a collaboration request from the chat's contact form."""
    submission = Submission(contact=body.contact, message=body.message)
    try:
        db.add(submission)
        await db.commit()
    except Exception as exc:
        await db.rollback()
        logger.error("Error saving submission: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save submission to database.",
        ) from exc

    logger.info(
        "New dev submission (id=%s) contact: %s | message: %s",
        submission.id,
        body.contact,
        body.message,
    )
    return {
        "success": True,
        "message": "Thank you! Your submission has been logged successfully and saved to the database.",
    }


@router.post("/admin-login", response_model=AdminLoginResponse)
async def admin_login(body: AdminLogin) -> AdminLoginResponse:
    """Return the admin token when the password matches ADMIN_PASSWORD."""
    if not body.password or not secrets.compare_digest(body.password, settings.admin_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Admin Password.",
        )
    return AdminLoginResponse(success=True, token=settings.admin_token)


@router.get("/admin-submissions", response_model=SubmissionListResponse)
async def admin_submissions(
    db: AsyncSession = Depends(get_db),
    _: None = Depends(verify_admin_token),
) -> SubmissionListResponse:
    """All submissions, newest first."""
    try:
        result = await db.execute(
            select(Submission).order_by(Submission.timestamp.desc(), Submission.id.desc())
        )
    except Exception as exc:
        logger.error("Error fetching submissions: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error fetching submissions.",
        ) from exc

    submissions = [SubmissionRead.model_validate(s) for s in result.scalars().all()]
    return SubmissionListResponse(success=True, submissions=submissions)

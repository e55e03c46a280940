"""
Chat endpoint — called by the browser client with the full chat history.
Returns the reply text (wire format), the session id, and rendered HTML.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas.chat import ChatRequest, ChatResponse, RenderRequest, RenderResponse
from app.services.chat_pipeline import handle_chat
from app.services.gemini import GeminiError
from app.services.packager import PackagingError
from app.services.renderer import render
from app.services.session_store import SessionStore, get_session_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    store: SessionStore = Depends(get_session_store),
) -> ChatResponse:
    """
    Process the newest user turn and return the AtomicEnd reply.

    Multi-file replies come back with their files packaged into a single
    base64 ZIP segment; `html` holds the same reply rendered for display.
    """
    if not body.contents or not any(p.has_content for p in body.contents[-1].parts):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid request: Content is required.",
            headers={"X-Error-Code": "INVALID_CONTENT"},
        )

    try:
        return await handle_chat(body, store)
    except GeminiError as exc:
        logger.error("Gemini call failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Gemini API Error: {exc}",
            headers={"X-Error-Code": "MODEL_UNAVAILABLE"},
        ) from exc
    except PackagingError as exc:
        logger.error("Packaging failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Packaging failed: the generated files could not be archived.",
            headers={"X-Error-Code": "PACKAGING_FAILED"},
        ) from exc


@router.post("/render", response_model=RenderResponse)
async def render_message(body: RenderRequest) -> RenderResponse:
    """Render stored chat text (e.g. restored history) to display HTML."""
    return RenderResponse(html=render(body.text))

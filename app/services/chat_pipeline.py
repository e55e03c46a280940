"""
Chat pipeline: everything that happens to one chat turn after validation.

  1. register the turn in the session store
  2. image request?      → placeholder reply, no model call
     otherwise           → Gemini (primary, then fallback)
  3. developer question? → scripted collaboration reply replaces the output
  4. two or more file blocks → packaged into one ZIP reference
  5. render the final text to HTML for the client
"""

from __future__ import annotations

import logging

from app.schemas.chat import ChatRequest, ChatResponse
from app.services.gemini import call_gemini, to_gemini_contents
from app.services.packager import package_if_multi_file
from app.services.renderer import render
from app.services.session_store import SessionStore
from app.utils.prompts import (
    DEVELOPER_RESPONSE,
    build_image_placeholder,
    is_developer_query,
    is_image_request,
    shows_contact_form,
)

logger = logging.getLogger(__name__)


async def handle_chat(request: ChatRequest, store: SessionStore) -> ChatResponse:
    """
    Produce the reply for the newest turn of request.contents.

    GeminiError and PackagingError propagate to the router.
    """
    session = store.touch(request.session_id)
    last_text = request.last_user_text

    if is_image_request(last_text):
        logger.info("Session %s: image request answered with placeholder", session.session_id)
        reply = build_image_placeholder(last_text)
    else:
        reply = await call_gemini(to_gemini_contents(request.contents))

    if is_developer_query(last_text):
        reply = DEVELOPER_RESPONSE

    reply = package_if_multi_file(reply)

    return ChatResponse(
        response=reply,
        session_id=session.session_id,
        html=render(reply),
        show_contact_form=shows_contact_form(reply),
    )

"""
Gemini service — wraps Google Generative AI calls for chat turns.

Primary model  : GEMINI_MODEL          (default: gemini-2.5-flash)
Fallback model : GEMINI_FALLBACK_MODEL (default: gemini-2.5-flash-lite)

Both models carry the AtomicEnd system instruction. On any error from the
primary (quota exhaustion, 429, network, blocked response) the same
conversation is retried on the fallback model before GeminiError is raised.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import Any

import google.generativeai as genai

from app.config import settings
from app.schemas.chat import ConversationTurn
from app.utils.prompts import SYSTEM_INSTRUCTION

logger = logging.getLogger(__name__)

genai.configure(api_key=settings.google_api_key)

_primary_model = genai.GenerativeModel(
    settings.gemini_model, system_instruction=SYSTEM_INSTRUCTION
)
_fallback_model = genai.GenerativeModel(
    settings.gemini_fallback_model, system_instruction=SYSTEM_INSTRUCTION
)

PRIMARY_TIMEOUT_SECONDS = 120
FALLBACK_TIMEOUT_SECONDS = 180

_MAX_OUTPUT_TOKENS = 8192

# gRPC / HTTP status codes that indicate quota exhaustion
_QUOTA_INDICATORS = ("RESOURCE_EXHAUSTED", "429", "quota", "rate limit")


class GeminiError(Exception):
    """Raised when both primary and fallback models fail."""


def _is_quota_error(exc: Exception) -> bool:
    """Return True if the exception looks like a quota / rate-limit error."""
    msg = str(exc).lower()
    return any(indicator.lower() in msg for indicator in _QUOTA_INDICATORS)


def to_gemini_contents(turns: list[ConversationTurn]) -> list[dict[str, Any]]:
    """
    Convert client turns into google-generativeai content dicts.

    Inline attachments arrive base64-encoded (checked by the schema) and are
    decoded to bytes here. Parts with neither text nor data are dropped.
    """
    contents: list[dict[str, Any]] = []
    for turn in turns:
        parts: list[dict[str, Any]] = []
        for part in turn.parts:
            if part.text:
                parts.append({"text": part.text})
            if part.inline_data is not None:
                parts.append(
                    {
                        "inline_data": {
                            "mime_type": part.inline_data.mime_type,
                            "data": base64.b64decode(part.inline_data.data),
                        }
                    }
                )
        if parts:
            contents.append({"role": turn.role, "parts": parts})
    return contents


async def _call_model(
    model: genai.GenerativeModel, contents: list[dict[str, Any]], timeout: int
) -> str:
    """
    Call a single model with the given timeout.
    Raises the original exception on failure (caller decides whether to retry).
    """
    response = await asyncio.wait_for(
        asyncio.to_thread(
            model.generate_content,
            contents,
            generation_config=genai.GenerationConfig(max_output_tokens=_MAX_OUTPUT_TOKENS),
        ),
        timeout=timeout,
    )
    return response.text


async def call_gemini(contents: list[dict[str, Any]]) -> str:
    """
    Send the conversation to the primary model; fall back on any failure.

    Returns the raw reply text. Raises GeminiError if the fallback fails too.
    """
    logger.debug("Gemini request (%s): %d turn(s)", settings.gemini_model, len(contents))

    # ── Attempt 1: primary model ─────────────────────────────────────────────
    try:
        return await _call_model(_primary_model, contents, PRIMARY_TIMEOUT_SECONDS)
    except Exception as primary_exc:
        if _is_quota_error(primary_exc):
            logger.warning(
                "Primary model '%s' quota exhausted — switching to fallback '%s'",
                settings.gemini_model,
                settings.gemini_fallback_model,
            )
        else:
            logger.warning(
                "Primary model '%s' failed (%s) — switching to fallback '%s'",
                settings.gemini_model,
                primary_exc,
                settings.gemini_fallback_model,
            )

    # ── Attempt 2: fallback model ─────────────────────────────────────────────
    try:
        text = await _call_model(_fallback_model, contents, FALLBACK_TIMEOUT_SECONDS)
        logger.info("Fallback model '%s' succeeded.", settings.gemini_fallback_model)
        return text
    except Exception as fallback_exc:
        logger.error(
            "Fallback model '%s' also failed: %s",
            settings.gemini_fallback_model,
            fallback_exc,
        )
        raise GeminiError(
            f"Both primary ({settings.gemini_model}) and fallback "
            f"({settings.gemini_fallback_model}) models failed. "
            f"Last error: {fallback_exc}"
        ) from fallback_exc

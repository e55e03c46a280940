"""Tests for POST /chat and POST /render with Gemini replaced."""

from __future__ import annotations

import base64

import pytest

from app.services import chat_pipeline
from app.services.gemini import GeminiError
from app.services.packager import PackagingError, unpack_archive
from app.utils.prompts import DEVELOPER_RESPONSE
from tests.conftest import file_block, user_turn


@pytest.fixture
def gemini_reply(monkeypatch):
    """Replace the model call; returns the list of contents it was called with."""
    calls: list = []
    reply = {"text": "Hello **there**"}

    async def fake_call_gemini(contents):
        calls.append(contents)
        return reply["text"]

    monkeypatch.setattr(chat_pipeline, "call_gemini", fake_call_gemini)

    def set_reply(text: str) -> list:
        reply["text"] = text
        return calls

    set_reply.calls = calls
    return set_reply


def test_empty_contents_rejected(client):
    resp = client.post("/chat", json={"contents": []})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid request: Content is required."
    assert resp.headers["X-Error-Code"] == "INVALID_CONTENT"


def test_last_turn_without_content_rejected(client, gemini_reply):
    body = {"contents": [user_turn("hi"), {"role": "user", "parts": [{"text": ""}]}]}
    resp = client.post("/chat", json=body)
    assert resp.status_code == 400
    assert gemini_reply.calls == []


def test_plain_reply(client, gemini_reply):
    resp = client.post("/chat", json={"contents": [user_turn("say hello")], "sessionId": "s-1"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["response"] == "Hello **there**"
    assert data["sessionId"] == "s-1"
    assert data["html"] == "Hello <strong>there</strong>"
    assert data["showContactForm"] is False


def test_session_id_is_assigned(client, gemini_reply):
    resp = client.post("/chat", json={"contents": [user_turn("hi")]})
    assert resp.status_code == 200
    assert len(resp.json()["sessionId"]) == 32


def test_history_is_forwarded(client, gemini_reply):
    contents = [
        user_turn("first"),
        {"role": "model", "parts": [{"text": "reply"}]},
        user_turn("second"),
    ]
    client.post("/chat", json={"contents": contents})
    [sent] = gemini_reply.calls
    assert [turn["role"] for turn in sent] == ["user", "model", "user"]
    assert sent[-1]["parts"] == [{"text": "second"}]


def test_inline_data_is_decoded(client, gemini_reply):
    image = base64.b64encode(b"\x89PNG fake").decode("ascii")
    turn = {
        "role": "user",
        "parts": [{"inlineData": {"data": image, "mimeType": "image/png"}}],
    }
    resp = client.post("/chat", json={"contents": [turn]})
    assert resp.status_code == 200
    [sent] = gemini_reply.calls
    assert sent[0]["parts"] == [
        {"inline_data": {"mime_type": "image/png", "data": b"\x89PNG fake"}}
    ]


def test_multi_file_reply_is_packaged(client, gemini_reply):
    gemini_reply("Project:\n" + file_block("a.txt", "alpha") + "\n" + file_block("b.txt", "beta"))
    resp = client.post("/chat", json={"contents": [user_turn("make a project")]})
    assert resp.status_code == 200
    data = resp.json()
    assert data["response"].count("---ZIP_RESPONSE:atomicend_project.zip---") == 1
    assert "---FILE:" not in data["response"]
    assert unpack_archive(data["response"]) == {"a.txt": "alpha", "b.txt": "beta"}
    assert "zip-download-btn" in data["html"]


def test_single_file_reply_is_not_packaged(client, gemini_reply):
    reply = file_block("index.html", "<h1>Hi</h1>")
    gemini_reply(reply)
    data = client.post("/chat", json={"contents": [user_turn("one file")]}).json()
    assert data["response"] == reply
    assert "file-download-btn" in data["html"]


def test_developer_question_gets_script(client, gemini_reply):
    gemini_reply("something else entirely")
    data = client.post("/chat", json={"contents": [user_turn("Who made you?")]}).json()
    assert data["response"] == DEVELOPER_RESPONSE
    assert data["showContactForm"] is True


def test_image_request_skips_model(client, gemini_reply):
    data = client.post(
        "/chat", json={"contents": [user_turn("Generate image of a sunset")]}
    ).json()
    assert gemini_reply.calls == []
    assert "generate image of a sunset" in data["response"]


def test_model_failure_is_502(client, monkeypatch):
    async def failing_call(contents):
        raise GeminiError("both models down")

    monkeypatch.setattr(chat_pipeline, "call_gemini", failing_call)
    resp = client.post("/chat", json={"contents": [user_turn("hi")]})
    assert resp.status_code == 502
    assert "both models down" in resp.json()["detail"]
    assert resp.headers["X-Error-Code"] == "MODEL_UNAVAILABLE"


def test_packaging_failure_is_reported(client, gemini_reply, monkeypatch):
    def broken_packager(text):
        raise PackagingError("boom")

    monkeypatch.setattr(chat_pipeline, "package_if_multi_file", broken_packager)
    resp = client.post("/chat", json={"contents": [user_turn("hi")]})
    assert resp.status_code == 500
    assert resp.headers["X-Error-Code"] == "PACKAGING_FAILED"


def test_render_endpoint(client):
    resp = client.post("/render", json={"text": "<b>*hi*</b>"})
    assert resp.status_code == 200
    assert resp.json() == {"html": "&lt;b&gt;<em>hi</em>&lt;/b&gt;"}


def test_invalid_attachment_rejected(client, gemini_reply):
    turn = {"role": "user", "parts": [{"inlineData": {"data": "@@@", "mimeType": "image/png"}}]}
    resp = client.post("/chat", json={"contents": [turn]})
    assert resp.status_code == 422
    assert gemini_reply.calls == []

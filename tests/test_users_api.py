"""Tests for the user account endpoints."""

from __future__ import annotations

SERVICE_HEADERS = {"X-Service-Token": "test-service-token"}


def test_service_token_required(client):
    body = {"github_id": "1", "username": "octo"}
    assert client.post("/users", json=body).status_code == 422
    assert (
        client.post("/users", json=body, headers={"X-Service-Token": "wrong"}).status_code
        == 401
    )


def test_create_is_idempotent(client):
    body = {"github_id": "583231", "username": "octocat"}
    first = client.post("/users", json=body, headers=SERVICE_HEADERS)
    assert first.status_code == 201
    assert first.json()["created"] is True

    second = client.post("/users", json=body, headers=SERVICE_HEADERS)
    assert second.status_code == 200
    assert second.json() == {"id": first.json()["id"], "created": False}


def test_get_user(client):
    created = client.post(
        "/users",
        json={"github_id": "42", "username": "hubot", "display_name": "Hubot"},
        headers=SERVICE_HEADERS,
    ).json()

    resp = client.get(f"/users/{created['id']}", headers=SERVICE_HEADERS)
    assert resp.status_code == 200
    data = resp.json()
    assert data["github_id"] == "42"
    assert data["username"] == "hubot"
    assert data["display_name"] == "Hubot"


def test_display_name_defaults_to_username(client):
    created = client.post(
        "/users", json={"github_id": "77", "username": "monalisa"}, headers=SERVICE_HEADERS
    ).json()
    data = client.get(f"/users/{created['id']}", headers=SERVICE_HEADERS).json()
    assert data["display_name"] == "monalisa"


def test_missing_user(client):
    resp = client.get("/users/999999", headers=SERVICE_HEADERS)
    assert resp.status_code == 404
    assert resp.headers["X-Error-Code"] == "USER_NOT_FOUND"

"""Tests for the contact form and the admin dashboard API."""

from __future__ import annotations

ADMIN_HEADERS = {"Authorization": "Bearer test-admin-token"}


def test_submit_contact(client):
    resp = client.post(
        "/submit-dev-contact", json={"contact": "dev@example.com", "message": "count me in"}
    )
    assert resp.status_code == 200
    assert resp.json()["success"] is True


def test_submit_requires_both_fields(client):
    assert client.post("/submit-dev-contact", json={"contact": "x"}).status_code == 422
    assert (
        client.post("/submit-dev-contact", json={"contact": "", "message": "hi"}).status_code
        == 422
    )


def test_admin_login(client):
    bad = client.post("/admin-login", json={"password": "nope"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Invalid Admin Password."

    good = client.post("/admin-login", json={"password": "test-admin-password"})
    assert good.status_code == 200
    assert good.json() == {"success": True, "token": "test-admin-token"}


def test_admin_submissions_require_token(client):
    assert client.get("/admin-submissions").status_code == 403
    assert (
        client.get("/admin-submissions", headers={"Authorization": "Bearer wrong"}).status_code
        == 403
    )


def test_admin_submissions_newest_first(client):
    client.post("/submit-dev-contact", json={"contact": "older@example.com", "message": "one"})
    client.post("/submit-dev-contact", json={"contact": "newer@example.com", "message": "two"})

    resp = client.get("/admin-submissions", headers=ADMIN_HEADERS)
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    contacts = [s["contact"] for s in data["submissions"]]
    assert contacts.index("newer@example.com") < contacts.index("older@example.com")

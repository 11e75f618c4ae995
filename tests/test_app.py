from __future__ import annotations

from dataclasses import replace

from fastapi.testclient import TestClient

from realtalk_backend.api.server import create_app


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["message"] == "Realtalk AI Backend is healthy!"
    assert body["timestamp"].endswith("Z")


def test_dashboard_sections(client):
    stats = client.get("/api/dashboard/stats").json()
    assert stats["users"] == 2453
    assert stats["orderChange"] == -5

    activity = client.get("/api/dashboard/activity").json()
    assert [a["type"] for a in activity] == ["user", "payment", "alert", "comment"]

    chart = client.get("/api/dashboard/chart").json()
    assert len(chart["labels"]) == len(chart["values"]) == 7

    customers = client.get("/api/dashboard/customers").json()
    assert {c["status"] for c in customers} == {"active", "pending"}


def test_dashboard_unknown_section_is_404(client):
    resp = client.get("/api/dashboard/revenue-forecast")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "not_found"}


def test_root_serves_dashboard_page(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "Realtalk AI Dashboard" in resp.text


def test_missing_static_dir_is_skipped(cfg, tmp_path):
    app = create_app(replace(cfg, STATIC_DIR=str(tmp_path / "no-such-dir")))
    with TestClient(app) as c:
        assert c.get("/health").status_code == 200
        assert c.get("/").status_code == 404


def test_unhandled_error_hides_message_outside_development(app, monkeypatch):
    def boom(**kwargs):
        raise RuntimeError("connection refused: db-primary:5432")

    monkeypatch.setattr(app.state.auth, "login", boom)
    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.post("/api/auth/login", json={"email": "alice@realtalk.io", "password": "whatever1"})
    assert resp.status_code == 500
    assert resp.json() == {"detail": "internal_error"}


def test_unhandled_error_shows_message_in_development(cfg, monkeypatch):
    app = create_app(replace(cfg, APP_ENV="development"))

    def boom(**kwargs):
        raise RuntimeError("connection refused: db-primary:5432")

    monkeypatch.setattr(app.state.auth, "login", boom)
    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.post("/api/auth/login", json={"email": "alice@realtalk.io", "password": "whatever1"})
    assert resp.status_code == 500
    assert resp.json() == {"detail": "internal_error", "message": "connection refused: db-primary:5432"}


def test_cors_preflight(client):
    resp = client.options(
        "/api/auth/login",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Authorization, Content-Type",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] in ("*", "http://localhost:3000")

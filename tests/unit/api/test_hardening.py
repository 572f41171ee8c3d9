"""
Name: HTTP Hardening Tests

Responsibilities:
  - Security headers and request id propagation
  - Body size limit (413 RFC7807)
  - Login brute-force limiter (429 + Retry-After), per client IP and per email
  - Health/readiness endpoints
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from notaria.crosscutting import rate_limit
from notaria.crosscutting.config import get_settings
from notaria.crosscutting.middleware import BodyLimitMiddleware
from notaria.crosscutting.security import SecurityHeadersMiddleware

pytestmark = pytest.mark.unit


def test_health_endpoints(client):
    assert client.get("/healthz").json()["ok"] is True
    assert client.get("/api/health").json()["ok"] is True

    ready = client.get("/readyz").json()
    assert ready == {"ok": True, "db": "connected", "request_id": ready["request_id"]}


def test_security_headers_present(client):
    res = client.get("/healthz")

    assert res.headers["X-Content-Type-Options"] == "nosniff"
    assert res.headers["X-Frame-Options"] == "DENY"
    assert "unsafe-inline" in res.headers["Content-Security-Policy"]
    assert "Strict-Transport-Security" not in res.headers


def test_production_headers_are_strict_and_hsts_on_https():
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware, is_production=True)

    @app.get("/ping")
    def _ping() -> dict[str, bool]:
        return {"ok": True}

    res = TestClient(app).get("/ping", headers={"X-Forwarded-Proto": "https"})

    assert "unsafe-inline" not in res.headers["Content-Security-Policy"]
    assert res.headers["Strict-Transport-Security"].startswith("max-age=")


def test_request_id_is_propagated(client):
    res = client.get("/healthz", headers={"X-Request-Id": "req-123"})

    assert res.headers["X-Request-Id"] == "req-123"
    assert res.json()["request_id"] == "req-123"


def test_request_id_is_generated_when_missing(client):
    res = client.get("/healthz")

    assert res.headers["X-Request-Id"]


def test_body_limit_returns_413():
    app = FastAPI()
    app.add_middleware(BodyLimitMiddleware, max_bytes=10)

    @app.post("/echo")
    async def _echo(payload: dict) -> dict:
        return payload

    res = TestClient(app).post("/echo", json={"repertorio": "X" * 100})

    assert res.status_code == 413
    assert res.json()["code"] == "PAYLOAD_TOO_LARGE"


def test_login_is_rate_limited(client, monkeypatch):
    monkeypatch.setattr(rate_limit, "is_rate_limiting_enabled", lambda: True)
    credentials = {"email": "alice@example.com", "password": "wrong-pass"}

    statuses = [
        client.post("/api/auth/login", json=credentials).status_code for _ in range(6)
    ]

    assert statuses[:5] == [401] * 5
    assert statuses[5] == 429
    blocked = client.post("/api/auth/login", json=credentials)
    assert blocked.json()["code"] == "RATE_LIMITED"
    assert int(blocked.headers["Retry-After"]) > 0


def test_login_limit_ignores_spoofed_forwarded_for(client, monkeypatch):
    monkeypatch.setattr(rate_limit, "is_rate_limiting_enabled", lambda: True)

    statuses = [
        client.post(
            "/api/auth/login",
            json={"email": f"user{i}@example.com", "password": "wrong-pass"},
            headers={"X-Forwarded-For": f"198.51.100.{i}"},
        ).status_code
        for i in range(6)
    ]

    assert statuses == [401] * 5 + [429]


def test_login_limit_per_email_across_client_ips(client, monkeypatch):
    monkeypatch.setattr(rate_limit, "is_rate_limiting_enabled", lambda: True)
    monkeypatch.setenv("TRUST_PROXY_HEADERS", "true")
    get_settings.cache_clear()

    statuses = [
        client.post(
            "/api/auth/login",
            json={"email": " Alice@Example.com", "password": "wrong-pass"},
            headers={"X-Forwarded-For": f"198.51.100.{i}"},
        ).status_code
        for i in range(6)
    ]

    assert statuses == [401] * 5 + [429]

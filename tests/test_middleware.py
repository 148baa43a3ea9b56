"""
tests/test_middleware.py — Edge request filter
"""
from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.core.security.perimeter import (
    EdgeRequestFilter,
    PerimeterConfig,
    SuspiciousActivityTracker,
    build_content_security_policy,
    has_path_traversal,
)

ATTACKER = {"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}
BOT = {**ATTACKER, "User-Agent": "python-requests/2.31"}


def _build_app(tracker: SuspiciousActivityTracker, config: PerimeterConfig) -> FastAPI:
    app = FastAPI()
    app.add_middleware(EdgeRequestFilter, tracker=tracker, config=config)

    @app.get("/catalog")
    def catalog():
        return {"items": []}

    @app.get("/catalog/{name:path}")
    def catalog_item(name: str):
        return {"name": name}

    @app.get("/api/products")
    def products():
        return {"items": []}

    @app.get("/admin")
    def admin():
        return {"admin": True}

    @app.get("/_next/static/{name:path}")
    def next_static(name: str):
        return {"static": name}

    @app.get("/_next/staticanything")
    def lookalike():
        return {"static": False}

    return app


@pytest.fixture
def perimeter_config():
    return PerimeterConfig()


@pytest.fixture
def edge_client(tracker, perimeter_config):
    return TestClient(_build_app(tracker, perimeter_config))


def test_pass_through_adds_security_headers(edge_client):
    response = edge_client.get("/catalog")
    assert response.status_code == 200
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-XSS-Protection"] == "1; mode=block"
    assert response.headers["Referrer-Policy"] == "no-referrer"
    assert response.headers["Permissions-Policy"] == (
        "geolocation=(), microphone=(), camera=(), payment=(), usb=()"
    )
    assert response.headers["Strict-Transport-Security"] == "max-age=31536000; includeSubDomains"
    assert "frame-ancestors 'none'" in response.headers["Content-Security-Policy"]


def test_csp_allows_only_trusted_backend():
    csp = build_content_security_policy("https://backend.example.com")
    assert "connect-src 'self' https://backend.example.com;" in csp
    assert csp.startswith("default-src 'self';")


def test_bot_user_agent_is_forbidden_on_pages(edge_client, tracker):
    response = edge_client.get("/catalog", headers=BOT)
    assert response.status_code == 403
    assert response.text == "Forbidden"
    assert tracker.snapshot().tracked_addresses == 1


def test_bot_user_agent_allowed_on_api(edge_client):
    response = edge_client.get("/api/products", headers=BOT)
    assert response.status_code == 200


def test_path_traversal_is_rejected(edge_client, tracker):
    response = edge_client.get("/catalog/..%2Fsecrets", headers=ATTACKER)
    assert response.status_code == 400
    assert response.text == "Invalid Path"
    assert tracker.snapshot().tracked_addresses == 1


@pytest.mark.parametrize(
    "path, raw_path, expected",
    [
        ("/catalog/../etc", None, True),
        ("/catalog/x", "/catalog/%2E%2E/etc", True),
        ("/catalog/x", "/catalog/%2e%2e%2fetc", True),
        ("/catalog/a.b", "/catalog/a.b", False),
    ],
)
def test_has_path_traversal(path, raw_path, expected):
    assert has_path_traversal(path, raw_path) is expected


def test_six_violations_block_address(edge_client, tracker):
    for _ in range(6):
        assert edge_client.get("/catalog", headers=BOT).status_code == 403
    assert tracker.is_blocked("203.0.113.7") is True

    # 無害なリクエストでも拒否される
    response = edge_client.get("/catalog", headers=ATTACKER)
    assert response.status_code == 403
    assert response.text == "Access Denied"

    # 他のアドレスには影響しない
    assert edge_client.get("/catalog", headers={"X-Forwarded-For": "198.51.100.1"}).status_code == 200


def test_amnesty_unblocks_address(edge_client, tracker):
    for _ in range(6):
        edge_client.get("/catalog", headers=BOT)
    tracker.amnesty()
    assert edge_client.get("/catalog", headers=ATTACKER).status_code == 200


def test_real_ip_header_used_without_forwarded_for(edge_client, tracker):
    edge_client.get("/catalog", headers={"X-Real-IP": "192.0.2.44", "User-Agent": "curl/8.0"})
    for _ in range(5):
        edge_client.get("/catalog", headers={"X-Real-IP": "192.0.2.44", "User-Agent": "curl/8.0"})
    assert tracker.is_blocked("192.0.2.44") is True


def test_static_paths_bypass_filter(edge_client):
    response = edge_client.get("/_next/static/chunks/main.js", headers=BOT)
    assert response.status_code == 200
    assert "X-Frame-Options" not in response.headers


def test_admin_redirect_when_enabled(tracker):
    config = PerimeterConfig(protect_admin_routes=True)
    client = TestClient(_build_app(tracker, config))

    response = client.get("/admin", follow_redirects=False)
    assert response.status_code == 307
    assert response.headers["location"] == "/login"

    authed = client.get("/admin", headers={"Authorization": "Bearer token"})
    assert authed.status_code == 200


def test_admin_not_protected_by_default(edge_client):
    assert edge_client.get("/admin").status_code == 200


def test_disabled_filter_still_sets_headers(tracker):
    client = TestClient(_build_app(tracker, PerimeterConfig(enabled=False)))
    response = client.get("/catalog", headers=BOT)
    assert response.status_code == 200
    assert response.headers["X-Frame-Options"] == "DENY"


def test_exclusion_matches_whole_path_segments(edge_client, tracker):
    response = edge_client.get("/_next/staticanything", headers=BOT)
    assert response.status_code == 403
    assert tracker.snapshot().tracked_addresses == 1


def test_traversal_under_static_prefix_is_rejected(edge_client, tracker):
    response = edge_client.get("/_next/static/..%2F..%2Fsecret", headers=ATTACKER)
    assert response.status_code == 400
    assert response.text == "Invalid Path"
    assert tracker.snapshot().tracked_addresses == 1


def test_unlisted_static_directory_is_filtered(edge_client):
    assert edge_client.get("/static/logo.png", headers=BOT).status_code == 403

"""
tests/test_auth_routes.py — Login validation endpoint
"""
from __future__ import annotations

from app.core.security.rate_limit import rate_limit_service

CLIENT = {"X-Forwarded-For": "1.2.3.4"}


def test_valid_credentials_return_success(client):
    response = client.post(
        "/api/auth/validate",
        json={"email": "shopper@example.com", "password": "secret"},
        headers=CLIENT,
    )
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert response.headers["X-Frame-Options"] == "DENY"


def test_missing_password_is_bad_request(client):
    response = client.post("/api/auth/validate", json={"email": "shopper@example.com"}, headers=CLIENT)
    assert response.status_code == 400
    assert "detail" in response.json()


def test_invalid_email_format_is_bad_request(client):
    response = client.post(
        "/api/auth/validate",
        json={"email": "not-an-email", "password": "secret"},
        headers=CLIENT,
    )
    assert response.status_code == 400


def test_email_is_sanitized_before_format_check(client):
    response = client.post(
        "/api/auth/validate",
        json={"email": "  <shopper@example.com>  ", "password": "secret"},
        headers=CLIENT,
    )
    assert response.status_code == 200


def test_malformed_json_is_bad_request(client):
    response = client.post(
        "/api/auth/validate",
        content=b"{not json",
        headers={**CLIENT, "Content-Type": "application/json"},
    )
    assert response.status_code == 400


def test_non_object_body_is_bad_request(client):
    response = client.post("/api/auth/validate", json=["a", "b"], headers=CLIENT)
    assert response.status_code == 400


def test_sixth_attempt_in_window_is_rate_limited(client):
    body = {"email": "shopper@example.com", "password": "secret"}
    statuses = [
        client.post("/api/auth/validate", json=body, headers=CLIENT).status_code
        for _ in range(6)
    ]
    assert statuses == [200] * 5 + [429]

    limited = client.post("/api/auth/validate", json=body, headers=CLIENT)
    assert limited.status_code == 429
    assert "detail" in limited.json()
    assert limited.headers["X-RateLimit-Limit"] == "5"
    assert int(limited.headers["Retry-After"]) >= 1

    # 別のアドレスは影響を受けない
    other = client.post("/api/auth/validate", json=body, headers={"X-Forwarded-For": "5.6.7.8"})
    assert other.status_code == 200


def test_invalid_attempts_count_toward_limit(client):
    for _ in range(5):
        client.post("/api/auth/validate", json={}, headers=CLIENT)
    response = client.post(
        "/api/auth/validate",
        json={"email": "shopper@example.com", "password": "secret"},
        headers=CLIENT,
    )
    assert response.status_code == 429


def test_clearing_identifier_lifts_limit(client):
    body = {"email": "shopper@example.com", "password": "secret"}
    for _ in range(6):
        client.post("/api/auth/validate", json=body, headers=CLIENT)

    rate_limit_service.clear("login:1.2.3.4")
    assert client.post("/api/auth/validate", json=body, headers=CLIENT).status_code == 200


def test_allowed_response_reports_remaining_quota(client):
    body = {"email": "shopper@example.com", "password": "secret"}
    first = client.post("/api/auth/validate", json=body, headers=CLIENT)
    second = client.post("/api/auth/validate", json=body, headers=CLIENT)

    assert first.headers["X-RateLimit-Limit"] == "5"
    assert first.headers["X-RateLimit-Remaining"] == "4"
    assert second.headers["X-RateLimit-Remaining"] == "3"
    assert int(first.headers["X-RateLimit-Reset"]) > 0

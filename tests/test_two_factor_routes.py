"""
tests/test_two_factor_routes.py — OTP and backup code endpoints
"""
from __future__ import annotations

from unittest.mock import patch

from app.core.security.otp import OTPService, otp_service


def test_issue_requires_authentication(client):
    response = client.post("/api/2fa/issue")
    assert response.status_code == 401


def test_token_without_subject_is_rejected(client):
    response = client.post("/api/2fa/issue", headers={"Authorization": "Bearer token"})
    assert response.status_code == 401


def test_issue_response_never_contains_code(client, auth_headers):
    with patch("app.core.security.otp.service.secrets.randbelow", return_value=765432):
        response = client.post("/api/2fa/issue", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"message", "expires_in"}
    assert body["expires_in"] == 300
    assert "865432" not in response.text
    assert otp_service.pending_count >= 1


def test_issue_then_verify_round_trip(client, auth_headers):
    with patch("app.core.security.otp.service.secrets.randbelow", return_value=23456):
        client.post("/api/2fa/issue", headers=auth_headers)

    ok = client.post("/api/2fa/verify", json={"code": "123456"}, headers=auth_headers)
    assert ok.json() == {"valid": True}

    again = client.post("/api/2fa/verify", json={"code": "123456"}, headers=auth_headers)
    assert again.json() == {"valid": False}


def test_wrong_code_reports_uniform_failure(client, auth_headers):
    client.post("/api/2fa/issue", headers=auth_headers)
    response = client.post("/api/2fa/verify", json={"code": "abc"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"valid": False}


def test_session_cookie_counts_as_authenticated(client):
    client.cookies.set("sb-access-token", "cookie-token")
    try:
        response = client.post("/api/2fa/issue", headers={"X-User-Id": "cookie-user"})
    finally:
        client.cookies.clear()
    assert response.status_code == 200


def test_backup_codes_return_matching_hashes(client, auth_headers):
    response = client.post("/api/2fa/backup-codes", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert len(body["backup_codes"]) == 10
    assert body["hashes"] == [OTPService.hash_backup_code(code) for code in body["backup_codes"]]


def test_non_ascii_code_reports_uniform_failure(client, auth_headers):
    with patch("app.core.security.otp.service.secrets.randbelow", return_value=23456):
        client.post("/api/2fa/issue", headers=auth_headers)

    response = client.post("/api/2fa/verify", json={"code": "é"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"valid": False}

    # 失敗は1回分として数えられ、正しいコードはまだ使える
    ok = client.post("/api/2fa/verify", json={"code": "123456"}, headers=auth_headers)
    assert ok.json() == {"valid": True}


def test_verify_reports_rate_limit_headers(client, auth_headers):
    client.post("/api/2fa/issue", headers=auth_headers)
    response = client.post("/api/2fa/verify", json={"code": "000000"}, headers=auth_headers)
    assert response.headers["X-RateLimit-Limit"] == "10"
    assert response.headers["X-RateLimit-Remaining"] == "9"
    assert "X-RateLimit-Reset" in response.headers

"""
通過したレスポンスに付与するセキュリティヘッダー
"""
from typing import Dict, MutableMapping, Optional

from app.core.config import settings


def build_content_security_policy(trusted_backend_origin: str) -> str:
    """自サイトと信頼済みバックエンドのみを許可するCSP"""
    return (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-eval' 'unsafe-inline'; "
        "style-src 'self' 'unsafe-inline'; "
        "img-src 'self' data: https:; "
        "font-src 'self' data:; "
        f"connect-src 'self' {trusted_backend_origin}; "
        "frame-ancestors 'none'; "
        "base-uri 'self'"
    )


def build_security_headers(trusted_backend_origin: Optional[str] = None) -> Dict[str, str]:
    origin = trusted_backend_origin or settings.trusted_backend_origin
    return {
        "X-Frame-Options": "DENY",
        "X-Content-Type-Options": "nosniff",
        "X-XSS-Protection": "1; mode=block",
        "Referrer-Policy": "no-referrer",
        "Permissions-Policy": "geolocation=(), microphone=(), camera=(), payment=(), usb=()",
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
        "Content-Security-Policy": build_content_security_policy(origin),
    }


SECURITY_HEADERS = build_security_headers()


def apply_security_headers(headers: MutableMapping[str, str], security_headers: Optional[Dict[str, str]] = None) -> None:
    for name, value in (security_headers or SECURITY_HEADERS).items():
        headers[name] = value

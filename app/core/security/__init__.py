"""
ペリメータ防御セキュリティモジュール
"""

# リクエスト情報のヘルパーをエクスポート
from .request_info import get_client_ip, get_user_agent

# 監査ログ関連の機能をエクスポート
from .audit import AuditService, AuditEventType, AuditStatus, record_security_event, dispatch_security_event

# レート制限関連の機能をエクスポート
from .rate_limit import (
    RateLimitService, rate_limit_service, rate_limit_dependency,
    check_auth_login_rate_limit, check_otp_verify_rate_limit
)

# 入力検査関連の機能をエクスポート
from .threat import scan, sanitize, screen_payload, screened_body, ScreenedPayload, ThreatRejected

# OTP関連の機能をエクスポート
from .otp import otp_router, OTPService, otp_service

# エッジフィルタ関連の機能をエクスポート
from .perimeter import EdgeRequestFilter, SuspiciousActivityTracker, activity_tracker

__all__ = [
    "get_client_ip",
    "get_user_agent",
    "AuditService",
    "AuditEventType",
    "AuditStatus",
    "record_security_event",
    "dispatch_security_event",
    "RateLimitService",
    "rate_limit_service",
    "rate_limit_dependency",
    "check_auth_login_rate_limit",
    "check_otp_verify_rate_limit",
    "scan",
    "sanitize",
    "screen_payload",
    "screened_body",
    "ScreenedPayload",
    "ThreatRejected",
    "otp_router",
    "OTPService",
    "otp_service",
    "EdgeRequestFilter",
    "SuspiciousActivityTracker",
    "activity_tracker",
]

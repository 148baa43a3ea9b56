# レート制限サービスクラスをエクスポート
from .service import RateLimitService, rate_limit_service

# レート制限の依存関数をエクスポート
from .dependencies import (
    enforce_rate_limit,
    rate_limit_headers,
    rate_limit_dependency,
    check_auth_login_rate_limit,
    check_otp_verify_rate_limit,
    AUTH_LOGIN_RULE,
    OTP_VERIFY_RULE,
)

# レート制限設定をエクスポート
from .config import RateLimitConfig

# レート制限モデルをエクスポート
from .models import RateWindow, RateLimitRule, RateLimitStatus

__all__ = [
    "RateLimitService",
    "rate_limit_service",
    "enforce_rate_limit",
    "rate_limit_headers",
    "rate_limit_dependency",
    "check_auth_login_rate_limit",
    "check_otp_verify_rate_limit",
    "AUTH_LOGIN_RULE",
    "OTP_VERIFY_RULE",
    "RateLimitConfig",
    "RateWindow",
    "RateLimitRule",
    "RateLimitStatus",
]

"""
レート制限の依存性注入
"""

import logging
import math
from typing import Callable, Dict, Optional

from fastapi import Request, Response, HTTPException, status

from app.core.security.audit import AuditEventType, AuditStatus, dispatch_security_event
from app.core.security.request_info import get_client_ip
from .service import RateLimitService, rate_limit_service
from .models import RateLimitRule, RateLimitStatus
from .config import default_config

# ロガーの設定
logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "リクエスト回数が上限に達しました。しばらく待ってから再試行してください。"

# ログイン検証（1分間に5回まで）
AUTH_LOGIN_RULE = RateLimitRule(
    name="auth_login",
    key_prefix="login",
    max_requests=default_config.auth_login_max_requests,
    window_seconds=default_config.auth_login_window_seconds,
    error_message=default_config.error_messages.get("auth_login"),
)

# OTP検証
OTP_VERIFY_RULE = RateLimitRule(
    name="otp_verify",
    key_prefix="otp",
    max_requests=default_config.otp_verify_max_requests,
    window_seconds=default_config.otp_verify_window_seconds,
    error_message=default_config.error_messages.get("otp_verify"),
)


def rate_limit_headers(status_: RateLimitStatus) -> Dict[str, str]:
    """RateLimitStatus から X-RateLimit-* ヘッダーを作る"""
    headers = {
        "X-RateLimit-Limit": str(status_.max_allowed),
        "X-RateLimit-Remaining": str(status_.remaining_requests),
    }
    if status_.reset_time is not None:
        headers["X-RateLimit-Reset"] = str(math.ceil(status_.reset_time.timestamp()))
    return headers


def enforce_rate_limit(
    request: Request,
    rule: RateLimitRule,
    service: Optional[RateLimitService] = None,
    response: Optional[Response] = None,
) -> str:
    """ルールに従ってクライアントIP単位で制限をかける。超過時は429を送出する

    許可した場合も response があれば現在の残り回数をヘッダーに付与する。
    """
    service = service or rate_limit_service
    identifier = rule.identifier_for(get_client_ip(request))

    allowed = service.check(identifier, rule.max_requests, rule.window_seconds)
    headers = rate_limit_headers(service.get_status(identifier, rule.max_requests))

    if not allowed:
        remaining = service.seconds_until_reset(identifier)
        retry_after = max(1, math.ceil(remaining if remaining is not None else rule.window_seconds))

        logger.info(f"レート制限違反: rule={rule.name}, identifier={identifier}")
        dispatch_security_event(
            AuditEventType.RATE_LIMIT_EXCEEDED,
            AuditStatus.FAILURE,
            resource=rule.name,
            action="rate_limit",
            request=request,
            details={"identifier": identifier},
        )
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=rule.error_message or DEFAULT_ERROR_MESSAGE,
            headers={**headers, "Retry-After": str(retry_after)},
        )

    if response is not None:
        response.headers.update(headers)
    return identifier


def rate_limit_dependency(rule: RateLimitRule) -> Callable[..., str]:
    """ルールからFastAPIの依存関数を作る（戻り値は使用した識別子）"""

    def dependency(request: Request, response: Response) -> str:
        return enforce_rate_limit(request, rule, response=response)

    dependency.__name__ = f"check_{rule.name}_rate_limit"
    return dependency


check_auth_login_rate_limit = rate_limit_dependency(AUTH_LOGIN_RULE)
check_otp_verify_rate_limit = rate_limit_dependency(OTP_VERIFY_RULE)

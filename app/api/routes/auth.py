# app/api/routes/auth.py
"""
 - ログイン入力検証用APIルートを定義するモジュール。
 - セッションの発行はホスト型認証プロバイダが行うため、
   ここではメールアドレス・パスワードの入力形式だけを検証する。
 - 1クライアントあたり1分間に5回まで（超過時は429）。
"""

import re
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Request
from pydantic import ValidationError

from app.schemas.auth import LoginRequest, LoginValidationResponse
from app.core.security.audit import AuditEventType, AuditStatus, dispatch_security_event
from app.core.security.rate_limit import check_auth_login_rate_limit
from app.core.security.threat import sanitize_text

# ロガーの設定
logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

router = APIRouter(prefix="/auth", tags=["Auth"])


def _reject(request: Request, reason: str, detail: str, email: Optional[str] = None):
    """入力不正として監査ログに残し、400を送出"""
    dispatch_security_event(
        AuditEventType.AUTH_LOGIN_FAILURE,
        AuditStatus.FAILURE,
        resource="auth",
        action="validate",
        request=request,
        details={"reason": reason, "email": email},
    )
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


# ログイン入力の検証API
@router.post("/validate", response_model=LoginValidationResponse)
async def validate_login(
    request: Request,
    rate_limit_identifier: str = Depends(check_auth_login_rate_limit),
):
    try:
        body = await request.json()
    except ValueError:
        _reject(request, "malformed_body", "リクエストボディが不正です")

    try:
        login = LoginRequest.model_validate(body)
    except ValidationError:
        _reject(request, "malformed_body", "リクエストボディが不正です")

    email = sanitize_text(login.email) if login.email else ""
    password = login.password or ""

    if not email or not password:
        _reject(request, "missing_fields", "メールアドレスとパスワードは必須です", email or None)

    if not EMAIL_PATTERN.match(email):
        _reject(request, "invalid_email", "メールアドレスの形式が正しくありません", email)

    logger.debug(f"ログイン入力の検証に成功: {rate_limit_identifier}")
    dispatch_security_event(
        AuditEventType.AUTH_LOGIN_ATTEMPT,
        AuditStatus.SUCCESS,
        resource="auth",
        action="validate",
        request=request,
        details={"email": email},
    )
    return LoginValidationResponse(success=True)

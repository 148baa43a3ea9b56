"""
エッジリクエストフィルタ
全リクエストがページ・APIルートに届く前に、以下の順で判定する。
  1. ブロック中のアドレス        → 403 Access Denied
  2. ボットのUser-Agent（API以外） → 追跡 + 403 Forbidden
  3. パストラバーサル             → 追跡 + 400 Invalid Path
  4. それ以外は通過させ、セキュリティヘッダーを付与
"""

import re
import logging
from typing import Dict, Optional

from fastapi import Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from app.core.dependencies import has_session_token
from app.core.security.audit import AuditEventType, AuditStatus, dispatch_security_event
from app.core.security.request_info import get_client_ip, get_raw_path, get_user_agent
from .config import PerimeterConfig, perimeter_config
from .headers import apply_security_headers, build_security_headers
from .tracker import SuspiciousActivityTracker, activity_tracker

# ロガーの設定
logger = logging.getLogger(__name__)

_ENCODED_PARENT_DIR = "%2e%2e"


def has_path_traversal(path: str, raw_path: Optional[str] = None) -> bool:
    """親ディレクトリへの移動（`..` またはURLエンコード形）を含むか"""
    for candidate in (path, raw_path or ""):
        if ".." in candidate or _ENCODED_PARENT_DIR in candidate.lower():
            return True
    return False


class EdgeRequestFilter(BaseHTTPMiddleware):
    """ペリメータ防御ミドルウェア"""

    def __init__(
        self,
        app: ASGIApp,
        tracker: Optional[SuspiciousActivityTracker] = None,
        config: Optional[PerimeterConfig] = None,
        security_headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(app)
        self.tracker = tracker or activity_tracker
        self.config = config or perimeter_config
        self.security_headers = security_headers or build_security_headers()
        self._bot_pattern = re.compile(self.config.bot_user_agent_pattern, re.IGNORECASE)

    def is_bot(self, user_agent: str) -> bool:
        return self._bot_pattern.search(user_agent) is not None

    def _is_excluded(self, path: str, raw_path: Optional[str] = None) -> bool:
        """パスのセグメント単位で除外対象か判定（`/_next/staticx` などは対象外）"""
        if has_path_traversal(path, raw_path):
            return False
        return any(
            path == prefix or path.startswith(prefix.rstrip("/") + "/")
            for prefix in self.config.excluded_path_prefixes
        )

    def _flag(self, request: Request, ip: str, event_type: AuditEventType, path: str) -> None:
        """違反を追跡し、監査ログに残す"""
        newly_blocked = self.tracker.track(ip)
        dispatch_security_event(
            event_type,
            AuditStatus.SUSPICIOUS,
            resource="perimeter",
            action=request.method,
            ip_address=ip,
            details={"path": path, "user_agent": get_user_agent(request)},
        )
        if newly_blocked:
            dispatch_security_event(
                AuditEventType.PERIMETER_IP_BLOCKED,
                AuditStatus.SUSPICIOUS,
                resource="perimeter",
                action="block",
                ip_address=ip,
                details={"policy": self.config.block_policy},
            )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path

        if self._is_excluded(path, get_raw_path(request)):
            return await call_next(request)

        if self.config.enabled:
            ip = get_client_ip(request)

            # 1. ブロック中のアドレス
            if self.tracker.is_blocked(ip):
                logger.debug(f"ブロック中のアドレスを拒否: {ip}")
                return PlainTextResponse("Access Denied", status_code=403)

            # 2. ボット・スキャナーの検知（APIパスは対象外）
            if self.is_bot(get_user_agent(request)) and not path.startswith(self.config.api_path_prefix):
                self._flag(request, ip, AuditEventType.PERIMETER_BOT_DETECTED, path)
                return PlainTextResponse("Forbidden", status_code=403)

            # 3. パストラバーサル
            if has_path_traversal(path, get_raw_path(request)):
                self._flag(request, ip, AuditEventType.PERIMETER_PATH_TRAVERSAL, path)
                return PlainTextResponse("Invalid Path", status_code=400)

            # 管理画面の保護（設定で有効化した場合のみ）
            if (
                self.config.protect_admin_routes
                and path.startswith(self.config.admin_path_prefix)
                and not has_session_token(request)
            ):
                dispatch_security_event(
                    AuditEventType.PERIMETER_ADMIN_REDIRECT,
                    AuditStatus.FAILURE,
                    resource="perimeter",
                    action="redirect",
                    ip_address=ip,
                    details={"path": path},
                )
                response = RedirectResponse(url=self.config.login_path, status_code=307)
                apply_security_headers(response.headers, self.security_headers)
                return response

        # 4. 通過 + セキュリティヘッダー
        response = await call_next(request)
        apply_security_headers(response.headers, self.security_headers)
        return response

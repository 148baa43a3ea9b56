"""
監査ログサービスクラス
セキュリティイベントの記録と管理
"""
import asyncio
import functools
import logging
from typing import Optional, Dict, Any, List

from sqlalchemy.orm import Session
from starlette.requests import HTTPConnection

from app.db.database import SessionLocal
from app.core.security.request_info import get_client_ip, get_user_agent
from app.core.security.audit.models import AuditLog, AuditEventType, AuditStatus
from app.core.security.audit.config import AuditConfig, audit_config

# ロガーの設定
logger = logging.getLogger(__name__)


class AuditService:
    """監査ログのビジネスロジックを提供"""

    def __init__(self, db: Session, config: Optional[AuditConfig] = None):
        self.db = db
        self.config = config or audit_config

    def log_event(
        self,
        event_type: AuditEventType,
        status: AuditStatus = AuditStatus.SUCCESS,
        user_id: Optional[str] = None,
        resource: Optional[str] = None,
        action: Optional[str] = None,
        request: Optional[HTTPConnection] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> Optional[AuditLog]:
        """監査イベントを記録（失敗時はロールバックして例外を再送出）"""

        if not self.config.AUDIT_ENABLED:
            return None

        # リクエスト情報の抽出
        if request is not None:
            ip_address = ip_address or get_client_ip(request)
            user_agent = user_agent or get_user_agent(request)

        # 機密情報のマスキング
        if details and self.config.AUDIT_MASK_SENSITIVE:
            details = self._mask_sensitive_data(details)

        audit_log = AuditLog(
            user_id=user_id,
            event_type=AuditEventType(event_type).value,
            resource=resource,
            action=action,
            status=AuditStatus(status).value,
            ip_address=ip_address,
            user_agent=user_agent,
            details=details,
        )

        try:
            self.db.add(audit_log)
            self.db.commit()
            self.db.refresh(audit_log)
            return audit_log
        except Exception:
            self.db.rollback()
            raise

    def _mask_sensitive_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """機密情報をマスキング"""
        masked_data = data.copy()

        for field in self.config.AUDIT_SENSITIVE_FIELDS:
            if field in masked_data:
                masked_data[field] = "***MASKED***"

        return masked_data

    def get_logs_by_status(
        self,
        status: AuditStatus,
        limit: int = 10,
    ) -> List[AuditLog]:
        """指定した結果の監査ログを新しい順に取得"""
        return self.db.query(AuditLog)\
            .filter(AuditLog.status == AuditStatus(status).value)\
            .order_by(AuditLog.timestamp.desc())\
            .limit(limit)\
            .all()


def record_security_event(
    event_type: AuditEventType,
    status: AuditStatus = AuditStatus.SUCCESS,
    *,
    user_id: Optional[str] = None,
    resource: str = "security",
    action: Optional[str] = None,
    request: Optional[HTTPConnection] = None,
    ip_address: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """セキュリティイベントをベストエフォートで記録する

    記録に失敗しても例外は送出せず、ローカルのログに残すだけ。
    呼び出し元の処理を止めないこと。
    """
    config = audit_config
    if not config.AUDIT_ENABLED:
        return

    try:
        if request is not None and ip_address is None:
            ip_address = get_client_ip(request)

        logger.info(
            f"[AUDIT] event={AuditEventType(event_type).value} status={AuditStatus(status).value} "
            f"user={user_id or 'anonymous'} resource={resource} action={action} ip={ip_address}"
        )

        if AuditStatus(status) == AuditStatus.SUSPICIOUS and config.AUDIT_REALTIME_ALERTS:
            logger.error(f"[SECURITY ALERT] 不審なアクティビティを検出: event={event_type} ip={ip_address} details={details}")

        if not config.AUDIT_PERSIST:
            return

        db = SessionLocal()
        try:
            AuditService(db, config).log_event(
                event_type=event_type,
                status=status,
                user_id=user_id,
                resource=resource,
                action=action,
                request=request,
                ip_address=ip_address,
                details=details,
            )
        finally:
            db.close()
    except Exception as e:
        # 監査ログの保存に失敗しても本処理は継続
        logger.warning(f"監査ログの保存に失敗: {e}")


def _log_dispatch_failure(future: "asyncio.Future[None]") -> None:
    """バックグラウンドの記録処理で漏れた例外をログに残す"""
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.error(f"監査イベントの非同期記録に失敗: {error!r}")


def dispatch_security_event(event_type: AuditEventType, status: AuditStatus = AuditStatus.SUCCESS, **kwargs: Any) -> None:
    """イベントループ上からは別スレッドで記録し、結果を待たない（fire-and-forget）"""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        record_security_event(event_type, status, **kwargs)
        return

    future = loop.run_in_executor(None, functools.partial(record_security_event, event_type, status, **kwargs))
    future.add_done_callback(_log_dispatch_failure)

# app/api/routes/security_status.py
"""
セキュリティ状況確認用APIルート
エッジフィルタのブロック状況、レート制限・OTPの保持件数、不審なアクティビティの記録を確認
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session
from datetime import datetime, timezone
import logging

from app.db.session import get_db
from app.core.dependencies import CallerIdentity, require_authenticated
from app.core.security.audit import AuditService, AuditEventType, AuditStatus, dispatch_security_event
from app.core.security.otp import otp_service
from app.core.security.perimeter import activity_tracker, build_security_headers
from app.core.security.rate_limit import rate_limit_service
from app.schemas.security import (
    AuditLogOut, PerimeterStatus, SecurityStatusResponse, SuspiciousActivityResponse
)

# ロガーの設定
logger = logging.getLogger(__name__)

# FastAPIのルーターを初期化
router = APIRouter(prefix="/security", tags=["Security"])

@router.get("/status", response_model=SecurityStatusResponse)
def get_security_status(
    request: Request,
    identity: CallerIdentity = Depends(require_authenticated),
):
    """ペリメータ防御の全体的な状況を取得"""
    snapshot = activity_tracker.snapshot()
    dispatch_security_event(
        AuditEventType.READ_SECURITY_STATUS,
        user_id=identity.subject_id,
        resource="security",
        action="status_check",
        request=request,
    )
    return SecurityStatusResponse(
        timestamp=datetime.now(timezone.utc),
        perimeter=PerimeterStatus(
            block_policy=snapshot.block_policy,
            blocked_addresses=snapshot.blocked_addresses,
            tracked_addresses=snapshot.tracked_addresses,
        ),
        rate_limit_active_windows=rate_limit_service.active_windows,
        pending_otps=otp_service.pending_count,
        security_headers=build_security_headers(),
    )

@router.get("/suspicious", response_model=SuspiciousActivityResponse)
def get_suspicious_activity(
    request: Request,
    limit: int = Query(10, ge=1, le=100),
    identity: CallerIdentity = Depends(require_authenticated),
    db: Session = Depends(get_db),
):
    """不審なアクティビティの監査ログを新しい順に取得"""
    try:
        logs = AuditService(db).get_logs_by_status(AuditStatus.SUSPICIOUS, limit=limit)
    except Exception as e:
        logger.error(f"不審なアクティビティの取得でエラー: {e}")
        raise HTTPException(
            status_code=500,
            detail="不審なアクティビティの取得に失敗しました"
        )

    dispatch_security_event(
        AuditEventType.READ_SECURITY_STATUS,
        user_id=identity.subject_id,
        resource="security",
        action="suspicious_feed",
        request=request,
    )
    events = [AuditLogOut.model_validate(log) for log in logs]
    return SuspiciousActivityResponse(count=len(events), events=events)

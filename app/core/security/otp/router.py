"""
二要素認証 APIルーター
"""

from fastapi import APIRouter, Depends, Request

from app.schemas.two_factor import (
    OTPIssueResponse, OTPVerifyRequest, OTPVerificationResponse, BackupCodesResponse
)
from app.core.dependencies import CallerIdentity, require_authenticated
from app.core.security.audit import AuditEventType, AuditStatus, dispatch_security_event
from app.core.security.rate_limit import check_otp_verify_rate_limit
from .service import otp_service

router = APIRouter(prefix="/2fa", tags=["2FA"])

@router.post("/issue", response_model=OTPIssueResponse)
def issue_otp_endpoint(
    request: Request,
    identity: CallerIdentity = Depends(require_authenticated),
):
    """OTPを発行（コードは帯域外で配送し、応答には含めない）"""
    otp_service.issue(identity.subject_id)
    dispatch_security_event(
        AuditEventType.OTP_ISSUED,
        user_id=identity.subject_id,
        resource="2fa",
        action="issue",
        request=request,
    )
    return OTPIssueResponse(
        message="確認コードを発行しました",
        expires_in=otp_service.config.ttl_seconds,
    )

@router.post("/verify", response_model=OTPVerificationResponse)
def verify_otp_endpoint(
    request: Request,
    payload: OTPVerifyRequest,
    identity: CallerIdentity = Depends(require_authenticated),
    rate_limit_identifier: str = Depends(check_otp_verify_rate_limit),
):
    """OTPを検証（失敗理由は区別しない）"""
    valid = otp_service.verify(identity.subject_id, payload.code.strip())
    dispatch_security_event(
        AuditEventType.OTP_VERIFIED if valid else AuditEventType.OTP_FAILED,
        AuditStatus.SUCCESS if valid else AuditStatus.FAILURE,
        user_id=identity.subject_id,
        resource="2fa",
        action="verify",
        request=request,
    )
    return OTPVerificationResponse(valid=valid)

@router.post("/backup-codes", response_model=BackupCodesResponse)
def generate_backup_codes_endpoint(
    request: Request,
    identity: CallerIdentity = Depends(require_authenticated),
):
    """バックアップコードを生成（保存はハッシュのみ）"""
    backup_codes = otp_service.generate_backup_codes()
    dispatch_security_event(
        AuditEventType.BACKUP_CODES_GENERATED,
        user_id=identity.subject_id,
        resource="2fa",
        action="backup_codes",
        request=request,
        details={"count": len(backup_codes)},
    )
    return BackupCodesResponse(
        backup_codes=backup_codes,
        hashes=[otp_service.hash_backup_code(code) for code in backup_codes],
    )

"""
監査ログのデータベースモデル
セキュリティイベントの記録と追跡
"""
from datetime import datetime, timezone
from enum import Enum
import uuid

from sqlalchemy import Column, String, DateTime, Text, JSON

from app.db.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditStatus(str, Enum):
    """監査イベントの結果"""
    SUCCESS = "success"
    FAILURE = "failure"
    SUSPICIOUS = "suspicious"


class AuditEventType(str, Enum):
    """監査イベントのタイプ"""
    # 認証
    AUTH_LOGIN_ATTEMPT = "auth:login:attempt"
    AUTH_LOGIN_FAILURE = "auth:login:failure"

    # レート制限
    RATE_LIMIT_EXCEEDED = "rate_limit:exceeded"

    # 二要素認証
    OTP_ISSUED = "otp:issued"
    OTP_VERIFIED = "otp:verified"
    OTP_FAILED = "otp:failed"
    BACKUP_CODES_GENERATED = "otp:backup_codes:generated"

    # エッジフィルタ
    PERIMETER_IP_BLOCKED = "perimeter:ip:blocked"
    PERIMETER_BOT_DETECTED = "perimeter:bot:detected"
    PERIMETER_PATH_TRAVERSAL = "perimeter:path_traversal"
    PERIMETER_ADMIN_REDIRECT = "perimeter:admin:redirect"

    # 入力検査
    INPUT_THREAT_REJECTED = "input:threat:rejected"

    # データ操作
    DATA_CREATE = "data:create"

    # セキュリティ状況の参照
    READ_SECURITY_STATUS = "read:security:status"


class AuditLog(Base):
    """監査ログテーブル"""
    __tablename__ = "audit_logs"
    __table_args__ = {'extend_existing': True}

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    timestamp = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
    user_id = Column(String(255), nullable=True)  # 匿名アクセスの場合もある
    event_type = Column(String(64), nullable=False)
    resource = Column(String(255), nullable=True)  # 操作対象のリソース
    action = Column(String(255), nullable=True)    # 実行されたアクション
    status = Column(String(16), nullable=False, default=AuditStatus.SUCCESS.value, index=True)
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(Text, nullable=True)
    details = Column(JSON, nullable=True)     # 追加の詳細情報

    def __repr__(self):
        return f"<AuditLog(id={self.id}, event_type={self.event_type}, status={self.status})>"

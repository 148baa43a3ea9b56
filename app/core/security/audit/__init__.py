"""
監査ログモジュール
セキュリティイベントの記録と追跡
"""

from .models import AuditLog, AuditEventType, AuditStatus
from .service import AuditService, record_security_event, dispatch_security_event
from .config import AuditConfig, audit_config

__all__ = [
    "AuditLog",
    "AuditEventType",
    "AuditStatus",
    "AuditService",
    "record_security_event",
    "dispatch_security_event",
    "AuditConfig",
    "audit_config",
]

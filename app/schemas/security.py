# app/schemas/security.py
"""
 - セキュリティ状況確認APIのレスポンススキーマ。
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict

class PerimeterStatus(BaseModel):
    block_policy: str = Field(..., description="ブロック解除の方式（amnesty / per_entry）")
    blocked_addresses: int = Field(..., description="ブロック中のアドレス数")
    tracked_addresses: int = Field(..., description="監視中のアドレス数")

class SecurityStatusResponse(BaseModel):
    timestamp: datetime
    system_status: str = "operational"
    perimeter: PerimeterStatus
    rate_limit_active_windows: int
    pending_otps: int
    security_headers: Dict[str, str]

class AuditLogOut(BaseModel):
    id: str
    timestamp: datetime
    user_id: Optional[str] = None
    event_type: str
    resource: Optional[str] = None
    action: Optional[str] = None
    status: str
    ip_address: Optional[str] = None
    details: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(from_attributes=True)

class SuspiciousActivityResponse(BaseModel):
    count: int
    events: List[AuditLogOut]

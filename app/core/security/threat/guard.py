"""
外部入力の必須検査ゲート
- データを書き込む処理は ScreenedPayload しか受け取らない
- ScreenedPayload は screen_payload() を通過した入力からしか作れない
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Awaitable, List, Optional

from fastapi import HTTPException, Request, status

from app.core.security.audit import AuditEventType, AuditStatus, dispatch_security_event
from .config import ThreatConfig, threat_config
from .models import ThreatFinding
from .service import iter_strings, sanitize, scan

# ロガーの設定
logger = logging.getLogger(__name__)

_SCREENING_TOKEN = object()


class ThreatRejected(Exception):
    """拒否レベルの脅威を含む入力"""

    def __init__(self, findings: List[ThreatFinding]):
        self.findings = findings
        super().__init__(", ".join(f.description for f in findings))


@dataclass(frozen=True)
class ScreenedPayload:
    """検査・サニタイズ済みの入力"""
    data: Dict[str, Any]
    findings: List[ThreatFinding] = field(default_factory=list)
    _token: object = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self._token is not _SCREENING_TOKEN:
            raise TypeError("ScreenedPayload は screen_payload() からのみ生成できます")

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


def screen_payload(data: Dict[str, Any], config: Optional[ThreatConfig] = None) -> ScreenedPayload:
    """全ての文字列を検査し、拒否レベル未満ならサニタイズ済みの入力を返す"""
    config = config or threat_config
    threshold = config.reject_severity.rank

    findings: List[ThreatFinding] = []
    for text in iter_strings(data):
        for finding in scan(text).threats:
            if finding not in findings:
                findings.append(finding)

    rejected = [f for f in findings if f.severity.rank >= threshold]
    if rejected:
        raise ThreatRejected(rejected)

    return ScreenedPayload(data=sanitize(data), findings=findings, _token=_SCREENING_TOKEN)


def screened_body(resource: str) -> Callable[[Request], Awaitable[ScreenedPayload]]:
    """JSONボディを検査するFastAPIの依存関数を作る"""

    async def dependency(request: Request) -> ScreenedPayload:
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="リクエストボディが不正です",
            )

        if not isinstance(body, dict):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="リクエストボディが不正です",
            )

        try:
            return screen_payload(body)
        except ThreatRejected as e:
            logger.warning(f"入力を拒否: resource={resource}, threats={e}")
            if threat_config.audit_rejections:
                dispatch_security_event(
                    AuditEventType.INPUT_THREAT_REJECTED,
                    AuditStatus.SUSPICIOUS,
                    resource=resource,
                    action="screen",
                    request=request,
                    details={"threats": [f.model_dump(mode="json") for f in e.findings]},
                )
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="入力に使用できない内容が含まれています",
            )

    return dependency

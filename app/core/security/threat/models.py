"""
脅威シグネチャと検査結果のデータモデル
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """脅威の深刻度"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}


@dataclass(frozen=True)
class ThreatSignature:
    """既知の攻撃パターン（プロセス起動時に読み込み、以後変更しない）"""
    pattern: re.Pattern
    severity: Severity
    description: str

    def matches(self, value: str) -> bool:
        return self.pattern.search(value) is not None


class ThreatFinding(BaseModel):
    """一致したシグネチャ1件分の検出結果"""
    severity: Severity = Field(description="深刻度")
    description: str = Field(description="検出内容の説明")


class ScanResult(BaseModel):
    """入力文字列の検査結果"""
    is_threat: bool = Field(description="脅威を検出したか")
    threats: List[ThreatFinding] = Field(default_factory=list, description="検出結果（シグネチャ定義順）")

    @property
    def highest_severity(self) -> Optional[Severity]:
        """検出結果のうち最も深刻な深刻度"""
        if not self.threats:
            return None
        return max((finding.severity for finding in self.threats), key=lambda s: s.rank)

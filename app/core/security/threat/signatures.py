"""
静的な脅威シグネチャ一覧
"""

import re

from .models import Severity, ThreatSignature


def _signature(pattern: str, severity: Severity, description: str) -> ThreatSignature:
    return ThreatSignature(re.compile(pattern, re.IGNORECASE), severity, description)


THREAT_SIGNATURES = (
    _signature(
        r"<script|javascript:|onerror=|onload=",
        Severity.CRITICAL,
        "XSS attempt detected",
    ),
    _signature(
        r"union.*select|drop.*table|insert.*into|delete.*from",
        Severity.CRITICAL,
        "SQL injection attempt detected",
    ),
    _signature(
        r"\.\./|\.\.\\|%2e%2e",
        Severity.HIGH,
        "Path traversal attempt detected",
    ),
    _signature(
        r"eval\(|exec\(|system\(|passthru\(",
        Severity.CRITICAL,
        "Code injection attempt detected",
    ),
    _signature(
        r"<iframe|<embed|<object",
        Severity.MEDIUM,
        "Suspicious HTML tag detected",
    ),
)

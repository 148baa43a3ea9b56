"""
シグネチャベースの入力検査モジュール
"""

from .models import Severity, ThreatSignature, ThreatFinding, ScanResult
from .signatures import THREAT_SIGNATURES
from .service import scan, sanitize, sanitize_text
from .config import ThreatConfig, threat_config
from .guard import ScreenedPayload, ThreatRejected, screen_payload, screened_body

__all__ = [
    "Severity",
    "ThreatSignature",
    "ThreatFinding",
    "ScanResult",
    "THREAT_SIGNATURES",
    "scan",
    "sanitize",
    "sanitize_text",
    "ThreatConfig",
    "threat_config",
    "ScreenedPayload",
    "ThreatRejected",
    "screen_payload",
    "screened_body",
]

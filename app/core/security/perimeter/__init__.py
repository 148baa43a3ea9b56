"""
エッジリクエストフィルタ（ペリメータ防御）モジュール
"""

from .config import PerimeterConfig, perimeter_config
from .models import SuspiciousActivityRecord, TrackerSnapshot
from .tracker import SuspiciousActivityTracker, activity_tracker
from .headers import SECURITY_HEADERS, build_security_headers, build_content_security_policy
from .middleware import EdgeRequestFilter, has_path_traversal

__all__ = [
    "PerimeterConfig",
    "perimeter_config",
    "SuspiciousActivityRecord",
    "TrackerSnapshot",
    "SuspiciousActivityTracker",
    "activity_tracker",
    "SECURITY_HEADERS",
    "build_security_headers",
    "build_content_security_policy",
    "EdgeRequestFilter",
    "has_path_traversal",
]

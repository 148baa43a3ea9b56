"""
ワンタイムパスワード（二要素認証）モジュール
"""

from .service import OTPService, otp_service
from .router import router as otp_router
from .config import OTPConfig, otp_config
from .models import OTPRecord

__all__ = [
    "OTPService",
    "otp_service",
    "otp_router",
    "OTPConfig",
    "otp_config",
    "OTPRecord",
]

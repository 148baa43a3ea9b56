from .auth import LoginRequest, LoginValidationResponse
from .two_factor import (
    OTPIssueResponse, OTPVerifyRequest, OTPVerificationResponse, BackupCodesResponse
)
from .product_request import ProductRequestCreate, ProductRequestOut
from .security import PerimeterStatus, SecurityStatusResponse, AuditLogOut, SuspiciousActivityResponse

__all__ = [
    "LoginRequest",
    "LoginValidationResponse",
    "OTPIssueResponse",
    "OTPVerifyRequest",
    "OTPVerificationResponse",
    "BackupCodesResponse",
    "ProductRequestCreate",
    "ProductRequestOut",
    "PerimeterStatus",
    "SecurityStatusResponse",
    "AuditLogOut",
    "SuspiciousActivityResponse",
]

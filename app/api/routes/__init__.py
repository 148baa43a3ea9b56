from . import auth, product_request, security_status

__all__ = [
    "auth",
    "product_request",
    "security_status",
]

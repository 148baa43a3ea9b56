from .product_request import create_product_request


__all__ = [
    "create_product_request",
]

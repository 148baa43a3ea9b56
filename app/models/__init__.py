# app/models/__init__.py

"""
このファイルは、SQLAlchemyのメタデータに全てのモデルを登録するための初期化モジュールです。
"""

# 監査ログ（セキュリティイベント）
from app.core.security.audit.models import AuditLog

# 新着商品の追加リクエスト
from .product_request import ProductRequest

__all__ = [
    "AuditLog",
    "ProductRequest",
]

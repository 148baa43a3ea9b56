from datetime import datetime, timezone
import uuid

from sqlalchemy import Column, String, DateTime

from app.db.database import Base


class ProductRequest(Base):
    """新着商品の追加リクエスト"""
    __tablename__ = "product_requests"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    contact = Column(String(255), nullable=False)
    product = Column(String(255), nullable=False)
    article = Column(String(255), nullable=True)  # 品番（任意）
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    def __repr__(self):
        return f"<ProductRequest(id={self.id}, product={self.product})>"

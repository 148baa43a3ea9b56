# app/schemas/product_request.py
"""
 - 新着商品の追加リクエスト（ストアフロントのフォーム）のスキーマ。
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

class ProductRequestCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="依頼者名")
    contact: str = Field(..., min_length=1, max_length=255, description="連絡先")
    product: str = Field(..., min_length=1, max_length=255, description="商品名")
    article: Optional[str] = Field(default=None, max_length=255, description="品番（任意）")

class ProductRequestOut(BaseModel):
    id: str
    name: str
    contact: str
    product: str
    article: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

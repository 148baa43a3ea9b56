"""
レート制限のデータモデル
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class RateWindow(BaseModel):
    """識別子ごとの固定時間枠（reset_at を過ぎたら次回アクセスで作り直す）"""

    count: int = Field(default=0, ge=0, description="時間枠内のリクエスト数")
    reset_at: float = Field(description="時間枠が失効する時刻（UNIX秒）")

    def is_expired(self, now: float) -> bool:
        return now >= self.reset_at


class RateLimitRule(BaseModel):
    """レート制限ルール"""

    name: str = Field(description="ルール名")
    key_prefix: str = Field(description="識別子のプレフィックス（例: login）")
    max_requests: int = Field(gt=0, description="最大リクエスト数")
    window_seconds: float = Field(gt=0, description="時間枠（秒）")
    error_message: Optional[str] = Field(default=None, description="カスタムエラーメッセージ")

    def identifier_for(self, subject: str) -> str:
        """`<prefix>:<subject>` 形式の識別子を作る"""
        return f"{self.key_prefix}:{subject}"


class RateLimitStatus(BaseModel):
    """レート制限の現在の状況"""

    identifier: str = Field(description="制限対象の識別子")
    current_count: int = Field(description="現在のリクエスト数")
    max_allowed: int = Field(description="許可される最大リクエスト数")
    remaining_requests: int = Field(description="残りのリクエスト数")
    reset_time: Optional[datetime] = Field(default=None, description="制限がリセットされる時刻")
    is_blocked: bool = Field(description="現在ブロックされているか")

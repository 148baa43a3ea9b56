"""
ワンタイムパスワードのデータモデル
"""

from pydantic import BaseModel, Field


class OTPRecord(BaseModel):
    """対象ごとに1件だけ保持する未使用のOTP"""
    code: str = Field(description="6桁の数字コード")
    expires_at: float = Field(description="有効期限（UNIX秒）")
    attempts: int = Field(default=0, ge=0, description="検証の試行回数")

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at

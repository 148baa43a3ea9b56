"""
二要素認証（ワンタイムパスワード）関連のデータスキーマを定義するモジュール
"""

from pydantic import BaseModel, Field
from typing import List

class OTPIssueResponse(BaseModel):
    """OTP発行レスポンス用スキーマ（コード自体は含めない）"""
    message: str = Field(..., description="発行結果メッセージ")
    expires_in: int = Field(..., description="有効期限（秒）")

class OTPVerifyRequest(BaseModel):
    """OTP検証リクエスト用スキーマ"""
    code: str = Field(..., min_length=1, max_length=16, description="6桁のワンタイムパスワード")

class OTPVerificationResponse(BaseModel):
    """OTP検証結果レスポンス用スキーマ（失敗理由は返さない）"""
    valid: bool = Field(..., description="検証が成功したか")

class BackupCodesResponse(BaseModel):
    """バックアップコード発行レスポンス用スキーマ"""
    backup_codes: List[str] = Field(..., description="平文のバックアップコード（この応答でのみ返す）")
    hashes: List[str] = Field(..., description="保存用のハッシュ")

# app/schemas/auth.py
"""
 - ログイン入力検証に関連するデータスキーマを定義するモジュール。
 - 主に FastAPI のログイン検証API（POST /auth/validate）で使用される、
   入力（メールアドレス・パスワード）と出力の構造を定義する。
 - 必須チェックと形式チェックはルート側で行い、400で返す。
"""

from typing import Optional
from pydantic import BaseModel

# ログイン検証APIのリクエストボディ用スキーマ
class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

# 検証成功時のレスポンススキーマ
class LoginValidationResponse(BaseModel):
    success: bool = True

"""
レート制限の設定管理
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict


class RateLimitConfig(BaseSettings):
    """レート制限の設定"""

    # 基本設定
    enabled: bool = Field(default=True, description="レート制限を有効にするか")
    cleanup_interval_seconds: int = Field(default=300, description="失効した時間枠を掃除する間隔（秒）")

    # ログイン検証APIの制限（1分間に5回まで）
    auth_login_max_requests: int = Field(default=5, description="ログインの最大試行回数")
    auth_login_window_seconds: int = Field(default=60, description="ログイン制限の時間枠（秒）")

    # ワンタイムパスワード検証APIの制限
    otp_verify_max_requests: int = Field(default=10, description="OTP検証の最大試行回数")
    otp_verify_window_seconds: int = Field(default=60, description="OTP検証制限の時間枠（秒）")

    # エラーメッセージ
    error_messages: Dict[str, str] = Field(
        default={
            "auth_login": "ログイン試行回数が上限に達しました。1分後に再試行してください。",
            "otp_verify": "確認コードの試行回数が上限に達しました。しばらく待ってから再試行してください。",
        },
        description="ルール別のエラーメッセージ"
    )

    model_config = SettingsConfigDict(env_prefix="RATE_LIMIT_", env_file=".env", extra="ignore")


# デフォルト設定インスタンス
default_config = RateLimitConfig()

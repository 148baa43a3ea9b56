# app/core/security/otp/config.py
"""
ワンタイムパスワード（二要素認証）設定管理
  - このファイルでは、OTPの桁数・有効期限・試行回数、バックアップコードの設定を集中管理する。
  - すべての値は環境変数（.env）で上書き可能。
  - 環境変数の接頭辞は "OTP_"。
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

class OTPConfig(BaseSettings):
    """OTP設定クラス"""

    # ワンタイムパスワード設定
    code_min: int = 100000    # 発行するコードの下限（6桁）
    code_max: int = 999999    # 発行するコードの上限（6桁、この値を含む）
    ttl_seconds: int = 300    # コードの有効秒数（デフォルトは5分）
    max_attempts: int = 3    # 無効化までの最大試行回数（デフォルトは3回）

    # バックアップコード設定
    backup_code_count: int = 10    # 発行するバックアップコードの数（デフォルトは10個）
    backup_code_bytes: int = 4    # バックアップコード1つあたりの乱数バイト数（16進数で8文字）

    # 期限切れレコードを掃除する間隔（秒）
    purge_interval_seconds: int = 300

    # 発行したコードをログに出力する（帯域外配送の代わり、開発用）
    log_issued_codes: bool = True

    model_config = SettingsConfigDict(
        env_prefix="OTP_",    # 環境変数の接頭辞
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",    # 未定義のキーは無視
    )

# グローバル設定インスタンス
otp_config = OTPConfig()

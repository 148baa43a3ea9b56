from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from dotenv import load_dotenv
import logging
from pathlib import Path

# ロガーの設定
logger = logging.getLogger(__name__)

load_dotenv()

# このファイルは `app/core/config.py` にあるため、プロジェクトルートは2つ上
BASE_DIR = Path(__file__).resolve().parent.parent

# .envファイルの絶対パスを明示的に設定
ENV_FILE_PATH = BASE_DIR.parent / ".env"

class Settings(BaseSettings):
    # アプリケーション
    app_name: str = Field(default="Storefront Perimeter", alias="APP_NAME")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # 監査ログ・商品リクエストの保存先
    database_url: str = Field(default="sqlite:///./storefront.db", alias="DATABASE_URL")

    # ホスト型バックエンド（認証・ストレージ・テーブル）
    # CSPのconnect-srcで唯一許可する外部オリジン
    trusted_backend_origin: str = Field(default="https://*.supabase.co", alias="TRUSTED_BACKEND_ORIGIN")
    # ホスト型認証プロバイダが発行するセッションクッキー名
    session_cookie_name: str = Field(default="sb-access-token", alias="SESSION_COOKIE_NAME")

    # 定期スイープ（レート制限・OTP・ブロックリスト）を起動するか
    background_sweeps_enabled: bool = Field(default=True, alias="BACKGROUND_SWEEPS_ENABLED")

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH),
        extra="ignore",  # 未定義の環境変数は無視
        populate_by_name=True,
    )

    def get_database_connect_args(self) -> dict:
        """SQLiteはスレッドをまたいで使うため check_same_thread を無効化"""
        if self.database_url.startswith("sqlite"):
            return {"check_same_thread": False}
        return {}

    @property
    def is_production(self) -> bool:
        """本番環境かどうかを判定"""
        return self.environment.lower() in ["production", "prod"]

    @property
    def is_staging(self) -> bool:
        """ステージング環境かどうかを判定"""
        return self.environment.lower() in ["staging", "stg"]

    @property
    def is_development(self) -> bool:
        """開発環境かどうかを判定"""
        return self.environment.lower() in ["development", "dev"]

settings = Settings()

logger.debug("Loaded settings: %s", settings.model_dump())

@lru_cache
def get_settings() -> Settings:
    return settings

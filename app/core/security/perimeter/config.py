"""
エッジフィルタ（ペリメータ防御）の設定
"""
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class PerimeterConfig(BaseSettings):
    """エッジフィルタの設定クラス"""

    # 基本設定
    enabled: bool = True

    # 不審なアクティビティの追跡（5分以内に5回を超えたらブロック）
    suspicious_threshold: int = 5
    suspicious_window_seconds: int = 300

    # ブロック解除の方式
    #   amnesty   : 一定間隔で全ブロックを一括解除（共有クロック）
    #   per_entry : 各アドレスをブロックした時刻から block_ttl_seconds 後に個別解除
    block_policy: Literal["amnesty", "per_entry"] = "amnesty"
    amnesty_interval_seconds: int = 1800  # 30分
    block_ttl_seconds: int = 1800

    # ボット・クローラー・自動化ツールのUser-Agent
    bot_user_agent_pattern: str = r"bot|crawler|spider|scraper|curl|wget|python|java|postman"

    # ボット判定を適用しないパス（APIクライアントは許可する）
    api_path_prefix: str = "/api"

    # フィルタを通さない静的ファイルのパス
    excluded_path_prefixes: List[str] = ["/_next/static", "/_next/image", "/favicon.ico"]

    # 管理画面の保護（セッションクッキーが無ければログインへリダイレクト）
    protect_admin_routes: bool = False
    admin_path_prefix: str = "/admin"
    login_path: str = "/login"

    model_config = SettingsConfigDict(env_prefix="PERIMETER_", env_file=".env", extra="ignore")


# 設定インスタンス
perimeter_config = PerimeterConfig()

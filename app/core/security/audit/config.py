"""
監査ログの設定
"""
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class AuditConfig(BaseSettings):
    """監査ログの設定"""

    # 監査ログの有効化
    AUDIT_ENABLED: bool = True

    # データベースへの保存（無効時はログ出力のみ）
    AUDIT_PERSIST: bool = True

    # 機密情報のマスキング
    AUDIT_MASK_SENSITIVE: bool = True
    AUDIT_SENSITIVE_FIELDS: List[str] = ["password", "token", "secret", "key", "code"]

    # 不審なイベントをERRORレベルのアラートとして出力
    AUDIT_REALTIME_ALERTS: bool = True

    model_config = SettingsConfigDict(extra="ignore")


# 設定インスタンスを作成
audit_config = AuditConfig()

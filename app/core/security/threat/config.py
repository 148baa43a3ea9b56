"""
入力検査（脅威シグネチャ）の設定
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import Severity


class ThreatConfig(BaseSettings):
    """入力検査の設定クラス"""

    # この深刻度以上の検出があれば入力を拒否する
    reject_severity: Severity = Severity.MEDIUM

    # 拒否した入力を監査ログに記録するか
    audit_rejections: bool = True

    model_config = SettingsConfigDict(env_prefix="THREAT_", env_file=".env", extra="ignore")


# グローバル設定インスタンス
threat_config = ThreatConfig()

"""
不審なアクティビティ追跡のデータモデル
"""
from pydantic import BaseModel, Field


class SuspiciousActivityRecord(BaseModel):
    """アドレスごとの違反カウント"""
    count: int = Field(default=1, ge=0, description="時間枠内の違反回数")
    window_start: float = Field(description="時間枠の開始時刻（UNIX秒）")


class TrackerSnapshot(BaseModel):
    """追跡状況のスナップショット"""
    block_policy: str = Field(description="ブロック解除の方式")
    blocked_addresses: int = Field(description="ブロック中のアドレス数")
    tracked_addresses: int = Field(description="監視中のアドレス数")

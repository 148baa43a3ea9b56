"""
不審なアクティビティの追跡とアドレスのブロック

アドレスごとの状態: 正常 → 要注意(count, window_start) → ブロック
ブロックの解除は block_policy に従う（一括解除 or 個別の有効期限）。
"""

import time
import logging
import threading
from typing import Callable, Dict, Optional

from .config import PerimeterConfig, perimeter_config
from .models import SuspiciousActivityRecord, TrackerSnapshot

# ロガーの設定
logger = logging.getLogger(__name__)


class SuspiciousActivityTracker:
    """違反を数え、しきい値を超えたアドレスをブロックリストへ昇格させる"""

    def __init__(
        self,
        config: Optional[PerimeterConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config or perimeter_config
        self._clock = clock
        self._records: Dict[str, SuspiciousActivityRecord] = {}
        # アドレス → ブロックした時刻
        self._blocked: Dict[str, float] = {}
        self._lock = threading.Lock()

    def track(self, address: str) -> bool:
        """違反を1件記録する。この呼び出しで新たにブロックされたら True"""
        now = self._clock()
        with self._lock:
            record = self._records.get(address)

            if record is None or now - record.window_start > self.config.suspicious_window_seconds:
                self._records[address] = SuspiciousActivityRecord(count=1, window_start=now)
                return False

            record.count += 1
            if record.count > self.config.suspicious_threshold and address not in self._blocked:
                self._blocked[address] = now
                logger.warning(f"[SECURITY] IP blocked: {address}")
                return True

        return False

    def is_blocked(self, address: str) -> bool:
        """アドレスがブロック中かどうか"""
        now = self._clock()
        with self._lock:
            blocked_at = self._blocked.get(address)
            if blocked_at is None:
                return False

            if self.config.block_policy == "per_entry" and now - blocked_at >= self.config.block_ttl_seconds:
                del self._blocked[address]
                self._records.pop(address, None)
                return False

            return True

    def amnesty(self) -> int:
        """ブロックリストと追跡記録をすべて消去し、解除したアドレス数を返す"""
        with self._lock:
            released = len(self._blocked)
            self._blocked.clear()
            self._records.clear()

        if released:
            logger.info(f"ブロックを一括解除: {released}件")
        return released

    def expire_blocks(self) -> int:
        """有効期限を過ぎたブロックと古い追跡記録を削除し、解除したアドレス数を返す"""
        now = self._clock()
        with self._lock:
            expired = [
                address for address, blocked_at in self._blocked.items()
                if now - blocked_at >= self.config.block_ttl_seconds
            ]
            for address in expired:
                del self._blocked[address]

            stale = [
                address for address, record in self._records.items()
                if address not in self._blocked
                and now - record.window_start > self.config.suspicious_window_seconds
            ]
            for address in stale:
                del self._records[address]

        if expired:
            logger.info(f"期限切れのブロックを解除: {len(expired)}件")
        return len(expired)

    def sweep(self) -> int:
        """設定されたブロック解除方式で定期スイープを実行"""
        if self.config.block_policy == "per_entry":
            return self.expire_blocks()
        return self.amnesty()

    def snapshot(self) -> TrackerSnapshot:
        with self._lock:
            return TrackerSnapshot(
                block_policy=self.config.block_policy,
                blocked_addresses=len(self._blocked),
                tracked_addresses=len(self._records),
            )


# グローバルな追跡インスタンス
activity_tracker = SuspiciousActivityTracker()

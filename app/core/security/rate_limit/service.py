"""
レート制限サービスクラス
識別子（IP、IP+アクションなど）ごとの固定時間枠カウンタを管理
"""

import time
import logging
import threading
from typing import Callable, Dict, Optional
from datetime import datetime, timezone

from .models import RateWindow, RateLimitStatus
from .config import RateLimitConfig

# ロガーの設定
logger = logging.getLogger(__name__)


class RateLimitService:
    """レート制限のビジネスロジックを提供するサービス層

    時間枠はプロセス内のメモリにのみ保持され、再起動で失われる。
    同じ識別子に対する「確認して加算」は必ずロック内で行う。
    """

    def __init__(
        self,
        config: Optional[RateLimitConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config or RateLimitConfig()
        self._clock = clock
        self._windows: Dict[str, RateWindow] = {}
        self._lock = threading.Lock()

        logger.debug(f"レート制限サービス初期化: {self.config}")

    def check(self, identifier: str, max_requests: int, window_seconds: float) -> bool:
        """リクエストを1件数え、許可するかどうかを返す"""
        if not self.config.enabled:
            return True

        now = self._clock()
        with self._lock:
            window = self._windows.get(identifier)

            # 初回または失効済み → 新しい時間枠
            if window is None or window.is_expired(now):
                self._windows[identifier] = RateWindow(count=1, reset_at=now + window_seconds)
                return True

            if window.count < max_requests:
                window.count += 1
                return True

        logger.debug(f"レート制限超過: {identifier} ({max_requests}/{window_seconds}s)")
        return False

    def clear(self, identifier: str) -> None:
        """識別子の時間枠を無条件に削除（認証成功後のリセットなど）"""
        with self._lock:
            self._windows.pop(identifier, None)

    def sweep_expired(self) -> int:
        """失効した時間枠をすべて削除し、削除件数を返す"""
        now = self._clock()
        with self._lock:
            expired = [key for key, window in self._windows.items() if window.is_expired(now)]
            for key in expired:
                del self._windows[key]

        if expired:
            logger.debug(f"失効した時間枠を削除: {len(expired)}件")
        return len(expired)

    def get_status(self, identifier: str, max_requests: int) -> RateLimitStatus:
        """レート制限の現在の状況を取得（カウントは加算しない）"""
        now = self._clock()
        with self._lock:
            window = self._windows.get(identifier)
            if window is None or window.is_expired(now):
                current_count = 0
                reset_time = None
            else:
                current_count = window.count
                reset_time = datetime.fromtimestamp(window.reset_at, tz=timezone.utc)

        return RateLimitStatus(
            identifier=identifier,
            current_count=current_count,
            max_allowed=max_requests,
            remaining_requests=max(0, max_requests - current_count),
            reset_time=reset_time,
            is_blocked=current_count >= max_requests,
        )

    def seconds_until_reset(self, identifier: str) -> Optional[float]:
        """時間枠が失効するまでの秒数（時間枠がなければNone）"""
        now = self._clock()
        with self._lock:
            window = self._windows.get(identifier)
            if window is None or window.is_expired(now):
                return None
            return window.reset_at - now

    @property
    def active_windows(self) -> int:
        """保持している時間枠の数"""
        with self._lock:
            return len(self._windows)

    def reset_all(self) -> None:
        """すべての時間枠をリセット（テスト・管理用）"""
        with self._lock:
            self._windows.clear()


# グローバルなレート制限サービスインスタンス
rate_limit_service = RateLimitService()

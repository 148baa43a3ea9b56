"""
定期スイープ
リクエストとは独立した固定間隔で、メモリ上の状態を掃除するデーモンスレッドを管理する。
  - レート制限の失効した時間枠（5分ごと）
  - 期限切れのOTP（5分ごと）
  - ブロックリストの解除（30分ごと）
各ストアはロックで保護されているため、スイープとリクエスト処理は競合しない。
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from app.core.security.rate_limit import rate_limit_service
from app.core.security.otp import otp_service
from app.core.security.perimeter import activity_tracker

# ロガーの設定
logger = logging.getLogger(__name__)


@dataclass
class SweepJob:
    name: str
    interval_seconds: float
    func: Callable[[], int]


class PeriodicSweeper:
    """スイープジョブをそれぞれ専用のデーモンスレッドで実行する"""

    def __init__(self, jobs: Optional[List[SweepJob]] = None):
        self.jobs: List[SweepJob] = list(jobs or [])
        self._stop_event = threading.Event()
        self._threads: List[threading.Thread] = []

    def add_job(self, name: str, interval_seconds: float, func: Callable[[], int]) -> None:
        self.jobs.append(SweepJob(name=name, interval_seconds=interval_seconds, func=func))

    @property
    def running(self) -> bool:
        return any(thread.is_alive() for thread in self._threads)

    def run_job_once(self, job: SweepJob) -> int:
        """ジョブを1回実行する。失敗してもログに残して0を返す"""
        try:
            removed = job.func()
            if removed:
                logger.debug(f"スイープ完了: {job.name} ({removed}件)")
            return removed
        except Exception as e:
            logger.error(f"スイープでエラー（継続）: {job.name}: {e}")
            return 0

    def _worker(self, job: SweepJob) -> None:
        # stop_event がセットされるまで interval ごとに実行
        while not self._stop_event.wait(job.interval_seconds):
            self.run_job_once(job)

    def start(self) -> None:
        if self.running:
            return

        self._stop_event.clear()
        self._threads = []
        for job in self.jobs:
            thread = threading.Thread(
                target=self._worker,
                args=(job,),
                daemon=True,
                name=f"sweeper-{job.name}",
            )
            thread.start()
            self._threads.append(thread)
            logger.info(f"定期スイープ開始: {job.name} (every {job.interval_seconds}s)")

    def stop(self, timeout: float = 5.0) -> None:
        self._stop_event.set()
        for thread in self._threads:
            thread.join(timeout=timeout)
        self._threads = []
        logger.info("定期スイープ停止")


def build_default_sweeper() -> PeriodicSweeper:
    """レート制限・OTP・ブロックリストのスイープを登録した Sweeper を作る"""
    sweeper = PeriodicSweeper()
    sweeper.add_job(
        "rate-limit-windows",
        rate_limit_service.config.cleanup_interval_seconds,
        rate_limit_service.sweep_expired,
    )
    sweeper.add_job(
        "otp-records",
        otp_service.config.purge_interval_seconds,
        otp_service.purge_expired,
    )
    sweeper.add_job(
        "perimeter-blocks",
        activity_tracker.config.amnesty_interval_seconds,
        activity_tracker.sweep,
    )
    return sweeper

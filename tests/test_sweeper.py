"""
tests/test_sweeper.py — Periodic background sweeps
"""
from __future__ import annotations

import threading

from app.core.security.sweeper import PeriodicSweeper, SweepJob, build_default_sweeper


def test_run_job_once_returns_removed_count():
    sweeper = PeriodicSweeper()
    assert sweeper.run_job_once(SweepJob("count", 1, lambda: 3)) == 3


def test_failing_job_is_contained():
    def broken():
        raise RuntimeError("boom")

    sweeper = PeriodicSweeper()
    assert sweeper.run_job_once(SweepJob("broken", 1, broken)) == 0


def test_jobs_run_on_interval_until_stopped():
    ran = threading.Event()

    def job():
        ran.set()
        return 0

    sweeper = PeriodicSweeper()
    sweeper.add_job("fast", 0.01, job)
    sweeper.start()
    try:
        assert ran.wait(2.0)
        assert sweeper.running is True
    finally:
        sweeper.stop()
    assert sweeper.running is False


def test_default_sweeper_registers_all_stores():
    names = [job.name for job in build_default_sweeper().jobs]
    assert names == ["rate-limit-windows", "otp-records", "perimeter-blocks"]


def test_default_intervals():
    intervals = {job.name: job.interval_seconds for job in build_default_sweeper().jobs}
    assert intervals == {"rate-limit-windows": 300, "otp-records": 300, "perimeter-blocks": 1800}

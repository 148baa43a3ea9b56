"""
tests/conftest.py — Shared pytest fixtures
"""
from __future__ import annotations

import os
import tempfile

# アプリの設定を読み込む前に、監査ストアを一時的なSQLiteに向ける
_TEST_DB_DIR = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TEST_DB_DIR, 'test.db')}")
os.environ.setdefault("BACKGROUND_SWEEPS_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient

from app.core.security.otp import OTPService
from app.core.security.otp.config import OTPConfig
from app.core.security.perimeter import PerimeterConfig, SuspiciousActivityTracker, activity_tracker
from app.core.security.rate_limit import RateLimitService, rate_limit_service
from app.core.security.rate_limit.config import RateLimitConfig
from app.db.database import init_db


class FakeClock:
    """テストから時刻を進められる時計"""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="session", autouse=True)
def _create_tables():
    init_db()


@pytest.fixture(autouse=True)
def _reset_shared_state():
    rate_limit_service.reset_all()
    activity_tracker.amnesty()
    yield
    rate_limit_service.reset_all()
    activity_tracker.amnesty()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock) -> RateLimitService:
    return RateLimitService(RateLimitConfig(), clock=clock)


@pytest.fixture
def otp(clock) -> OTPService:
    return OTPService(OTPConfig(log_issued_codes=False), clock=clock)


@pytest.fixture
def tracker(clock) -> SuspiciousActivityTracker:
    return SuspiciousActivityTracker(PerimeterConfig(), clock=clock)


@pytest.fixture
def client():
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer test-session-token", "X-User-Id": "user-123"}

"""
OTPサービス - ビジネスロジック

対象ごとの状態遷移: なし → 発行済み → (検証成功 | 期限切れ | 試行超過) → なし
失敗理由は呼び出し側に区別して返さない（常に False）。
"""

import hashlib
import hmac
import logging
import secrets
import threading
import time
from typing import Callable, Dict, Iterable, List, Optional

from .config import OTPConfig, otp_config
from .models import OTPRecord

# ロガーの設定
logger = logging.getLogger(__name__)


class OTPService:
    """OTPサービスクラス"""

    def __init__(
        self,
        config: Optional[OTPConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config or otp_config
        self._clock = clock
        self._records: Dict[str, OTPRecord] = {}
        self._lock = threading.Lock()

    def issue(self, subject_id: str) -> str:
        """新しいコードを発行（既存のコードは上書き）"""
        span = self.config.code_max - self.config.code_min + 1
        code = str(self.config.code_min + secrets.randbelow(span))
        record = OTPRecord(code=code, expires_at=self._clock() + self.config.ttl_seconds)

        with self._lock:
            self._records[subject_id] = record

        if self.config.log_issued_codes:
            logger.info(f"[2FA] OTP for {subject_id}: {code}")
        return code

    def verify(self, subject_id: str, candidate: str) -> bool:
        """コードを検証する。成功したコードは再利用できない"""
        now = self._clock()
        with self._lock:
            record = self._records.get(subject_id)
            if record is None:
                return False

            # 期限切れ
            if record.is_expired(now):
                del self._records[subject_id]
                return False

            # 総当たり対策（正しいコードでも上限超過なら無効）
            record.attempts += 1
            if record.attempts > self.config.max_attempts:
                del self._records[subject_id]
                logger.warning(f"[2FA] Too many attempts for {subject_id}")
                return False

            # 非ASCIIの入力でも例外にならないようバイト列で比較
            if hmac.compare_digest(
                record.code.encode("utf-8"),
                str(candidate).encode("utf-8", "surrogatepass"),
            ):
                del self._records[subject_id]
                return True

        return False

    def purge_expired(self) -> int:
        """期限切れのレコードを削除し、削除件数を返す"""
        now = self._clock()
        with self._lock:
            expired = [key for key, record in self._records.items() if record.is_expired(now)]
            for key in expired:
                del self._records[key]
        return len(expired)

    @property
    def pending_count(self) -> int:
        """未使用のコード数"""
        with self._lock:
            return len(self._records)

    def generate_backup_codes(self, count: Optional[int] = None) -> List[str]:
        """バックアップコードを生成"""
        count = self.config.backup_code_count if count is None else count
        return [
            secrets.token_hex(self.config.backup_code_bytes).upper()
            for _ in range(count)
        ]

    @staticmethod
    def hash_backup_code(code: str) -> str:
        """保存用のバックアップコードのハッシュ（平文は保存しない）"""
        return hashlib.sha256(code.encode("utf-8")).hexdigest()

    @classmethod
    def verify_backup_code(cls, candidate: str, stored_hashes: Iterable[str]) -> Optional[str]:
        """一致した保存済みハッシュを返す（呼び出し側で消費済みにする）"""
        candidate_hash = cls.hash_backup_code(candidate.strip().upper())
        matched = None
        for stored in stored_hashes:
            if hmac.compare_digest(candidate_hash, stored):
                matched = stored
        return matched


# グローバルOTPサービスインスタンス
otp_service = OTPService()

"""
シグネチャベースの脅威検査とサニタイズ
- scan: 入力文字列を全シグネチャと照合する（拒否は呼び出し側の責任）
- sanitize: 構造を保ったまま再帰的に危険な記号・文字列を取り除く
"""

import re
import logging
from typing import Any, Iterable, List, Optional

from .models import ScanResult, ThreatFinding, ThreatSignature
from .signatures import THREAT_SIGNATURES

# ロガーの設定
logger = logging.getLogger(__name__)

# サニタイズ規則（順番に適用）
_ANGLE_BRACKETS = re.compile(r"[<>]")
_JAVASCRIPT_URI = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+=", re.IGNORECASE)
_EVAL_CALL = re.compile(r"eval\(", re.IGNORECASE)


def scan(value: str, signatures: Optional[Iterable[ThreatSignature]] = None) -> ScanResult:
    """入力をすべてのシグネチャと照合する

    同じシグネチャが複数回一致しても検出結果は1件のみ。
    """
    threats: List[ThreatFinding] = []
    for signature in (THREAT_SIGNATURES if signatures is None else signatures):
        if signature.matches(value):
            threats.append(ThreatFinding(severity=signature.severity, description=signature.description))

    if threats:
        logger.debug(f"脅威を検出: {[t.description for t in threats]}")

    return ScanResult(is_threat=bool(threats), threats=threats)


def sanitize_text(value: str) -> str:
    text = _ANGLE_BRACKETS.sub("", value)
    text = _JAVASCRIPT_URI.sub("", text)
    text = _EVENT_HANDLER.sub("", text)
    text = _EVAL_CALL.sub("", text)
    return text.strip()


def sanitize(value: Any) -> Any:
    """文字列・リスト・辞書を再帰的にサニタイズする（キーは変更しない）"""
    if isinstance(value, str):
        return sanitize_text(value)

    if isinstance(value, list):
        return [sanitize(item) for item in value]

    if isinstance(value, tuple):
        return tuple(sanitize(item) for item in value)

    if isinstance(value, dict):
        return {key: sanitize(item) for key, item in value.items()}

    return value


def iter_strings(value: Any) -> Iterable[str]:
    """入れ子構造に含まれる文字列をすべて列挙する"""
    if isinstance(value, str):
        yield value
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from iter_strings(item)
    elif isinstance(value, dict):
        for item in value.values():
            yield from iter_strings(item)

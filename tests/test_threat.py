"""
tests/test_threat.py — Signature scanner and sanitizer
"""
from __future__ import annotations

import pytest

from app.core.security.threat import Severity, THREAT_SIGNATURES, sanitize, sanitize_text, scan


def test_script_tag_is_critical_xss():
    result = scan("<script>alert(1)</script>")
    assert result.is_threat is True
    assert any(
        t.severity == Severity.CRITICAL and "XSS" in t.description for t in result.threats
    )


def test_plain_text_is_not_a_threat():
    result = scan("hello world")
    assert result.is_threat is False
    assert result.threats == []
    assert result.highest_severity is None


@pytest.mark.parametrize(
    "value, description",
    [
        ("1 UNION SELECT password FROM users", "SQL injection attempt detected"),
        ("'; DROP TABLE products; --", "SQL injection attempt detected"),
        ("../../etc/passwd", "Path traversal attempt detected"),
        ("..\\windows\\system.ini", "Path traversal attempt detected"),
        ("%2E%2E/secret", "Path traversal attempt detected"),
        ("exec('rm -rf /')", "Code injection attempt detected"),
        ("<IFRAME src=x>", "Suspicious HTML tag detected"),
        ('<img src=x onerror="steal()">', "XSS attempt detected"),
        ("JavaScript:alert(1)", "XSS attempt detected"),
    ],
)
def test_signature_coverage(value, description):
    result = scan(value)
    assert description in [t.description for t in result.threats]


def test_repeated_match_contributes_one_finding():
    result = scan("<script></script><script></script>")
    assert [t.description for t in result.threats].count("XSS attempt detected") == 1


def test_findings_follow_declaration_order():
    # XSS・コード実行・埋め込みタグの3種に一致
    result = scan("<script>eval(x)</script><iframe>")
    order = [s.description for s in THREAT_SIGNATURES]
    found = [t.description for t in result.threats]
    assert found == sorted(found, key=order.index)
    assert len(found) == 3
    assert result.highest_severity == Severity.CRITICAL


def test_sanitize_preserves_structure():
    cleaned = sanitize({"a": "<b>hi</b>", "list": ["<script>", "ok"]})
    assert cleaned == {"a": "bhi/b", "list": ["script", "ok"]}


def test_sanitize_passes_through_other_types():
    value = {"n": 3, "flag": True, "none": None, "nested": ({"x": "<y>"},)}
    assert sanitize(value) == {"n": 3, "flag": True, "none": None, "nested": ({"x": "y"},)}


def test_sanitize_text_removes_dangerous_fragments():
    assert sanitize_text("  JavaScript:doIt()  ") == "doIt()"
    assert sanitize_text('<img onload="x">') == 'img "x"'
    assert sanitize_text("EVAL(payload)") == "payload)"


def test_sanitize_does_not_mutate_input():
    original = {"a": ["<x>"]}
    sanitize(original)
    assert original == {"a": ["<x>"]}

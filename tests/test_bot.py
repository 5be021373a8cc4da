"""CyberGuard – Telegram bot formatting tests (no network)."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from bot.bot import format_url_result, format_message_result, format_privacy_result
from cyberguard.message_analyzer import analyze_message
from cyberguard.privacy_analyzer import analyze_privacy
from cyberguard.url_analyzer import analyze_url


def test_format_url_result():
    text = format_url_result(analyze_url("http://192.168.1.1/login"))
    assert "<b>Risk: HIGH</b> (65%)" in text
    assert "• Uses an IP address instead of a domain name (common in phishing)" in text


def test_format_url_result_escapes_html():
    text = format_url_result(analyze_url("https://faceb00k.com"))
    assert "&quot;faceb00k&quot;" in text


def test_format_message_result():
    text = format_message_result(analyze_message("URGENT: verify your bank account now!!", True))
    assert "scam probability 90%" in text
    assert "<b>Red-flag words:</b>" in text


def test_format_privacy_result():
    text = format_privacy_result(analyze_privacy("https://github.com/someone"))
    assert "<b>Profile Visibility</b>" in text
    assert "• Email address is public" in text

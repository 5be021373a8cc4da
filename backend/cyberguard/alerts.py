"""
Telegram Alert Module
─────────────────────
Notifies an operator Telegram chat when a scan comes back critical.
"""

import html
import os
import logging
from pathlib import Path

import requests
from dotenv import load_dotenv

logger = logging.getLogger("cyberguard.alerts")

env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "").strip()
ALERT_CHAT_ID = os.getenv("ALERT_CHAT_ID", "").strip()
DASHBOARD_URL = os.getenv("DASHBOARD_URL", "http://127.0.0.1:5500/history.html").strip()


def send_critical_alert(scan: dict) -> bool:
    """Send Telegram alert for a critical scan-history entry. Returns True if sent."""
    if not BOT_TOKEN or not ALERT_CHAT_ID:
        return False

    result = scan.get("result") or {}
    indicators = "; ".join(result.get("indicators", [])) or "N/A"
    text = (
        "\U0001f6a8 <b>CRITICAL SCAN RESULT</b>\n"
        "────────────────\n"
        f"<b>Scan ID:</b> #{scan.get('id', '?')}\n"
        f"<b>Type:</b> {scan.get('type', '?')}\n"
        f"<b>Input:</b> <code>{html.escape(str(scan.get('input', '?')))}</code>\n"
        f"<b>Indicators:</b> {html.escape(indicators[:300])}\n"
        "────────────────\n"
        f"History: {DASHBOARD_URL}"
    )

    try:
        resp = requests.post(
            f"https://api.telegram.org/bot{BOT_TOKEN}/sendMessage",
            json={"chat_id": ALERT_CHAT_ID, "text": text, "parse_mode": "HTML"},
            timeout=5,
        )
        if resp.ok:
            logger.info("Alert sent for scan #%s", scan.get("id"))
            return True
        logger.warning("Alert API returned %s", resp.status_code)
    except requests.RequestException as exc:
        logger.warning("Alert send failed: %s", exc)
    return False

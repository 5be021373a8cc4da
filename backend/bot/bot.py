"""
CyberGuard Telegram Bot
───────────────────────
Telegram front-end for the CyberGuard API.

Commands:
  /start              – Welcome message
  /scan <link>        – Check a URL for phishing indicators
  /check <message>    – Check a text message for scam language
  /privacy <profile>  – Privacy checklist for a social-profile URL
  /help               – Show available commands

Any message containing a link is scanned automatically. Passwords are
deliberately not accepted over chat.
"""

import atexit
import html
import os
import re
import sys
from pathlib import Path
from typing import Optional

import requests
import telebot
from dotenv import load_dotenv
from telebot import types

# ──────────────────────────────────────────────
# Paths / environment
# ──────────────────────────────────────────────
BOT_DIR = Path(__file__).resolve().parent
ENV_PATH = BOT_DIR / ".env"
LOCK_FILE = BOT_DIR / ".bot.lock"

load_dotenv(dotenv_path=ENV_PATH)

TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "").strip()
BACKEND_URL = os.getenv("BACKEND_URL", "http://127.0.0.1:8000").strip()

URL_REGEX = re.compile(r"https?://\S+", re.IGNORECASE)

RISK_EMOJI = {
    "safe": "✅",
    "low": "\U0001f7e2",
    "medium": "⚠️",
    "high": "\U0001f7e0",
    "critical": "\U0001f6a8",
}


# ──────────────────────────────────────────────
# Lock file
# ──────────────────────────────────────────────
def _acquire_lock():
    if LOCK_FILE.exists():
        try:
            old_pid = int(LOCK_FILE.read_text().strip())
            if _pid_alive(old_pid):
                print(f"[ERROR] Another bot instance running (PID {old_pid}).")
                sys.exit(1)
            print(f"[WARN] Stale lock (PID {old_pid}). Removing.")
        except (ValueError, OSError):
            pass
    LOCK_FILE.write_text(str(os.getpid()))


def _release_lock():
    try:
        if LOCK_FILE.exists() and LOCK_FILE.read_text().strip() == str(os.getpid()):
            LOCK_FILE.unlink()
    except OSError:
        pass


def _pid_alive(pid: int) -> bool:
    if sys.platform == "win32":
        import ctypes
        kernel32 = ctypes.windll.kernel32
        handle = kernel32.OpenProcess(0x00100000, False, pid)
        if handle:
            kernel32.CloseHandle(handle)
            return True
        return False
    try:
        os.kill(pid, 0)
        return True
    except OSError:
        return False


# ──────────────────────────────────────────────
# Backend API
# ──────────────────────────────────────────────
def api_scan(scan_type: str, payload: dict) -> Optional[dict]:
    """POST a scan to the backend. Returns the verdict or None on failure."""
    try:
        resp = requests.post(f"{BACKEND_URL}/api/scan/{scan_type}", json=payload, timeout=10)
        resp.raise_for_status()
        return resp.json()
    except requests.RequestException as exc:
        print(f"[API ERROR] /api/scan/{scan_type} -> {exc}")
        return None


# ──────────────────────────────────────────────
# Formatting
# ──────────────────────────────────────────────
def _bullets(items) -> str:
    return "\n".join(f"• {html.escape(i)}" for i in items)


def format_url_result(data: dict) -> str:
    level = data.get("riskLevel", "safe")
    lines = [
        f"{RISK_EMOJI.get(level, '❓')} <b>Risk: {level.upper()}</b> ({data.get('riskPercentage', 0)}%)",
        html.escape(data.get("explanation", "")),
    ]
    if data.get("indicators"):
        lines.append("\n<b>Indicators:</b>\n" + _bullets(data["indicators"]))
    lines.append("\n<i>" + html.escape(data.get("recommendation", "")) + "</i>")
    return "\n".join(lines)


def format_message_result(data: dict) -> str:
    level = data.get("riskLevel", "safe")
    lines = [
        f"{RISK_EMOJI.get(level, '❓')} <b>Risk: {level.upper()}</b> "
        f"(scam probability {data.get('scamProbability', '0%')})",
        html.escape(data.get("explanation", "")),
    ]
    if data.get("highlightedWords"):
        words = ", ".join(html.escape(w) for w in data["highlightedWords"])
        lines.append(f"\n<b>Red-flag words:</b> {words}")
    if data.get("indicators"):
        lines.append("\n<b>Indicators:</b>\n" + _bullets(data["indicators"]))
    lines.append("\n<i>" + html.escape(data.get("recommendation", "")) + "</i>")
    return "\n".join(lines)


def format_privacy_result(data: dict) -> str:
    blocks = []
    for cat in data.get("categories", []):
        block = f"{cat.get('icon', '')} <b>{html.escape(cat.get('title', ''))}</b>"
        if cat.get("issues"):
            block += "\n" + _bullets(cat["issues"])
        if cat.get("recommendations"):
            block += "\n<i>Do:</i>\n" + _bullets(cat["recommendations"])
        blocks.append(block)
    return "\n\n".join(blocks)


# ──────────────────────────────────────────────
# Bot
# ──────────────────────────────────────────────
WELCOME = (
    "<b>Welcome to CyberGuard!</b>\n\n"
    "I check links, messages and profiles for common scam patterns.\n\n"
    "<b>Commands:</b>\n"
    "/scan <code>&lt;link&gt;</code> – Check a URL\n"
    "/check <code>&lt;message&gt;</code> – Check a suspicious message\n"
    "/privacy <code>&lt;profile link&gt;</code> – Privacy checklist\n"
    "/help – Show help\n\n"
    "Or just send me any URL and I'll check it automatically!"
)


def build_bot(token: str) -> telebot.TeleBot:
    bot = telebot.TeleBot(token, parse_mode="HTML")

    def _command_arg(message: types.Message) -> str:
        parts = (message.text or "").split(maxsplit=1)
        return parts[1].strip() if len(parts) > 1 else ""

    @bot.message_handler(commands=["start", "help"])
    def cmd_start(message: types.Message):
        bot.send_message(message.chat.id, WELCOME)

    @bot.message_handler(commands=["scan"])
    def cmd_scan(message: types.Message):
        link = _command_arg(message)
        if not link:
            bot.reply_to(message, "Usage: /scan <code>&lt;link&gt;</code>\n\nExample:\n/scan http://paypa1-login.tk")
            return
        bot.send_chat_action(message.chat.id, "typing")
        data = api_scan("url", {"url": link})
        if data is None:
            bot.reply_to(message, "Could not reach the backend. Please try again later.")
            return
        bot.reply_to(message, format_url_result(data))

    @bot.message_handler(commands=["check"])
    def cmd_check(message: types.Message):
        text = _command_arg(message)
        if not text:
            bot.reply_to(message, "Usage: /check <code>&lt;message text&gt;</code>")
            return
        bot.send_chat_action(message.chat.id, "typing")
        data = api_scan("message", {"message": text, "simpleMode": True})
        if data is None:
            bot.reply_to(message, "Could not reach the backend. Please try again later.")
            return
        bot.reply_to(message, format_message_result(data))

    @bot.message_handler(commands=["privacy"])
    def cmd_privacy(message: types.Message):
        link = _command_arg(message)
        if not link:
            bot.reply_to(message, "Usage: /privacy <code>&lt;profile link&gt;</code>")
            return
        data = api_scan("privacy", {"url": link})
        if data is None:
            bot.reply_to(message, "Could not reach the backend. Please try again later.")
            return
        bot.reply_to(message, format_privacy_result(data))

    # ── Auto-scan bare URLs ──
    @bot.message_handler(func=lambda m: m.text and URL_REGEX.search(m.text))
    def auto_scan_url(message: types.Message):
        match = URL_REGEX.search(message.text)
        if not match:
            return
        bot.send_chat_action(message.chat.id, "typing")
        data = api_scan("url", {"url": match.group(0)})
        if data is None:
            bot.reply_to(message, "Could not reach the backend.")
            return
        bot.reply_to(message, "Auto-scan detected a link!\n\n" + format_url_result(data))

    return bot


# ──────────────────────────────────────────────
# Entry point
# ──────────────────────────────────────────────
def main():
    if not TELEGRAM_BOT_TOKEN:
        print(f"[ERROR] TELEGRAM_BOT_TOKEN is not set (looked in {ENV_PATH})")
        sys.exit(1)

    _acquire_lock()
    atexit.register(_release_lock)

    bot = build_bot(TELEGRAM_BOT_TOKEN)
    print("[CyberGuard Bot] Removing any existing webhook...")
    bot.remove_webhook()
    print(f"[CyberGuard Bot] Backend: {BACKEND_URL}")
    print(f"[CyberGuard Bot] PID: {os.getpid()}")
    print("[CyberGuard Bot] Bot started. Polling for messages...")
    try:
        bot.infinity_polling(timeout=30, long_polling_timeout=25)
    except KeyboardInterrupt:
        print("\n[CyberGuard Bot] Stopped by user.")
    finally:
        _release_lock()


if __name__ == "__main__":
    main()

"""
Scan Dispatch
─────────────
Routes a scan-type tag to its analyzer and forwards the raw request fields.
"""

import logging
from typing import Any, Dict, Optional

from .file_analyzer import analyze_file
from .message_analyzer import analyze_message
from .password_analyzer import analyze_password
from .privacy_analyzer import analyze_privacy
from .url_analyzer import analyze_url

logger = logging.getLogger("cyberguard.scoring")

SCAN_TYPES = ("url", "message", "password", "file", "privacy")


class UnknownScanType(ValueError):
    """Raised for a scan-type tag no analyzer handles."""


def run_scan(scan_type: str, body: Dict[str, Any]) -> Optional[dict]:
    """
    Run one analyzer over the request body.

    Returns the analyzer's verdict unchanged (None for a missing password).
    """
    if scan_type == "url":
        result = analyze_url(body.get("url"))
    elif scan_type == "message":
        result = analyze_message(body.get("message"), bool(body.get("simpleMode")))
    elif scan_type == "password":
        result = analyze_password(body.get("password"))
    elif scan_type == "file":
        result = analyze_file(body.get("fileName"), body.get("fileSize"), body.get("fileType"))
    elif scan_type == "privacy":
        result = analyze_privacy(body.get("url"))
    else:
        raise UnknownScanType(f"Invalid scan type: {scan_type}")

    if result is not None:
        logger.info("scan type=%s risk=%s", scan_type, risk_of(result))
    return result


def scan_input_label(body: Dict[str, Any]) -> str:
    """Value stored in the history log; message text and passwords are never kept."""
    return body.get("url") or body.get("fileName") or "***"


def risk_of(result: dict) -> str:
    """Severity tag of a verdict: riskLevel, password strength, or n/a for privacy reports."""
    return result.get("riskLevel") or result.get("strength") or "n/a"

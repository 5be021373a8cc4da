"""
Password Strength Analyzer
──────────────────────────
Length / character-variety scoring plus closed-form crack-time estimates
for three assumed attacker profiles. Nothing is actually cracked.
"""

import math
import re
from typing import Optional

from .rules import band_for

COMMON_PASSWORDS = frozenset({
    "password", "123456", "qwerty", "admin", "welcome", "12345678", "password123",
})

# Assumed alphabet sizes per character class
CHARSET_LOWER = 26
CHARSET_UPPER = 26
CHARSET_DIGIT = 10
CHARSET_SPECIAL = 32

BRUTE_FORCE_SPEED = 1e10   # 10 billion guesses/sec
GPU_SPEED = 8e11           # 800 billion guesses/sec

MIN_LENGTH = 8
STRONG_LENGTH = 12

STRENGTH_BANDS = ((90, "very strong"), (70, "strong"), (50, "moderate"), (30, "weak"), (0, "very weak"))

# (upper bound in seconds, divisor, unit)
TIME_UNITS = (
    (60, 1, "seconds"),
    (3600, 60, "minutes"),
    (86400, 3600, "hours"),
    (31536000, 86400, "days"),
    (3153600000, 31536000, "years"),
)

_UPPER_RE = re.compile(r"[A-Z]")
_LOWER_RE = re.compile(r"[a-z]")
_DIGIT_RE = re.compile(r"[0-9]")
_SPECIAL_RE = re.compile(r"[^A-Za-z0-9]")


def time_estimate(seconds: float) -> str:
    """Human-readable crack time for a duration in seconds."""
    if seconds < 1:
        return "Instant"
    for bound, divisor, unit in TIME_UNITS:
        if seconds < bound:
            return f"{math.floor(seconds / divisor)} {unit}"
    return "Centuries"


def to_exponential(value: float, digits: int = 2) -> str:
    """Scientific notation with an unpadded signed exponent, e.g. 2.18e+14."""
    if math.isinf(value):
        return "Infinity"
    mantissa, exponent = f"{value:.{digits}e}".split("e")
    exp = int(exponent)
    return f"{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp)}"


def _keyspace(charset_size: int, length: int) -> float:
    try:
        return float(charset_size) ** length
    except OverflowError:
        return math.inf


def analyze_password(password: Optional[str]) -> Optional[dict]:
    """
    Evaluate a password.

    Returns None when there is nothing to analyze, otherwise a dict with:
        score, strength, crackTime, attacks, warnings, suggestions
    """
    if not password:
        return None

    score = 0
    warnings: list = []
    suggestions: list = []
    dictionary = {"vulnerable": False, "timeEstimate": "0.01 seconds"}

    length = len(password)
    if length < MIN_LENGTH:
        warnings.append("Password is too short (minimum 8 characters recommended)")
        score += length * 2
    elif length >= STRONG_LENGTH:
        score += 40
    else:
        score += 25

    has_upper = bool(_UPPER_RE.search(password))
    has_lower = bool(_LOWER_RE.search(password))
    has_digit = bool(_DIGIT_RE.search(password))
    has_special = bool(_SPECIAL_RE.search(password))

    if has_upper:
        score += 15
    else:
        suggestions.append("Add uppercase letters")
    if has_lower:
        score += 10
    if has_digit:
        score += 15
    else:
        suggestions.append("Add numbers")
    if has_special:
        score += 20
    else:
        suggestions.append("Add special characters (@, #, $, etc.)")

    # Overrides everything accumulated above
    if password.lower() in COMMON_PASSWORDS:
        score = 5
        warnings.append("This is a very common password and extremely easy to guess")
        dictionary = {"vulnerable": True, "timeEstimate": "Instant"}

    charset_size = (
        (CHARSET_LOWER if has_lower else 0)
        + (CHARSET_UPPER if has_upper else 0)
        + (CHARSET_DIGIT if has_digit else 0)
        + (CHARSET_SPECIAL if has_special else 0)
    )
    combinations = _keyspace(charset_size, length)
    brute_force_time = time_estimate(combinations / BRUTE_FORCE_SPEED)
    gpu_time = time_estimate(combinations / GPU_SPEED)

    final_score = min(100, score)
    if final_score < 50:
        suggestions.append("Make your password at least 12 characters long")

    return {
        "score": final_score,
        "strength": band_for(final_score, STRENGTH_BANDS),
        "crackTime": brute_force_time,
        "attacks": {
            "bruteForce": {
                "attemptsPerSecond": "10 Billion",
                "combinations": to_exponential(combinations),
                "timeEstimate": brute_force_time,
            },
            "dictionary": dictionary,
            "gpuCrack": {
                "gpuCluster": "8x RTX 4090",
                "attemptsPerSecond": "800 Billion",
                "timeEstimate": gpu_time,
            },
        },
        "warnings": warnings,
        "suggestions": suggestions,
    }

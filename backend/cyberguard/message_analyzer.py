"""
Scam Message Analyzer
─────────────────────
Rule-based detection of social-engineering language in SMS / chat / email
text. Each explanation exists in a plain-language ("simple mode") and a
technical wording.
"""

import re
from typing import List, Optional

from .rules import band_for, clamp_percentage

# ── Keyword families ──
URGENCY = (
    "urgent", "immediately", "now", "hurry", "limited time", "expires",
    "last chance", "suspended", "blocked", "closed", "action required",
)
FINANCIAL = (
    "lottery", "winner", "won", "prize", "reward", "cash", "dollars",
    "bitcoin", "crypto", "bank", "account", "invoice", "payment", "refund",
    "tax", "irs", "gift card",
)
SECURITY = (
    "verify", "confirm", "otp", "password", "login", "security", "identity",
    "verification", "unauthorized", "suspicious activity",
)

# (words, points per word, indicator)
FAMILIES = (
    (URGENCY, 15, "Creates a false sense of urgency or fear to make you act without thinking"),
    (FINANCIAL, 15, "Offers suspicious rewards or mentions financial accounts to grab your attention"),
    (SECURITY, 20, "Asks for sensitive security information or verification codes"),
)

# ── Style patterns (each scores at most once) ──
GENERIC_GREETING_RE = re.compile(r"\b(sir|madam|dear customer|winner)\b", re.IGNORECASE | re.ASCII)
SCAM_PHRASING_RE = re.compile(r"\b(kindly|please do the needful|congratulations)\b", re.IGNORECASE | re.ASCII)
EXCESSIVE_CAPS_RE = re.compile(r"[A-Z]{3,}")

STYLE_CHECKS = (
    (GENERIC_GREETING_RE, 10, "Uses a generic greeting instead of your name"),
    (SCAM_PHRASING_RE, 15, "Uses language commonly used in international scams"),
    (EXCESSIVE_CAPS_RE, 10, "Uses excessive capitalization to create panic"),
)

LINK_MARKERS = ("http", "bit.ly", "t.co")
WEIGHT_LINK = 20

BANDS = ((80, "critical"), (50, "high"), (30, "medium"), (10, "low"), (0, "safe"))

# band -> (simple explanation, technical explanation, recommendation)
BAND_TEXT = {
    "critical": (
        "This is 100% a TRAP! Someone is trying to trick you into giving them your secrets. "
        "They are using scary words to make you panic.",
        "This message exhibits multiple high-confidence characteristic patterns of a phishing scam. "
        "It uses urgency and authority to manipulate the recipient.",
        "DO NOT reply. DO NOT click any links. Block the sender and delete the message.",
    ),
    "high": (
        "This looks very fishy! It talks about money or accounts in a way that feels like a trick.",
        "This message has a high probability of being a scam. "
        "The combination of keywords and tactics is very suspicious.",
        "Be extremely careful. Do not provide any information. "
        "If it claims to be from a company, contact them using their official website instead.",
    ),
    "medium": (
        "Be careful! Some parts of this message are a bit strange and might be trying to trick you.",
        "This message contains some red flags. It might be legitimate, "
        "but it uses tactics often seen in marketing or low-level scams.",
        "Verify the sender's identity. If you didn't expect this message, treat it as suspicious.",
    ),
    "low": (
        "This message is probably okay, but it's always good to stay alert!",
        "Only minor suspicious elements were detected. It could be a generic marketing message.",
        'Use normal caution. If anything feels "off", don\'t click on links.',
    ),
    "safe": (
        "This message looks safe! No scary or tricky words found.",
        "No phishing indicators or scam patterns were detected in this message.",
        "This message appears to be safe.",
    ),
}


def _default_result() -> dict:
    return {
        "riskLevel": "safe",
        "scamProbability": "0%",
        "explanation": "This message shows no obvious signs of being a scam.",
        "highlightedWords": [],
        "indicators": [],
        "recommendation": "This message appears safe to engage with.",
    }


def _hits(text: str, words) -> List[str]:
    tl = text.lower()
    return [w for w in words if w in tl]


def analyze_message(message: Optional[str], simple_mode: bool = False) -> dict:
    """Analyze message text for scam indicators."""
    if not message:
        return _default_result()

    indicators: list = []
    highlighted: list = []
    score = 0

    for words, points, indicator in FAMILIES:
        found = _hits(message, words)
        if found:
            score += len(found) * points
            highlighted.extend(found)
            indicators.append(indicator)

    for pattern, points, indicator in STYLE_CHECKS:
        if pattern.search(message):
            score += points
            indicators.append(indicator)

    if any(marker in message for marker in LINK_MARKERS):
        score += WEIGHT_LINK
        indicators.append("Contains a link that might lead to a phishing website")

    level = band_for(score, BANDS)
    simple, technical, recommendation = BAND_TEXT[level]

    return {
        "riskLevel": level,
        "scamProbability": f"{clamp_percentage(score)}%",
        "explanation": simple if simple_mode else technical,
        "highlightedWords": list(dict.fromkeys(highlighted)),
        "indicators": indicators,
        "recommendation": recommendation,
    }

"""
Heuristic URL Analyzer
──────────────────────
Phishing / malicious-link indicators scored from the URL string alone.
No DNS, WHOIS or certificate lookups are made.
"""

import re
from typing import Optional

from .rules import band_for, clamp_percentage

IP_LITERAL_RE = re.compile(r"^(?:https?://)?(?:\d{1,3}\.){3}\d{1,3}", re.IGNORECASE)

SUSPICIOUS_KEYWORDS = (
    "login", "verify", "account", "secure", "update", "banking", "paypal",
    "wallet", "signin", "confirm", "urgent", "suspend", "disabled", "bonus",
    "free", "reward", "gift", "prize", "claim", "winner",
)

SUSPICIOUS_TLDS = (".tk", ".ml", ".ga", ".cf", ".gq", ".xyz", ".top", ".zip", ".mov")

# (real brand, lookalike token)
IMPERSONATIONS = (
    ("paypal", "paypa1"),
    ("google", "g00gle"),
    ("microsoft", "micosoft"),
    ("apple", "app1e"),
    ("facebook", "faceb00k"),
    ("amazon", "amaz0n"),
)

WEIGHT_IP_LITERAL = 40
WEIGHT_KEYWORD = 15
WEIGHT_LONG_URL = 15
WEIGHT_SUSPICIOUS_TLD = 25
WEIGHT_IMPERSONATION = 50
WEIGHT_SUBDOMAINS = 20
WEIGHT_HYPHENS = 15
WEIGHT_INSECURE = 10

MAX_URL_LENGTH = 75
MAX_SUBDOMAINS = 3
MAX_HYPHENS = 3

BANDS = ((80, "critical"), (50, "high"), (30, "medium"), (15, "low"), (0, "safe"))

# band -> (explanation, recommendation)
BAND_TEXT = {
    "critical": (
        "This URL shows multiple high-risk indicators common in severe phishing or malware attacks.",
        "⚠️ DO NOT CLICK! This link is extremely dangerous. Close the page immediately.",
    ),
    "high": (
        "This URL is highly suspicious and matches known phishing patterns.",
        "Avoid clicking this link. If you must, verify the source through official channels first.",
    ),
    "medium": (
        "Several suspicious elements were detected that are often found in deceptive links.",
        "Be cautious. Check if you were expecting this link and if the sender is trustworthy.",
    ),
    "low": (
        "A few minor red flags were detected, though the link might be legitimate.",
        "Use caution and double-check the website once it loads.",
    ),
    "safe": (
        "No significant threat indicators were found for this URL.",
        "This link appears safe, but always practice good cybersecurity hygiene.",
    ),
}


def _default_result() -> dict:
    return {
        "riskLevel": "safe",
        "riskPercentage": 0,
        "explanation": "This URL appears to be safe based on our current analysis.",
        "indicators": [],
        "recommendation": "You can proceed, but always remain cautious when entering sensitive information.",
    }


def _domain_part(url: str) -> str:
    # scheme://domain/... -> third "/"-delimited segment
    parts = url.split("/")
    return parts[2] if len(parts) > 2 else ""


def analyze_url(url: Optional[str]) -> dict:
    """
    Score a URL against the phishing rule table.

    Returns dict with:
        riskLevel, riskPercentage, explanation, indicators, recommendation
    """
    if not url:
        return _default_result()

    url_lower = url.lower()
    indicators: list = []
    score = 0

    if IP_LITERAL_RE.match(url):
        score += WEIGHT_IP_LITERAL
        indicators.append("Uses an IP address instead of a domain name (common in phishing)")

    found = [k for k in SUSPICIOUS_KEYWORDS if k in url_lower]
    if found:
        score += len(found) * WEIGHT_KEYWORD
        indicators.append(f"Contains suspicious keywords: {', '.join(found)}")

    if len(url) > MAX_URL_LENGTH:
        score += WEIGHT_LONG_URL
        indicators.append("Unusually long URL (often used to hide the actual domain)")

    if any(url_lower.endswith(tld) or (tld + "/") in url_lower for tld in SUSPICIOUS_TLDS):
        score += WEIGHT_SUSPICIOUS_TLD
        indicators.append("Uses a top-level domain frequently associated with malicious activity")

    for brand, fake in IMPERSONATIONS:
        if fake in url_lower and brand not in url_lower:
            score += WEIGHT_IMPERSONATION
            indicators.append(f'Possible impersonation of {brand} (found "{fake}")')

    domain = _domain_part(url)
    if len(domain.split(".")) - 2 > MAX_SUBDOMAINS:
        score += WEIGHT_SUBDOMAINS
        indicators.append("Excessive number of subdomains detected")

    if domain.count("-") > MAX_HYPHENS:
        score += WEIGHT_HYPHENS
        indicators.append("Large number of hyphens in domain name")

    if url_lower.startswith("http://"):
        score += WEIGHT_INSECURE
        indicators.append("Uses unencrypted HTTP instead of HTTPS")

    level = band_for(score, BANDS)
    explanation, recommendation = BAND_TEXT[level]

    return {
        "riskLevel": level,
        "riskPercentage": clamp_percentage(score),
        "explanation": explanation,
        "indicators": indicators,
        "recommendation": recommendation,
    }

"""
CyberGuard – URL Analyzer Tests
───────────────────────────────
Run: python -m pytest tests/ -v
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from cyberguard.rules import RISK_LEVELS, band_for
from cyberguard.url_analyzer import analyze_url, BANDS


# ── Defaults ──
def test_empty_url_returns_default():
    for value in ("", None):
        r = analyze_url(value)
        assert r["riskLevel"] == "safe"
        assert r["riskPercentage"] == 0
        assert r["indicators"] == []
        assert r["explanation"] == "This URL appears to be safe based on our current analysis."


def test_clean_https_url_is_safe():
    r = analyze_url("https://www.google.com")
    assert r["riskLevel"] == "safe"
    assert r["riskPercentage"] == 0
    assert r["indicators"] == []
    assert r["explanation"] == "No significant threat indicators were found for this URL."
    assert r["recommendation"] == "This link appears safe, but always practice good cybersecurity hygiene."


# ── Rules ──
def test_ip_literal_with_keywords_is_critical():
    r = analyze_url("http://192.168.1.1/login-verify-account")
    assert r["riskLevel"] == "critical"
    assert r["riskPercentage"] == 95
    assert r["indicators"] == [
        "Uses an IP address instead of a domain name (common in phishing)",
        "Contains suspicious keywords: login, verify, account",
        "Uses unencrypted HTTP instead of HTTPS",
    ]
    assert r["recommendation"].startswith("⚠️ DO NOT CLICK!")


def test_keywords_score_per_match():
    r = analyze_url("https://example.com/free-gift")
    assert r["riskPercentage"] == 30
    assert r["riskLevel"] == "medium"
    assert r["indicators"] == ["Contains suspicious keywords: free, gift"]


def test_brand_impersonation():
    r = analyze_url("https://paypa1.com/")
    assert r["riskLevel"] == "high"
    assert r["riskPercentage"] == 50
    assert r["indicators"] == ['Possible impersonation of paypal (found "paypa1")']


def test_impersonation_ignored_when_real_brand_present():
    r = analyze_url("https://paypal.com.paypa1.net")
    assert not any("impersonation" in i for i in r["indicators"])
    # "paypal" is itself a suspicious keyword
    assert r["riskPercentage"] == 15
    assert r["riskLevel"] == "low"


def test_suspicious_tld_at_end_or_before_path():
    assert analyze_url("https://example.tk")["riskPercentage"] == 25
    assert analyze_url("https://example.tk/home")["riskPercentage"] == 25
    assert analyze_url("https://tkexample.com")["riskPercentage"] == 0


def test_long_url():
    r = analyze_url("https://example.com/" + "a" * 80)
    assert r["indicators"] == ["Unusually long URL (often used to hide the actual domain)"]
    assert r["riskLevel"] == "low"


def test_excessive_subdomains_and_hyphens():
    r = analyze_url("https://a.b.c.d.example.com/")
    assert r["indicators"] == ["Excessive number of subdomains detected"]
    r = analyze_url("https://a-b-c-d-e.com")
    assert r["indicators"] == ["Large number of hyphens in domain name"]


def test_insecure_scheme_case_insensitive():
    r = analyze_url("HTTP://example.com")
    assert r["indicators"] == ["Uses unencrypted HTTP instead of HTTPS"]
    assert r["riskPercentage"] == 10
    assert r["riskLevel"] == "safe"


def test_percentage_clamped_but_band_uses_raw_score():
    r = analyze_url("http://192.168.1.1/login-verify-account-secure-update-paypal-wallet")
    assert r["riskPercentage"] == 100
    assert r["riskLevel"] == "critical"


# ── Properties ──
def test_bands_are_monotonic():
    previous = 0
    for score in range(0, 201):
        idx = RISK_LEVELS.index(band_for(score, BANDS))
        assert idx >= previous
        previous = idx


def test_deterministic():
    url = "http://faceb00k.xyz/claim-your-prize"
    assert analyze_url(url) == analyze_url(url)

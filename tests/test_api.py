"""
CyberGuard – API Tests
──────────────────────
Run: python -m pytest tests/ -v

Uses a throwaway SQLite database, configured before the app is imported.
"""

import os
import sys
import tempfile
from pathlib import Path

_TMP = Path(tempfile.mkdtemp(prefix="cyberguard-test-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP / 'scans.db'}"
os.environ["RATE_LIMIT_GLOBAL"] = "10000"
os.environ["RATE_LIMIT_SCAN"] = "10000"

# Ensure backend is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from cyberguard import alerts
from cyberguard.database import init_db
from cyberguard.main import app
from cyberguard.middleware import RateLimitMiddleware
from cyberguard.scoring import UnknownScanType, run_scan, scan_input_label, risk_of

init_db()
client = TestClient(app)


# ── Health ──
def test_root():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_health_reports_db():
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["db"] is True


# ── Scanning ──
def test_scan_url():
    r = client.post("/api/scan/url", json={"url": "http://192.168.1.1/login-verify-account"})
    assert r.status_code == 200
    d = r.json()
    assert d["riskLevel"] == "critical"
    assert d["riskPercentage"] == 95
    assert set(d) == {"riskLevel", "riskPercentage", "explanation", "indicators", "recommendation"}


def test_scan_empty_url_is_safe_default():
    r = client.post("/api/scan/url", json={})
    assert r.status_code == 200
    assert r.json()["riskLevel"] == "safe"
    assert r.json()["indicators"] == []


def test_scan_message_simple_mode():
    r = client.post("/api/scan/message", json={
        "message": "URGENT: verify your bank account now!!",
        "simpleMode": True,
    })
    assert r.status_code == 200
    d = r.json()
    assert d["scamProbability"] == "90%"
    assert d["explanation"].startswith("This is 100% a TRAP!")


def test_scan_password():
    r = client.post("/api/scan/password", json={"password": "password"})
    assert r.status_code == 200
    d = r.json()
    assert d["score"] == 5
    assert d["attacks"]["dictionary"]["vulnerable"] is True


def test_scan_missing_password_rejected():
    r = client.post("/api/scan/password", json={})
    assert r.status_code == 400
    assert r.json()["detail"] == "Nothing to analyze"


def test_scan_file():
    r = client.post("/api/scan/file", json={
        "fileName": "invoice.pdf.exe", "fileSize": 1000, "fileType": "application/pdf",
    })
    assert r.status_code == 200
    d = r.json()
    assert d["riskLevel"] == "critical"
    assert d["fileCategory"] == "Executable / Script"


def test_scan_privacy():
    r = client.post("/api/scan/privacy", json={"url": "https://github.com/someuser"})
    assert r.status_code == 200
    assert "Email address is public" in r.json()["categories"][0]["issues"]


def test_unknown_scan_type():
    r = client.post("/api/scan/malware", json={"url": "http://x.tk"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid scan type: malware"


def test_scan_type_must_match_exactly():
    for path in ("/api/scan/URL", "/api/scan/%20url"):
        r = client.post(path, json={"url": "https://example.com"})
        assert r.status_code == 400
    assert client.post("/api/scan/URL", json={}).json()["detail"] == "Invalid scan type: URL"


def test_oversized_url_rejected():
    r = client.post("/api/scan/url", json={"url": "http://a.com/" + "a" * 3000})
    assert r.status_code == 422


# ── History ──
def test_history_records_scan():
    url = "https://example.com/free-gift"
    verdict = client.post("/api/scan/url", json={"url": url}).json()

    r = client.get("/api/scans", params={"type": "url", "limit": 1})
    assert r.status_code == 200
    entry = r.json()[0]
    assert entry["type"] == "url"
    assert entry["input"] == url
    assert entry["result"] == verdict
    assert entry["timestamp"]

    r = client.get(f"/api/scans/{entry['id']}")
    assert r.status_code == 200
    assert r.json() == entry


def test_history_never_stores_secrets():
    client.post("/api/scan/password", json={"password": "Hunter2!secret"})
    entry = client.get("/api/scans", params={"type": "password", "limit": 1}).json()[0]
    assert entry["input"] == "***"
    assert "Hunter2!secret" not in str(entry)

    client.post("/api/scan/message", json={"message": "my private note"})
    entry = client.get("/api/scans", params={"type": "message", "limit": 1}).json()[0]
    assert entry["input"] == "***"


def test_history_missing_entry():
    r = client.get("/api/scans/999999")
    assert r.status_code == 404


# ── Analytics ──
def test_analytics():
    client.post("/api/scan/file", json={"fileName": "report.pdf", "fileSize": 10})
    r = client.get("/api/analytics")
    assert r.status_code == 200
    d = r.json()
    assert d["totalScans"] >= 1
    assert d["scamsPreventedToday"] == int(d["totalScans"] * 0.4)
    assert d["scansByType"]["file"] >= 1
    assert sum(d["riskBreakdown"].values()) <= d["totalScans"]


# ── Dispatch ──
def test_run_scan_unknown_type():
    with pytest.raises(UnknownScanType):
        run_scan("malware", {})


def test_scan_input_label():
    assert scan_input_label({"url": "https://a.com"}) == "https://a.com"
    assert scan_input_label({"fileName": "a.exe"}) == "a.exe"
    assert scan_input_label({"password": "x", "message": "y"}) == "***"


def test_risk_of():
    assert risk_of(run_scan("url", {"url": "https://a.com"})) == "safe"
    assert risk_of(run_scan("password", {"password": "abc"})) == "very weak"
    assert risk_of(run_scan("privacy", {"url": "https://a.com"})) == "n/a"


def test_scoring_deterministic():
    body = {"url": "http://amaz0n-secure-login.top/verify"}
    assert run_scan("url", body) == run_scan("url", body)


# ── Rate limiting ──
def test_scan_rate_limit():
    mini = FastAPI()
    mini.add_middleware(RateLimitMiddleware, global_limit=100, scan_limit=2, window=60)

    @mini.post("/api/scan/{scan_type}")
    def _scan(scan_type: str):
        return {"ok": True}

    c = TestClient(mini)
    codes = [c.post("/api/scan/url").status_code for _ in range(3)]
    assert codes == [200, 200, 429]


# ── Alerts ──
def test_alert_skipped_without_config(monkeypatch):
    monkeypatch.setattr(alerts, "BOT_TOKEN", "")
    assert alerts.send_critical_alert({"id": 1, "type": "url", "input": "x", "result": {}}) is False


def test_alert_sent(monkeypatch):
    sent = {}

    class _Resp:
        ok = True
        status_code = 200

    def _fake_post(url, json, timeout):
        sent["url"] = url
        sent["text"] = json["text"]
        return _Resp()

    monkeypatch.setattr(alerts, "BOT_TOKEN", "123:abc")
    monkeypatch.setattr(alerts, "ALERT_CHAT_ID", "-100")
    monkeypatch.setattr(alerts.requests, "post", _fake_post)

    ok = alerts.send_critical_alert({
        "id": 7, "type": "url", "input": "http://paypa1.tk/<x>",
        "result": {"indicators": ["Possible impersonation of paypal"]},
    })
    assert ok is True
    assert sent["url"].endswith("/bot123:abc/sendMessage")
    assert "&lt;x&gt;" in sent["text"]

"""Pydantic request / response schemas.

Field names are camelCase because they are the wire contract shared with
the web front-end and stored verbatim in the scan history.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Literal

RiskLevel = Literal["safe", "low", "medium", "high", "critical"]


# ── Scans ──
class ScanRequest(BaseModel):
    url: Optional[str] = Field(None, max_length=2048)
    message: Optional[str] = Field(None, max_length=5000)
    simpleMode: bool = False
    password: Optional[str] = Field(None, max_length=256)
    fileName: Optional[str] = Field(None, max_length=255)
    fileSize: Optional[float] = None
    fileType: Optional[str] = Field(None, max_length=255)


class UrlVerdict(BaseModel):
    riskLevel: RiskLevel
    riskPercentage: int = Field(..., ge=0, le=100)
    explanation: str
    indicators: List[str]
    recommendation: str


class MessageVerdict(BaseModel):
    riskLevel: RiskLevel
    scamProbability: str = Field(..., pattern=r"^(100|[1-9]?\d)%$")
    explanation: str
    highlightedWords: List[str]
    indicators: List[str]
    recommendation: str


class BruteForceAttack(BaseModel):
    attemptsPerSecond: str
    combinations: str
    timeEstimate: str


class DictionaryAttack(BaseModel):
    vulnerable: bool
    timeEstimate: str


class GpuCrackAttack(BaseModel):
    gpuCluster: str
    attemptsPerSecond: str
    timeEstimate: str


class AttackSimulation(BaseModel):
    bruteForce: BruteForceAttack
    dictionary: DictionaryAttack
    gpuCrack: GpuCrackAttack


class PasswordVerdict(BaseModel):
    score: int = Field(..., ge=0, le=100)
    strength: Literal["very weak", "weak", "moderate", "strong", "very strong"]
    crackTime: str
    attacks: AttackSimulation
    warnings: List[str]
    suggestions: List[str]


class FileVerdict(BaseModel):
    riskLevel: RiskLevel
    fileCategory: str
    fileExtension: str
    explanation: str
    indicators: List[str]
    recommendation: str


class PrivacyCategory(BaseModel):
    id: str
    title: str
    icon: str
    status: Literal["safe", "warning"]
    issues: List[str]
    recommendations: List[str]


class PrivacyReport(BaseModel):
    categories: List[PrivacyCategory]


VERDICT_SCHEMAS = {
    "url": UrlVerdict,
    "message": MessageVerdict,
    "password": PasswordVerdict,
    "file": FileVerdict,
    "privacy": PrivacyReport,
}


# ── History / analytics ──
class ScanHistoryEntry(BaseModel):
    id: int
    type: str
    input: str
    result: dict
    timestamp: Optional[str] = None


class AnalyticsResponse(BaseModel):
    totalScans: int
    scamsPreventedToday: int
    scansThisWeek: int
    scansByType: dict
    riskBreakdown: dict

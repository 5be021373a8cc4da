"""Aggregate statistics over the scan history."""

from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func as sqlfunc

from ..database import get_db
from ..models import ScanRecord
from ..schemas import AnalyticsResponse

router = APIRouter(prefix="/api", tags=["analytics"])

# Share of scans counted as "scams prevented" on the dashboard counter
PREVENTED_RATIO = 0.4


@router.get("/analytics", response_model=AnalyticsResponse)
def analytics(db: Session = Depends(get_db)):
    total_scans = db.query(sqlfunc.count(ScanRecord.id)).scalar() or 0

    type_rows = (
        db.query(ScanRecord.type, sqlfunc.count(ScanRecord.id))
        .group_by(ScanRecord.type)
        .all()
    )
    scans_by_type = {t: c for t, c in type_rows}

    risk_rows = (
        db.query(ScanRecord.risk, sqlfunc.count(ScanRecord.id))
        .filter(ScanRecord.risk.isnot(None))
        .group_by(ScanRecord.risk)
        .all()
    )
    risk_breakdown = {r: c for r, c in risk_rows}

    week_ago = datetime.now(timezone.utc) - timedelta(days=7)
    scans_this_week = (
        db.query(sqlfunc.count(ScanRecord.id))
        .filter(ScanRecord.created_at >= week_ago.replace(tzinfo=None))
        .scalar() or 0
    )

    return {
        "totalScans": total_scans,
        "scamsPreventedToday": int(total_scans * PREVENTED_RATIO),
        "scansThisWeek": scans_this_week,
        "scansByType": scans_by_type,
        "riskBreakdown": risk_breakdown,
    }

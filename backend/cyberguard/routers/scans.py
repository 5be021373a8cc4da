"""Scan endpoints: run an analyzer + list + detail of the scan history."""

import json
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, HTTPException
from sqlalchemy.orm import Session

from ..alerts import send_critical_alert
from ..database import get_db
from ..models import ScanRecord
from ..schemas import ScanRequest, ScanHistoryEntry, VERDICT_SCHEMAS
from ..scoring import run_scan, scan_input_label, risk_of, SCAN_TYPES
from ..validators import validate_scan_type

logger = logging.getLogger("cyberguard.scans")

router = APIRouter(prefix="/api", tags=["scans"])


@router.post("/scan/{scan_type}")
def create_scan(scan_type: str, payload: ScanRequest, db: Session = Depends(get_db)):
    scan_type = validate_scan_type(scan_type)
    body = payload.model_dump()

    result = run_scan(scan_type, body)
    if result is None:
        raise HTTPException(400, "Nothing to analyze")

    # Shape check before the verdict is persisted or returned
    verdict = VERDICT_SCHEMAS[scan_type].model_validate(result).model_dump()

    record = ScanRecord(
        type=scan_type,
        input=scan_input_label(body),
        risk=risk_of(verdict),
        result=json.dumps(verdict, ensure_ascii=False),
    )
    try:
        db.add(record)
        db.commit()
        db.refresh(record)
    except Exception as exc:
        # History is best-effort: the verdict is still returned
        logger.error("Could not log %s scan: %s", scan_type, exc)
        db.rollback()
        return verdict

    if scan_type != "password" and verdict.get("riskLevel") == "critical":
        send_critical_alert(_record_to_dict(record))

    return verdict


@router.get("/scans", response_model=List[ScanHistoryEntry])
def list_scans(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    scan_type: Optional[str] = Query(None, alias="type", description="Filter by scan type: url/message/password/file/privacy"),
    db: Session = Depends(get_db),
):
    q = db.query(ScanRecord)
    if scan_type and scan_type in SCAN_TYPES:
        q = q.filter(ScanRecord.type == scan_type)
    rows = q.order_by(ScanRecord.id.desc()).offset(skip).limit(limit).all()
    return [_record_to_dict(r) for r in rows]


@router.get("/scans/{scan_id}", response_model=ScanHistoryEntry)
def get_scan(scan_id: int, db: Session = Depends(get_db)):
    r = db.query(ScanRecord).filter(ScanRecord.id == scan_id).first()
    if not r:
        raise HTTPException(404, "Scan not found")
    return _record_to_dict(r)


def _record_to_dict(r: ScanRecord) -> dict:
    result = {}
    if r.result:
        try:
            result = json.loads(r.result)
        except ValueError:
            logger.warning("Scan #%s has an unreadable result payload", r.id)
    return {
        "id": r.id,
        "type": r.type,
        "input": r.input,
        "result": result,
        "timestamp": r.created_at.isoformat() if r.created_at else None,
    }

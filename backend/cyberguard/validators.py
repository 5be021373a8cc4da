"""
Input Validation
────────────────
Analyzers accept anything; only the scan-type tag is rejected at the edge.
"""

from fastapi import HTTPException

from .scoring import SCAN_TYPES


def validate_scan_type(scan_type: str) -> str:
    """Accept an exact scan-type tag. Raises HTTPException on anything else."""
    if scan_type not in SCAN_TYPES:
        raise HTTPException(400, f"Invalid scan type: {scan_type}")
    return scan_type

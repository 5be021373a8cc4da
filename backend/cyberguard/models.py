"""SQLAlchemy ORM models."""

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP
from sqlalchemy.sql import func
from .database import Base


class ScanRecord(Base):
    """Append-only scan history; rows are never updated or deleted by the API."""
    __tablename__ = "scans"
    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(20), nullable=False, index=True)
    input = Column(Text, nullable=False)
    risk = Column(String(20), nullable=True)
    result = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())

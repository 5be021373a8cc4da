"""CyberGuard Backend – FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from .database import SessionLocal, init_db
from .middleware import RateLimitMiddleware
from .routers import scans, analytics_router

logging.basicConfig(level=logging.INFO, format="%(asctime)s  %(name)-22s  %(levelname)-5s  %(message)s")
logger = logging.getLogger("cyberguard")

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: create the scan-history table.

    Wrapped in try/except so the app starts even if the database is down;
    scans still return verdicts, only history and analytics are unavailable.
    """
    try:
        init_db()
        logger.info("[CyberGuard] Database ready.")
    except Exception as exc:
        logger.error("[CyberGuard] Database unavailable at startup: %s", exc)
        logger.warning("[CyberGuard] App will start anyway. /api/health will report db=false.")

    yield


app = FastAPI(
    title="CyberGuard API",
    description="Heuristic safety checks for links, messages, passwords, files and profiles",
    version=VERSION,
    lifespan=lifespan,
)

# ── Middleware ──
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
app.add_middleware(RateLimitMiddleware)

# ── Routers ──
app.include_router(scans.router)
app.include_router(analytics_router.router)


@app.get("/", tags=["health"])
def root():
    return {"status": "ok", "version": VERSION, "service": "CyberGuard API"}


@app.get("/api/health", tags=["health"])
def health_check():
    """Unauthenticated health check; never raises, reports db=false when the database is down."""
    db_ok = False
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        db_ok = True
    except Exception as exc:
        logger.warning("Health check: database unreachable: %s", exc)
    finally:
        db.close()

    return {
        "status": "ok",
        "time": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "version": VERSION,
        "db": db_ok,
    }

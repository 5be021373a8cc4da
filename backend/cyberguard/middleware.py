"""
Middleware: Rate Limiting
─────────────────────────
"""

import os
import time
import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, List

from dotenv import load_dotenv
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger("cyberguard.middleware")

env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

RATE_LIMIT_GLOBAL = int(os.getenv("RATE_LIMIT_GLOBAL", "120"))
RATE_LIMIT_SCAN = int(os.getenv("RATE_LIMIT_SCAN", "40"))
RATE_LIMIT_WINDOW = int(os.getenv("RATE_LIMIT_WINDOW", "60"))

SCAN_PATH_PREFIX = "/api/scan/"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window in-memory rate limiter (per-IP, stricter for scan submissions)."""

    # Paths that must NEVER be rate-limited (health checks, root, docs)
    EXEMPT_PATHS = frozenset({"/", "/api/health", "/openapi.json", "/docs", "/redoc"})

    def __init__(self, app, global_limit: int = RATE_LIMIT_GLOBAL,
                 scan_limit: int = RATE_LIMIT_SCAN, window: int = RATE_LIMIT_WINDOW):
        super().__init__(app)
        self.global_limit = global_limit
        self.scan_limit = scan_limit
        self.window = window
        self.buckets: Dict[str, List[float]] = defaultdict(list)

    def _hit(self, key: str, limit: int, now: float) -> bool:
        """Record one request in `key`'s window; False when the window is full."""
        cutoff = now - self.window
        self.buckets[key] = [t for t in self.buckets[key] if t > cutoff]
        if len(self.buckets[key]) >= limit:
            return False
        self.buckets[key].append(now)
        return True

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path in self.EXEMPT_PATHS or path.rstrip("/") in self.EXEMPT_PATHS:
            return await call_next(request)

        ip = request.client.host if request.client else "0.0.0.0"
        now = time.time()

        if not self._hit(f"g:{ip}", self.global_limit, now):
            logger.warning("Global rate limit hit by %s", ip)
            return JSONResponse(status_code=429, content={"detail": "Too many requests. Slow down."})

        if request.method == "POST" and path.startswith(SCAN_PATH_PREFIX):
            if not self._hit(f"s:{ip}", self.scan_limit, now):
                logger.warning("Scan rate limit hit by %s", ip)
                return JSONResponse(status_code=429, content={"detail": "Rate limit exceeded for scans"})

        return await call_next(request)

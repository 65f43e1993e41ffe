# ─────────────────────────────────────────────────────────────────────────────
# Health Routes — root banner and liveness
# ─────────────────────────────────────────────────────────────────────────────
#   /        → plain-text banner, "is anything listening?"
#   /health  → liveness probe with uptime and server time. No deps, no I/O.
# ─────────────────────────────────────────────────────────────────────────────

import time

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from remitlend import STARTED_MONOTONIC
from remitlend.schemas import HealthResponse

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "RemitLend Backend is running"


@router.get("/health", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness probe: service uptime in seconds, timestamp in epoch ms."""
    return HealthResponse(
        status="ok",
        uptime=round(time.monotonic() - STARTED_MONOTONIC, 3),
        timestamp=int(time.time() * 1000),
    )

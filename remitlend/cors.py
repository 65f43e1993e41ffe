# ─────────────────────────────────────────────────────────────────────────────
# CORS policy — allowed-origin parsing and origin guard
# ─────────────────────────────────────────────────────────────────────────────
# Starlette's CORSMiddleware only withholds headers (and 400s preflights) for
# unknown origins; the request itself still runs. OriginGuardMiddleware
# rejects it outright so disallowed browsers never reach a handler.
# Requests without an Origin header (curl, server-to-server) always pass.
# ─────────────────────────────────────────────────────────────────────────────

from collections.abc import Collection
from typing import Any

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from remitlend.exceptions import error_body

logger = structlog.get_logger(__name__)

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Authorization", "X-API-Key"]


def parse_origins(allowed_origins: str) -> list[str]:
    """Parse comma-separated CORS origins. Empty string → deny all."""
    if not allowed_origins.strip():
        logger.warning(
            "cors_no_origins_configured",
            hint="Set CORS_ALLOWED_ORIGINS. Cross-origin requests will be rejected.",
        )
        return []
    return [origin.strip() for origin in allowed_origins.split(",") if origin.strip()]


def is_origin_allowed(origin: str | None, allowed: Collection[str]) -> bool:
    return not origin or origin in allowed


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """403 for requests whose Origin header is not in the allow list."""

    def __init__(self, app: Any, *, allowed_origins: Collection[str]) -> None:
        super().__init__(app)
        self._allowed = frozenset(allowed_origins)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        origin = request.headers.get("origin")
        if not is_origin_allowed(origin, self._allowed):
            logger.warning(
                "cors_origin_rejected",
                origin=origin,
                path=request.url.path,
                method=request.method,
            )
            return JSONResponse(status_code=403, content=error_body("Not allowed by CORS"))
        return await call_next(request)

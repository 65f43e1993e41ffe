# ─────────────────────────────────────────────────────────────────────────────
# Rate Limiter — global per-client limit
# ─────────────────────────────────────────────────────────────────────────────
# create_limiter builds one slowapi Limiter per app (its in-memory storage
# keeps separate app instances apart). RateLimitMiddleware hits a single
# "global" counter per client before routing, so every route shares it and
# no route lookup is needed to decide whether a request counts.
# ─────────────────────────────────────────────────────────────────────────────


from typing import Any

import structlog
from limits import RateLimitItem, parse
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from remitlend.config import Settings
from remitlend.exceptions import error_body

logger = structlog.get_logger(__name__)

_GLOBAL_SCOPE = "global"


def create_limiter(settings: Settings) -> Limiter:
    """Limiter keyed by client IP (the connecting peer's address)."""
    return Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit_exceeded_response(request: Request, item: RateLimitItem) -> JSONResponse:
    """Structured 429 matching the other error responses."""
    logger.warning(
        "rate_limit_exceeded",
        path=request.url.path,
        method=request.method,
        limit=str(item),
    )
    return JSONResponse(
        status_code=429,
        content=error_body(f"Rate limit exceeded: {item}"),
        headers={"Retry-After": str(item.get_expiry())},
    )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """One counter per client across every route, checked before routing."""

    def __init__(self, app: Any, *, rate_limit: str) -> None:
        super().__init__(app)
        self._item = parse(rate_limit)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        limiter: Limiter = request.app.state.limiter
        if not limiter.enabled:
            return await call_next(request)

        if not limiter.limiter.hit(self._item, _GLOBAL_SCOPE, get_remote_address(request)):
            return rate_limit_exceeded_response(request, self._item)

        return await call_next(request)

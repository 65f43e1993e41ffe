# Shared-secret API key gate for the mutating score endpoints.
# Fails closed (500) when INTERNAL_API_KEY is unset; 401 on missing or wrong key.
# ApiKeyRoute runs the gate before FastAPI reads or validates the body.


import secrets
from collections.abc import Callable, Coroutine
from enum import StrEnum
from typing import Any

import structlog
from fastapi.routing import APIRoute
from fastapi.security import APIKeyHeader
from pydantic import SecretStr
from starlette.requests import Request
from starlette.responses import Response

from remitlend.exceptions import AuthorizationError, ConfigurationError

logger = structlog.get_logger(__name__)

API_KEY_HEADER = "x-api-key"

# Declared on the gated router so OpenAPI documents the header. auto_error=False:
# enforcement belongs to ApiKeyRoute, which decides between 500 and 401.
api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


class GateDecision(StrEnum):
    """Outcome of checking one presented key."""

    ALLOW = "allow"
    MISCONFIGURED = "misconfigured"
    DENY = "deny"


def _wire_bytes(header_value: str) -> bytes | None:
    # Starlette decodes header bytes as latin-1; this recovers what the client sent.
    try:
        return header_value.encode("latin-1")
    except UnicodeEncodeError:
        return None


class ApiKeyGate:
    """Compare a presented key against the configured shared secret.

    The expected key is fixed at construction and compared as UTF-8 bytes.
    Presented keys are header values as Starlette hands them over (latin-1
    decoded), so a non-ASCII secret sent as UTF-8 still matches.
    evaluate() is pure; enforce() turns a non-ALLOW decision into the
    matching RemitLendError.
    """

    def __init__(self, expected_key: SecretStr | str | None) -> None:
        if isinstance(expected_key, SecretStr):
            expected_key = expected_key.get_secret_value()
        self._expected = (expected_key or "").encode()

    def __repr__(self) -> str:
        return f"ApiKeyGate(configured={self.configured})"

    @property
    def configured(self) -> bool:
        return bool(self._expected)

    def evaluate(self, provided_key: str | None) -> GateDecision:
        if not self._expected:
            return GateDecision.MISCONFIGURED
        if not provided_key:
            return GateDecision.DENY
        presented = _wire_bytes(provided_key)
        # Constant-time comparison prevents timing side-channel attacks
        if presented is None or not secrets.compare_digest(presented, self._expected):
            return GateDecision.DENY
        return GateDecision.ALLOW

    def enforce(self, provided_key: str | None) -> None:
        """Return normally on ALLOW, raise otherwise."""
        decision = self.evaluate(provided_key)
        if decision is GateDecision.MISCONFIGURED:
            raise ConfigurationError("INTERNAL_API_KEY")
        if decision is GateDecision.DENY:
            raise AuthorizationError()


def authorize_request(request: Request) -> None:
    """Run the app's gate against the request's x-api-key header."""
    gate: ApiKeyGate = request.app.state.api_key_gate
    try:
        gate.enforce(request.headers.get(API_KEY_HEADER))
    except (ConfigurationError, AuthorizationError) as exc:
        logger.warning(
            "auth_rejected",
            path=request.url.path,
            method=request.method,
            reason="gate_not_configured" if isinstance(exc, ConfigurationError) else "invalid_or_missing_api_key",
        )
        raise


class ApiKeyRoute(APIRoute):
    """APIRoute whose handler checks the API key before anything else.

    Route dependencies run after the body is parsed, so a dependency-based
    gate would let malformed bodies answer 422 ahead of the 500/401.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def gated_handler(request: Request) -> Response:
            authorize_request(request)
            return await handler(request)

        return gated_handler

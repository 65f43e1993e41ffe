# ─────────────────────────────────────────────────────────────────────────────
# Custom Exceptions + FastAPI Exception Handlers
# ─────────────────────────────────────────────────────────────────────────────


import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


# ── Exception hierarchy ──────────────────────────────────────────────────────


class RemitLendError(Exception):
    """Base exception for all RemitLend backend errors."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ConfigurationError(RemitLendError):
    """Raised when the expected API key is not configured.

    Operator-caused: the caller cannot fix this by retrying.
    """

    def __init__(self, setting: str = "INTERNAL_API_KEY"):
        self.setting = setting
        super().__init__(f"Server misconfiguration: {setting} is not set", status_code=500)


class AuthorizationError(RemitLendError):
    """Raised when x-api-key is missing or does not match.

    The message is identical for both cases so callers cannot tell which
    check failed.
    """

    def __init__(self) -> None:
        super().__init__("Unauthorised: invalid or missing API key", status_code=401)


class ScoreNotFoundError(RemitLendError):
    """Raised when a score operation targets a user with no score record."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User '{user_id}' does not have a score record", status_code=404)


class ScoreAlreadyExistsError(RemitLendError):
    """Raised when minting a score record for a user that already has one."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User '{user_id}' already has a score record", status_code=409)


def error_body(message: str) -> dict[str, object]:
    """Wire shape shared by every error response."""
    return {"success": False, "message": message}


# ── Handler registration ────────────────────────────────────────────────────


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers on the FastAPI app.

    Routes and dependencies raise RemitLendError subclasses; these handlers
    turn them into {"success": false, "message": ...} responses.
    """

    @app.exception_handler(RemitLendError)
    async def remitlend_error_handler(request: Request, exc: RemitLendError) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "request_rejected",
            path=request.url.path,
            status=exc.status_code,
            error=exc.message,
            error_type=type(exc).__name__,
        )
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_error", path=request.url.path, error_type=type(exc).__name__, exc_info=exc)
        return JSONResponse(status_code=500, content=error_body("Internal server error"))

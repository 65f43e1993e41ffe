# FastAPI application factory.
# Entrypoint: uvicorn remitlend.main:create_app --factory --host 0.0.0.0 --port 3001
#         or: python -m remitlend

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from remitlend import __version__
from remitlend.auth import ApiKeyGate
from remitlend.config import Settings, get_settings
from remitlend.cors import ALLOWED_HEADERS, ALLOWED_METHODS, OriginGuardMiddleware, parse_origins
from remitlend.exceptions import register_exception_handlers
from remitlend.logging_config import configure_logging
from remitlend.middleware import RequestContextMiddleware
from remitlend.rate_limit import RateLimitMiddleware, create_limiter
from remitlend.routes import health, score, simulation
from remitlend.services.score_registry import ScoreRegistry

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    logger.info(
        "startup",
        version=__version__,
        api_key_gate_configured=app.state.api_key_gate.configured,
        rate_limit=settings.rate_limit if settings.rate_limit_enabled else None,
        docs_enabled=settings.docs_enabled,
    )
    yield
    logger.info("shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Application factory. Invoked by: uvicorn remitlend.main:create_app --factory

    Settings are resolved once here and handed to every component; pass an
    explicit Settings to bypass the environment (tests).
    """
    settings = settings or get_settings()
    configure_logging(log_level=settings.log_level, json_output=settings.log_json)

    app = FastAPI(
        title="RemitLend Backend",
        description="Remittance credit score and simulation API",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.docs_enabled else None,
        openapi_url="/api/openapi.json" if settings.docs_enabled else None,
        redoc_url=None,
    )

    gate = ApiKeyGate(settings.internal_api_key)
    if not gate.configured:
        logger.warning(
            "api_key_gate_unconfigured",
            hint="INTERNAL_API_KEY is not set. Protected score endpoints will return 500.",
        )

    app.state.settings = settings
    app.state.api_key_gate = gate
    app.state.score_registry = ScoreRegistry()
    app.state.limiter = create_limiter(settings)

    # Middleware order (Starlette applies in reverse):
    # CORS → OriginGuard → RequestContext → RateLimit → routes
    app.add_middleware(RateLimitMiddleware, rate_limit=settings.rate_limit)
    app.add_middleware(RequestContextMiddleware)

    origins = parse_origins(settings.cors_allowed_origins)
    app.add_middleware(OriginGuardMiddleware, allowed_origins=origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        allow_credentials=True,
    )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(simulation.router, prefix="/api", tags=["simulation"])
    app.include_router(score.router, prefix="/api/score", tags=["score"])
    app.include_router(score.gated_router, prefix="/api/score", tags=["score"])

    return app

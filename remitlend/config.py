# ─────────────────────────────────────────────────────────────────────────────
# Settings — Pydantic v2 BaseSettings
# ─────────────────────────────────────────────────────────────────────────────


from functools import lru_cache

from limits import parse
from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Backend configuration sourced from environment variables (and .env).

    Constructed once by the app factory and handed to the components that
    need it. Nothing reads os.environ at request time.
    """

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    # ── Server ───────────────────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 3001

    # ── Security ─────────────────────────────────────────────────────────────
    # Shared secret for the mutating score endpoints (x-api-key header).
    # SecretStr keeps it out of repr(), model_dump() and log lines.
    # Empty string = gate fails closed with 500 on protected routes.
    internal_api_key: SecretStr = SecretStr("")

    # Comma-separated origins (e.g. "https://app.remitlend.io,http://localhost:5173").
    # Empty string = only requests without an Origin header are accepted.
    cors_allowed_origins: str = ""

    # Global per-client limit (slowapi format, e.g. "100/minute").
    rate_limit: str = "100/minute"
    rate_limit_enabled: bool = True

    # ── Docs ─────────────────────────────────────────────────────────────────
    docs_enabled: bool = True

    # ── Logging ──────────────────────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("rate_limit")
    @classmethod
    def _rate_limit_parses(cls, value: str) -> str:
        parse(value)  # raises ValueError on bad syntax
        return value


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()

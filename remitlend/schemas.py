# ─────────────────────────────────────────────────────────────────────────────
# Pydantic v2 Request / Response Schemas
# ─────────────────────────────────────────────────────────────────────────────


from typing import Literal

from pydantic import BaseModel, Field, field_validator

# 32-byte history hash, hex encoded
_HISTORY_HASH_PATTERN = r"^(0x)?[0-9a-fA-F]{64}$"


def _normalize_hash(v: str) -> str:
    v = v.lower()
    return v[2:] if v.startswith("0x") else v


class HealthResponse(BaseModel):
    """Liveness payload."""

    status: str = "ok"
    uptime: float = Field(..., ge=0, description="Seconds since the service started")
    timestamp: int = Field(..., ge=0, description="Unix epoch milliseconds")


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    message: str


# ── Score ───────────────────────────────────────────────────────────────────


class MintScoreRequest(BaseModel):
    """Create the score record for a user."""

    user_id: str = Field(..., min_length=1, max_length=128)
    score: int = Field(..., ge=0, le=2**32 - 1)
    history_hash: str = Field(..., pattern=_HISTORY_HASH_PATTERN)

    @field_validator("user_id")
    @classmethod
    def user_id_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("user_id must not be blank")
        return v.strip()

    @field_validator("history_hash")
    @classmethod
    def lowercase_hash(cls, v: str) -> str:
        return _normalize_hash(v)


class UpdateScoreRequest(BaseModel):
    repayment_amount: int = Field(..., ge=0, description="Repayment amount; every 100 earns one point")


class UpdateHistoryHashRequest(BaseModel):
    history_hash: str = Field(..., pattern=_HISTORY_HASH_PATTERN)

    @field_validator("history_hash")
    @classmethod
    def lowercase_hash(cls, v: str) -> str:
        return _normalize_hash(v)


class ScoreMetadata(BaseModel):
    user_id: str
    score: int
    history_hash: str


class ScoreResponse(BaseModel):
    success: Literal[True] = True
    user_id: str
    score: int


class ScoreMetadataResponse(BaseModel):
    success: Literal[True] = True
    data: ScoreMetadata


# ── Simulation ──────────────────────────────────────────────────────────────


class SimulationRequest(BaseModel):
    """Project a score over planned repayments.

    starting_score is ignored when user_id names a user with a score record.
    """

    user_id: str | None = Field(None, min_length=1, max_length=128)
    starting_score: int = Field(0, ge=0, le=2**32 - 1)
    repayments: list[int] = Field(..., min_length=1, max_length=360)

    @field_validator("repayments")
    @classmethod
    def repayments_non_negative(cls, v: list[int]) -> list[int]:
        if any(amount < 0 for amount in v):
            raise ValueError("Repayment amounts must be non-negative")
        return v


class SimulationStepResponse(BaseModel):
    repayment_amount: int
    points: int
    score: int


class SimulationResponse(BaseModel):
    success: Literal[True] = True
    starting_score: int
    projected_score: int
    points_gained: int
    timeline: list[SimulationStepResponse]

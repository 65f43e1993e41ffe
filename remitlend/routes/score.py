# ─────────────────────────────────────────────────────────────────────────────
# Score Routes — mounted at /api/score
# ─────────────────────────────────────────────────────────────────────────────
# Reads are public (router). Mutations (mint, repayment update, history hash)
# live on gated_router, whose ApiKeyRoute checks x-api-key before the body
# is read, so only trusted off-chain workers can write.
# Errors are exceptions; handlers in exceptions.py render them.
# ─────────────────────────────────────────────────────────────────────────────

from fastapi import APIRouter, Depends, Security, status

from remitlend.auth import ApiKeyRoute, api_key_header
from remitlend.dependencies import get_score_registry
from remitlend.exceptions import ScoreNotFoundError
from remitlend.schemas import (
    ErrorResponse,
    MintScoreRequest,
    ScoreMetadata,
    ScoreMetadataResponse,
    ScoreResponse,
    UpdateHistoryHashRequest,
    UpdateScoreRequest,
)
from remitlend.services.score_registry import ScoreRecord, ScoreRegistry

router = APIRouter()
gated_router = APIRouter(route_class=ApiKeyRoute, dependencies=[Security(api_key_header)])

_GATE_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Missing or invalid x-api-key"},
    500: {"model": ErrorResponse, "description": "INTERNAL_API_KEY not configured"},
}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "User has no score record"}}


def _metadata_response(record: ScoreRecord) -> ScoreMetadataResponse:
    return ScoreMetadataResponse(
        data=ScoreMetadata(user_id=record.user_id, score=record.score, history_hash=record.history_hash)
    )


@router.get("/{user_id}", response_model=ScoreResponse)
def get_score(user_id: str, registry: ScoreRegistry = Depends(get_score_registry)) -> ScoreResponse:
    """Current score. Users without a record score 0."""
    return ScoreResponse(user_id=user_id, score=registry.get_score(user_id))


@router.get("/{user_id}/metadata", response_model=ScoreMetadataResponse, responses=_NOT_FOUND)
def get_metadata(user_id: str, registry: ScoreRegistry = Depends(get_score_registry)) -> ScoreMetadataResponse:
    record = registry.get_metadata(user_id)
    if record is None:
        raise ScoreNotFoundError(user_id)
    return _metadata_response(record)


@gated_router.post(
    "",
    response_model=ScoreMetadataResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_GATE_RESPONSES, 409: {"model": ErrorResponse, "description": "Record already exists"}},
)
def mint_score(
    body: MintScoreRequest,
    registry: ScoreRegistry = Depends(get_score_registry),
) -> ScoreMetadataResponse:
    """Create the score record for a user. One record per user."""
    record = registry.mint(body.user_id, body.score, body.history_hash)
    return _metadata_response(record)


@gated_router.post(
    "/{user_id}/update",
    response_model=ScoreMetadataResponse,
    responses={**_GATE_RESPONSES, **_NOT_FOUND},
)
def update_score(
    user_id: str,
    body: UpdateScoreRequest,
    registry: ScoreRegistry = Depends(get_score_registry),
) -> ScoreMetadataResponse:
    """Apply a repayment: every 100 units repaid adds one point."""
    return _metadata_response(registry.update_score(user_id, body.repayment_amount))


@gated_router.put(
    "/{user_id}/history-hash",
    response_model=ScoreMetadataResponse,
    responses={**_GATE_RESPONSES, **_NOT_FOUND},
)
def update_history_hash(
    user_id: str,
    body: UpdateHistoryHashRequest,
    registry: ScoreRegistry = Depends(get_score_registry),
) -> ScoreMetadataResponse:
    return _metadata_response(registry.update_history_hash(user_id, body.history_hash))

# ─────────────────────────────────────────────────────────────────────────────
# POST /api/simulate — repayment score projection (THIN)
# ─────────────────────────────────────────────────────────────────────────────


from fastapi import APIRouter, Depends

from remitlend.dependencies import get_score_registry
from remitlend.schemas import SimulationRequest, SimulationResponse, SimulationStepResponse
from remitlend.services.score_registry import ScoreRegistry
from remitlend.services.simulation import simulate_repayments

router = APIRouter()


@router.post("/simulate", response_model=SimulationResponse)
def simulate(
    body: SimulationRequest,
    registry: ScoreRegistry = Depends(get_score_registry),
) -> SimulationResponse:
    """Project a score over planned repayments without changing any record.

    Starts from the user's current score when user_id has a record,
    otherwise from starting_score.
    """
    starting_score = body.starting_score
    if body.user_id is not None:
        record = registry.get_metadata(body.user_id)
        if record is not None:
            starting_score = record.score

    result = simulate_repayments(starting_score, body.repayments)
    return SimulationResponse(
        starting_score=result.starting_score,
        projected_score=result.projected_score,
        points_gained=result.points_gained,
        timeline=[
            SimulationStepResponse(repayment_amount=s.repayment_amount, points=s.points, score=s.score)
            for s in result.steps
        ],
    )

# ─────────────────────────────────────────────────────────────────────────────
# Schema Factory Tests — polyfactory
# ─────────────────────────────────────────────────────────────────────────────
# polyfactory builds valid instances from the Pydantic field constraints;
# the tests check that what the API accepts also round-trips through
# the routes.
# ─────────────────────────────────────────────────────────────────────────────

import random
import string

from dirty_equals import IsInt, IsPositiveInt
from polyfactory.factories.pydantic_factory import ModelFactory

from remitlend.schemas import (
    HealthResponse,
    MintScoreRequest,
    SimulationRequest,
    UpdateScoreRequest,
)


def _hex_hash() -> str:
    return "".join(random.choices("0123456789abcdef", k=64))


class MintScoreRequestFactory(ModelFactory):
    __model__ = MintScoreRequest

    @classmethod
    def user_id(cls) -> str:
        return "user-" + "".join(random.choices(string.ascii_lowercase + string.digits, k=12))

    @classmethod
    def history_hash(cls) -> str:
        return _hex_hash()


class SimulationRequestFactory(ModelFactory):
    __model__ = SimulationRequest

    @classmethod
    def user_id(cls) -> None:
        return None

    @classmethod
    def repayments(cls) -> list[int]:
        return [random.randint(0, 50_000) for _ in range(random.randint(1, 24))]


class UpdateScoreRequestFactory(ModelFactory):
    __model__ = UpdateScoreRequest


class HealthResponseFactory(ModelFactory):
    __model__ = HealthResponse


class TestFactoriesProduceValidModels:
    def test_mint_request(self):
        for _ in range(20):
            req = MintScoreRequestFactory.build()
            assert req.score >= 0
            assert len(req.history_hash) == 64

    def test_update_request_non_negative(self):
        for _ in range(20):
            assert UpdateScoreRequestFactory.build().repayment_amount >= 0

    def test_health_response(self):
        health = HealthResponseFactory.build()
        assert health.uptime >= 0
        assert health.timestamp >= 0


class TestFactoriesAgainstRoutes:
    def test_minted_records_read_back(self, client, auth_headers):
        for req in MintScoreRequestFactory.batch(5):
            response = client.post("/api/score", json=req.model_dump(), headers=auth_headers)
            assert response.status_code == 201
            assert client.get(f"/api/score/{req.user_id}").json()["score"] == req.score

    def test_simulation_projection(self, client):
        for req in SimulationRequestFactory.batch(5):
            data = client.post("/api/simulate", json=req.model_dump()).json()
            assert data["projected_score"] == req.starting_score + sum(a // 100 for a in req.repayments)
            assert data["points_gained"] == IsInt(ge=0)
            assert len(data["timeline"]) == IsPositiveInt

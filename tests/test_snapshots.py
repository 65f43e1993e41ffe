# ─────────────────────────────────────────────────────────────────────────────
# Inline Snapshot Tests — inline-snapshot
# ─────────────────────────────────────────────────────────────────────────────
# Wire bodies that clients parse. A change here is an API change.
#
#   pytest --inline-snapshot=update    → updates changed snapshots
# ─────────────────────────────────────────────────────────────────────────────

from conftest import HASH_1
from inline_snapshot import snapshot


class TestErrorBodies:
    def test_unauthorised(self, client):
        response = client.post("/api/score/alice/update", json={"repayment_amount": 100})
        assert response.json() == snapshot({"success": False, "message": "Unauthorised: invalid or missing API key"})

    def test_misconfigured(self, make_client):
        response = make_client(internal_api_key="").post("/api/score/alice/update", json={"repayment_amount": 100})
        assert response.json() == snapshot(
            {"success": False, "message": "Server misconfiguration: INTERNAL_API_KEY is not set"}
        )

    def test_not_found(self, client, auth_headers):
        response = client.post("/api/score/ghost/update", json={"repayment_amount": 100}, headers=auth_headers)
        assert response.json() == snapshot({"success": False, "message": "User 'ghost' does not have a score record"})

    def test_cors(self, client):
        response = client.get("/health", headers={"Origin": "https://evil.example"})
        assert response.json() == snapshot({"success": False, "message": "Not allowed by CORS"})


class TestSuccessBodies:
    def test_simulation(self, client):
        response = client.post("/api/simulate", json={"starting_score": 500, "repayments": [250, 1000]})
        assert response.json() == snapshot(
            {
                "success": True,
                "starting_score": 500,
                "projected_score": 512,
                "points_gained": 12,
                "timeline": [
                    {"repayment_amount": 250, "points": 2, "score": 502},
                    {"repayment_amount": 1000, "points": 10, "score": 512},
                ],
            }
        )

    def test_mint(self, client, auth_headers):
        response = client.post(
            "/api/score",
            json={"user_id": "alice", "score": 500, "history_hash": HASH_1},
            headers=auth_headers,
        )
        assert response.json() == snapshot(
            {
                "success": True,
                "data": {
                    "user_id": "alice",
                    "score": 500,
                    "history_hash": "0100000000000000000000000000000000000000000000000000000000000000",
                },
            }
        )

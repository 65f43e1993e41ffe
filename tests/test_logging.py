# ─────────────────────────────────────────────────────────────────────────────
# Tests — structured logging never carries the secret
# ─────────────────────────────────────────────────────────────────────────────
# create_app installs a StreamHandler on whatever sys.stdout is at that
# moment, so each test builds its app inside the test body where capsys is
# capturing. Building it in a fixture would bind the setup-phase stream.
# ─────────────────────────────────────────────────────────────────────────────

import json

from conftest import make_settings
from fastapi.testclient import TestClient

from remitlend.main import create_app

_SECRET = "s3cr3t-value-never-logged"


def _json_client() -> TestClient:
    return TestClient(create_app(make_settings(internal_api_key=_SECRET, log_json=True)))


def _records(out: str) -> list[dict]:
    return [json.loads(line) for line in out.splitlines() if line.startswith("{")]


class TestAuthLogging:
    def test_rejection_logged_without_keys(self, capsys):
        client = _json_client()
        client.post("/api/score/alice/update", json={"repayment_amount": 1}, headers={"x-api-key": "guess"})
        captured = capsys.readouterr()

        assert "Logging error" not in captured.err
        rejected = [r for r in _records(captured.out) if r.get("event") == "auth_rejected"]
        assert rejected
        assert rejected[0]["reason"] == "invalid_or_missing_api_key"
        assert rejected[0]["path"] == "/api/score/alice/update"
        assert _SECRET not in captured.out
        assert "guess" not in captured.out

    def test_malformed_body_rejection_is_logged(self, capsys):
        client = _json_client()
        client.post("/api/score", content="{not json", headers={"content-type": "application/json"})
        events = [r.get("event") for r in _records(capsys.readouterr().out)]
        assert "auth_rejected" in events

    def test_success_does_not_log_secret(self, capsys):
        client = _json_client()
        client.post("/api/score/alice/update", json={"repayment_amount": 1}, headers={"x-api-key": _SECRET})
        out = capsys.readouterr().out
        assert _records(out)
        assert _SECRET not in out

    def test_access_log_has_request_id(self, capsys):
        client = _json_client()
        response = client.get("/api/score/alice")
        completed = [r for r in _records(capsys.readouterr().out) if r.get("event") == "request_completed"]
        assert completed
        assert completed[-1]["request_id"] == response.headers["X-Request-ID"]
        assert completed[-1]["status"] == 200

    def test_health_not_access_logged(self, capsys):
        client = _json_client()
        client.get("/health")
        client.get("/api/score/alice")
        completed = [r for r in _records(capsys.readouterr().out) if r.get("event") == "request_completed"]
        assert [r["path"] for r in completed] == ["/api/score/alice"]

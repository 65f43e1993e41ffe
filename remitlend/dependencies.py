# ─────────────────────────────────────────────────────────────────────────────
# Dependency Injection — FastAPI Depends() providers
# ─────────────────────────────────────────────────────────────────────────────
# State flows: create_app builds → app.state stores → Depends() injects.
# No global lookups. Every dependency is explicit in endpoint signatures.
# The API key gate is not a dependency: auth.ApiKeyRoute runs it before the
# body is parsed.
# ─────────────────────────────────────────────────────────────────────────────


from fastapi import Request

from remitlend.services.score_registry import ScoreRegistry


def get_score_registry(request: Request) -> ScoreRegistry:
    """Inject ScoreRegistry into endpoints via Depends()."""
    return request.app.state.score_registry  # type: ignore[no-any-return]

"""
Health check endpoints.

Provides liveness and readiness probes. Readiness requires the card store
and the rule lists to be loaded.
"""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from highlander.services.card_store import card_store_registry
from highlander.services.rule_lists import RuleListError, get_rule_lists

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    card_store: str | None = None
    rule_lists: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(response: Response) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 until the card store and rule lists are available.
    """
    store_loaded = card_store_registry.is_loaded
    try:
        get_rule_lists()
        rules_loaded = True
    except RuleListError:
        rules_loaded = False

    if store_loaded and rules_loaded:
        return HealthResponse(status="ready", card_store="loaded", rule_lists="loaded")

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(
        status="not ready",
        card_store="loaded" if store_loaded else "missing",
        rule_lists="loaded" if rules_loaded else "missing",
    )

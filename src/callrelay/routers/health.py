"""
Health check endpoint for callrelay.

Reports liveness, the number of connected viewers, and how each
third-party integration is configured.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from callrelay.models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    state = request.app.state
    services = {
        "faq": "configured" if state.faq_source.configured else "default",
        "email_webhook": "configured" if state.email_dispatcher.configured else "demo",
        "signed_url": state.signed_url_resolver.mode,
    }
    status = "healthy" if state.signed_url_resolver.mode != "not_configured" else "degraded"
    return HealthResponse(
        status=status,
        viewers=len(state.broadcaster.clients),
        services=services,
    )

"""
Call lifecycle endpoints.

The voice-agent integration marks a call as started or stopped; each
mark is broadcast to the dashboard.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from callrelay.broadcaster import EventBroadcaster
from callrelay.dependencies import get_broadcaster
from callrelay.models import CallEndedEvent, CallStartedEvent, OkResponse

router = APIRouter(prefix="/api/call", tags=["calls"])


@router.post("/start", response_model=OkResponse, response_model_exclude_none=True)
async def call_start(
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
) -> OkResponse:
    await broadcaster.publish(CallStartedEvent())
    return OkResponse()


@router.post("/stop", response_model=OkResponse, response_model_exclude_none=True)
async def call_stop(
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
) -> OkResponse:
    await broadcaster.publish(CallEndedEvent())
    return OkResponse()

"""
Realtime relay endpoints.

Transcript lines and status text posted by the voice-agent runtime are
broadcast to the dashboard. Posts without text are acknowledged but not
broadcast.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends

from callrelay.broadcaster import EventBroadcaster
from callrelay.dependencies import get_broadcaster, get_json_body
from callrelay.models import OkResponse, SpeakerRole, StatusEvent, TranscriptEvent

router = APIRouter(prefix="/rt", tags=["realtime"])


def _as_text(value: Any) -> str:
    """Strings pass through; any other JSON value is relayed as compact JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


@router.post("/transcript", response_model=OkResponse, response_model_exclude_none=True)
async def relay_transcript(
    body: dict[str, Any] = Depends(get_json_body),
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
) -> OkResponse:
    text = body.get("text")
    if text:
        role = body.get("role") or SpeakerRole.CALLER.value
        await broadcaster.publish(TranscriptEvent(role=_as_text(role), text=_as_text(text)))
    return OkResponse()


@router.post("/status", response_model=OkResponse, response_model_exclude_none=True)
async def relay_status(
    body: dict[str, Any] = Depends(get_json_body),
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
) -> OkResponse:
    text = body.get("text")
    if text:
        await broadcaster.publish(StatusEvent(text=_as_text(text)))
    return OkResponse()

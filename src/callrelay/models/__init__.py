"""
Pydantic data models for callrelay.

Contains the broadcast event variants and the request/response envelopes
of the HTTP endpoints.
"""

from callrelay.models.events import (
    CallEndedEvent,
    CallStartedEvent,
    RelayEvent,
    SpeakerRole,
    StatusEvent,
    TranscriptEvent,
)
from callrelay.models.schemas import (
    EmailConfirmRequest,
    FaqItem,
    FaqResponse,
    HealthResponse,
    OkResponse,
    SignedUrlResponse,
)

__all__ = [
    "CallEndedEvent",
    "CallStartedEvent",
    "EmailConfirmRequest",
    "FaqItem",
    "FaqResponse",
    "HealthResponse",
    "OkResponse",
    "RelayEvent",
    "SignedUrlResponse",
    "SpeakerRole",
    "StatusEvent",
    "TranscriptEvent",
]

"""
Broadcast event models for callrelay.

Every event pushed to dashboard viewers is one of the frozen models below,
tagged by its ``type`` field. An event is serialized once per publish and
the same text is sent to every viewer.
"""

from __future__ import annotations

import time
from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


def _epoch_ms() -> int:
    """Return the current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


class SpeakerRole(str, Enum):
    """Who spoke a transcript line."""

    CALLER = "caller"
    AGENT = "agent"


class _BaseEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    def serialize(self) -> str:
        """Return the compact JSON text sent to viewers."""
        return self.model_dump_json()


class CallStartedEvent(_BaseEvent):
    """A call has started.

    Attributes:
        at: Creation time in epoch milliseconds.
    """

    type: Literal["started"] = "started"
    at: int = Field(default_factory=_epoch_ms)


class CallEndedEvent(_BaseEvent):
    """A call has ended.

    Attributes:
        at: Creation time in epoch milliseconds.
    """

    type: Literal["ended"] = "ended"
    at: int = Field(default_factory=_epoch_ms)


class TranscriptEvent(_BaseEvent):
    """One utterance of the live transcript.

    Attributes:
        role: Speaker role, usually ``caller`` or ``agent``. Other labels
              sent by the voice-agent runtime are passed through unchanged.
        text: Utterance text.
    """

    type: Literal["transcript"] = "transcript"
    role: str = SpeakerRole.CALLER.value
    text: str


class StatusEvent(_BaseEvent):
    """A free-text status line for the dashboard."""

    type: Literal["status"] = "status"
    text: str


RelayEvent = Union[CallStartedEvent, CallEndedEvent, TranscriptEvent, StatusEvent]

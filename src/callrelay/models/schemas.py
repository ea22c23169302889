"""
Request and response schemas for the callrelay HTTP endpoints.

Optional response fields are left as ``None`` and dropped from the JSON
body by the routers (``response_model_exclude_none``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

EMAIL_REQUIRED_FIELDS: tuple[str, ...] = ("email", "loc", "date", "time")


class OkResponse(BaseModel):
    """Uniform ``{ok, ...}`` envelope returned by action endpoints."""

    ok: bool = True
    error: str | None = None
    demo: bool | None = None


class FaqItem(BaseModel):
    q: str
    a: str


class FaqResponse(BaseModel):
    """FAQ document.

    Attributes:
        items: Question/answer pairs.
        fallback: ``True`` when the built-in FAQ was served instead of the
                  remote document.
    """

    items: list[FaqItem] = Field(default_factory=list)
    fallback: bool | None = None


class SignedUrlResponse(BaseModel):
    """Conversation WebSocket URL for the browser voice widget.

    Attributes:
        url: WebSocket URL, or ``""`` when none could be produced.
        source: Signing endpoint that issued the URL.
        note: Explanation when the public (unsigned) URL is returned.
        error: Failure description when ``url`` is empty.
    """

    url: str = ""
    source: str | None = None
    note: str | None = None
    error: str | None = None


class EmailConfirmRequest(BaseModel):
    """Appointment details for an email confirmation.

    Attributes:
        email: Recipient address.
        loc: Test-centre location.
        date: Appointment date.
        time: Appointment time.
        phone: Optional caller phone number.
    """

    email: str
    loc: str
    date: str
    time: str
    phone: str | None = None

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> EmailConfirmRequest:
        """Build from a presence-checked JSON body, stringifying values."""
        phone = body.get("phone")
        return cls(
            email=str(body["email"]),
            loc=str(body["loc"]),
            date=str(body["date"]),
            time=str(body["time"]),
            phone=str(phone) if phone else None,
        )

    @staticmethod
    def missing_fields(body: dict[str, Any]) -> list[str]:
        """Return the required fields absent or empty in *body*."""
        return [name for name in EMAIL_REQUIRED_FIELDS if not body.get(name)]


class HealthResponse(BaseModel):
    status: str
    viewers: int
    services: dict[str, str]

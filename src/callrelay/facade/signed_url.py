"""
Signed conversation URL acquisition for callrelay.

Asks the ElevenLabs signing endpoints, in order, for a signed WebSocket
URL for the configured agent. When no API key is configured, or every
endpoint fails, the public conversation URL for the agent is returned
instead (it works when the agent is in public mode).
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
import structlog
from pydantic import BaseModel

from callrelay.errors import ErrorKind, RelayError
from callrelay.models.schemas import SignedUrlResponse

from .base import DEFAULT_TIMEOUT_S, ExternalService

logger = structlog.get_logger()

PUBLIC_CONVERSATION_URL = "wss://api.elevenlabs.io/v1/convai/conversation"

DEFAULT_SIGNING_ENDPOINTS: tuple[str, ...] = (
    "https://api.elevenlabs.io/v1/convai/conversation",
    "https://api.elevenlabs.io/v1/convai/conversations",
)

# Which API version uses which name is undocumented; accept all of them.
URL_FIELD_PATHS: tuple[tuple[str, ...], ...] = (
    ("websocket_url",),
    ("ws_url",),
    ("url",),
    ("data", "url"),
)

NOTE_NO_API_KEY = "public-fallback (no ELEVEN_API_KEY set)"
NOTE_SIGNING_UNAVAILABLE = "public-fallback (signing endpoints not available)"
MISSING_AGENT_ID = "missing ELEVENLABS_AGENT_ID / AGENT_ID"

# Unreserved URI-component marks kept literal on top of quote()'s defaults.
_URI_COMPONENT_SAFE = "!*'()"


def public_url(agent_id: str) -> str:
    """Return the unsigned conversation URL for *agent_id*."""
    return f"{PUBLIC_CONVERSATION_URL}?agent_id={quote(agent_id, safe=_URI_COMPONENT_SAFE)}"


def extract_signed_url(document: Any) -> str:
    """Return the first non-empty URL found in *document*, or ``""``.

    Only string values count: a truthy number or object under one of the
    URL fields cannot be dialled, so probing moves on to the next field.
    """
    for path in URL_FIELD_PATHS:
        value = document
        for key in path:
            value = value.get(key) if isinstance(value, dict) else None
        if isinstance(value, str) and value:
            return value
    return ""


class SignedUrlResult(BaseModel):
    url: str = ""
    source: str | None = None
    note: str | None = None
    error: RelayError | None = None

    @property
    def is_fallback(self) -> bool:
        return self.note is not None

    def to_response(self) -> SignedUrlResponse:
        return SignedUrlResponse(
            url=self.url,
            source=self.source,
            note=self.note,
            error=str(self.error) if self.error else None,
        )


class SignedUrlResolver(ExternalService):
    """Ordered-candidates resolution of the voice widget's WebSocket URL.

    Args:
        agent_id: ElevenLabs agent identifier.
        api_key: ElevenLabs API key; empty skips signing entirely.
        endpoints: Signing endpoints, tried strictly in order.
        timeout: Per-request timeout in seconds.
    """

    name: str = "signed_url"

    def __init__(
        self,
        agent_id: str = "",
        api_key: str = "",
        *,
        endpoints: tuple[str, ...] = DEFAULT_SIGNING_ENDPOINTS,
        timeout: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        super().__init__(timeout=timeout)
        self.agent_id = agent_id
        self.api_key = api_key
        self.endpoints = endpoints

    @property
    def mode(self) -> str:
        """``signed``, ``public`` or ``not_configured``."""
        if not self.agent_id:
            return "not_configured"
        return "signed" if self.api_key else "public"

    async def _try_endpoint(self, client: httpx.AsyncClient, endpoint: str) -> str:
        log = logger.bind(endpoint=endpoint)
        try:
            resp = await client.post(
                endpoint,
                json={"agent_id": self.agent_id},
                headers={"xi-api-key": self.api_key, "Content-Type": "application/json"},
            )
            resp.raise_for_status()
            document = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            log.info("signing_endpoint_failed", error=str(exc) or type(exc).__name__)
            self._record("candidate_failed")
            return ""

        url = extract_signed_url(document)
        if not url:
            log.info("signing_endpoint_no_url")
            self._record("candidate_failed")
        return url

    async def resolve(self) -> SignedUrlResult:
        """Return a signed URL, the public fallback, or a configuration error."""
        if not self.agent_id:
            self._record("not_configured")
            return SignedUrlResult(
                error=RelayError(kind=ErrorKind.CONFIG_MISSING, message=MISSING_AGENT_ID),
            )

        if not self.api_key:
            self._record("public")
            return SignedUrlResult(url=public_url(self.agent_id), note=NOTE_NO_API_KEY)

        client = await self._get_client()
        for endpoint in self.endpoints:
            url = await self._try_endpoint(client, endpoint)
            if url:
                logger.info("signed_url_acquired", source=endpoint)
                self._record("ok")
                return SignedUrlResult(url=url, source=endpoint)

        logger.warning("signed_url_fallback", agent_id=self.agent_id)
        self._record("fallback")
        return SignedUrlResult(url=public_url(self.agent_id), note=NOTE_SIGNING_UNAVAILABLE)

"""
FAQ content source for callrelay.

Fetches the FAQ document from a configured URL. When no URL is configured,
or the fetch fails in any way, the built-in FAQ is returned instead; it has
the same shape as a remote document plus ``fallback: true``.
"""

from __future__ import annotations

import httpx
import structlog

from callrelay.models.schemas import FaqItem, FaqResponse

from .base import DEFAULT_TIMEOUT_S, ExternalService

logger = structlog.get_logger()

DEFAULT_FAQ_ITEMS: tuple[FaqItem, ...] = (
    FaqItem(
        q="What do I need to book an NCT slot?",
        a="Registration, preferred test centre, and date/time.",
    ),
    FaqItem(q="Can I reschedule?", a="Yes, up to 24 hours before the appointment."),
    FaqItem(q="How do I pay?", a="Online payment at the end of booking."),
)


def default_faq() -> FaqResponse:
    """Return a fresh copy of the built-in FAQ."""
    return FaqResponse(items=list(DEFAULT_FAQ_ITEMS), fallback=True)


class FaqSource(ExternalService):
    """Fetch-or-default access to the FAQ document.

    Args:
        url: Remote FAQ URL; empty means always serve the built-in FAQ.
        timeout: Per-request timeout in seconds.
    """

    name: str = "faq"

    def __init__(self, url: str = "", *, timeout: float = DEFAULT_TIMEOUT_S) -> None:
        super().__init__(timeout=timeout)
        self.url = url

    @property
    def configured(self) -> bool:
        return bool(self.url)

    async def fetch(self) -> FaqResponse:
        """Return the remote FAQ, or the built-in one if it is unavailable.

        A transport error, a non-2xx status, a non-JSON body, or a body
        that does not match ``{items: [{q, a}]}`` all yield the default.
        """
        if not self.url:
            self._record("default")
            return default_faq()

        log = logger.bind(faq_url=self.url)
        try:
            client = await self._get_client()
            resp = await client.get(self.url)
            resp.raise_for_status()
            faq = FaqResponse.model_validate(resp.json())
        except (httpx.HTTPError, ValueError) as exc:
            log.warning("faq_fetch_failed", error=str(exc) or type(exc).__name__)
            self._record("fallback")
            return default_faq()

        self._record("ok")
        log.debug("faq_fetched", items=len(faq.items))
        return faq

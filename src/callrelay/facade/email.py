"""
Email-confirmation dispatch for callrelay.

Posts an appointment confirmation to a webhook (a Make.com scenario that
sends the actual email). With no webhook configured the dispatch is only
logged and reported as a successful demo send.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog
from pydantic import BaseModel

from callrelay.errors import ErrorKind, RelayError
from callrelay.models.schemas import EmailConfirmRequest, OkResponse

from .base import DEFAULT_TIMEOUT_S, ExternalService

logger = structlog.get_logger()

DEFAULT_FROM_EMAIL = "noreply@ncts.ie"
INVITE_TYPE = "nct_email_invite"
INVITE_SUBJECT = "NCT Appointment Confirmation"


class DispatchResult(BaseModel):
    """Outcome of one confirmation dispatch."""

    ok: bool
    demo: bool = False
    error: RelayError | None = None

    def to_response(self) -> OkResponse:
        return OkResponse(
            ok=self.ok,
            demo=True if self.demo else None,
            error=str(self.error) if self.error else None,
        )


class EmailDispatcher(ExternalService):
    """Deliver confirmation requests as a single HTTP POST to a webhook.

    Args:
        url: Webhook URL; empty enables demo mode.
        api_key: Optional value for the ``x-make-apikey`` header.
        from_email: Sender address placed in the payload.
        timeout: Per-request timeout in seconds.
    """

    name: str = "email_webhook"

    def __init__(
        self,
        url: str = "",
        *,
        api_key: str = "",
        from_email: str = DEFAULT_FROM_EMAIL,
        timeout: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        super().__init__(timeout=timeout)
        self.url = url
        self.api_key = api_key
        self.from_email = from_email

    @property
    def configured(self) -> bool:
        return bool(self.url)

    def build_payload(self, request: EmailConfirmRequest) -> dict[str, Any]:
        data: dict[str, Any] = {
            "location": request.loc,
            "date": request.date,
            "time": request.time,
        }
        if request.phone:
            data["phone"] = request.phone
        return {
            "type": INVITE_TYPE,
            "from": self.from_email,
            "to": request.email,
            "subject": INVITE_SUBJECT,
            "data": data,
        }

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["x-make-apikey"] = self.api_key
        return headers

    async def send(self, request: EmailConfirmRequest) -> DispatchResult:
        """Dispatch *request* once.

        Returns:
            ``ok=True, demo=True`` in demo mode; ``ok=True`` on a 2xx
            webhook response; otherwise ``ok=False`` with a
            ``REMOTE_FAILURE`` error.
        """
        if not self.url:
            logger.info("email_demo_dispatch", **request.model_dump(exclude_none=True))
            self._record("demo")
            return DispatchResult(ok=True, demo=True)

        log = logger.bind(webhook_url=self.url, to=request.email)
        try:
            client = await self._get_client()
            resp = await client.post(
                self.url, json=self.build_payload(request), headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            log.error("email_webhook_unreachable", error=str(exc))
            self._record("error")
            return DispatchResult(
                ok=False, error=RelayError.from_exception(exc, ErrorKind.REMOTE_FAILURE),
            )

        if not resp.is_success:
            log.error("email_webhook_rejected", status=resp.status_code)
            self._record("rejected")
            return DispatchResult(
                ok=False,
                error=RelayError(
                    kind=ErrorKind.REMOTE_FAILURE,
                    message=f"webhook {resp.status_code}: {resp.text}",
                ),
            )

        log.info("email_webhook_delivered", status=resp.status_code)
        self._record("ok")
        return DispatchResult(ok=True)

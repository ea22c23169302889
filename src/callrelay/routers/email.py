"""
Email confirmation endpoint.

Validates that the appointment details are present, then hands them to
the email dispatcher.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends

from callrelay.dependencies import get_email_dispatcher, get_json_body
from callrelay.errors import RelayError
from callrelay.facade import EmailDispatcher
from callrelay.models import EmailConfirmRequest, OkResponse

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["email"])


@router.post("/email-confirm", response_model=OkResponse, response_model_exclude_none=True)
async def email_confirm(
    body: dict[str, Any] = Depends(get_json_body),
    dispatcher: EmailDispatcher = Depends(get_email_dispatcher),
) -> OkResponse:
    missing = EmailConfirmRequest.missing_fields(body)
    if missing:
        logger.info("email_confirm_rejected", missing=missing)
        return OkResponse(ok=False, error=str(RelayError.missing_fields()))

    try:
        result = await dispatcher.send(EmailConfirmRequest.from_body(body))
    except Exception as exc:  # noqa: BLE001
        logger.error("email_confirm_unexpected_error", exc_info=True)
        return OkResponse(ok=False, error=str(RelayError.from_exception(exc)))
    return result.to_response()

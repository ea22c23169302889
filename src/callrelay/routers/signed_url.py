"""
Signed conversation URL endpoint for the browser voice widget.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends

from callrelay.dependencies import get_signed_url_resolver
from callrelay.errors import RelayError
from callrelay.facade import SignedUrlResolver
from callrelay.models import SignedUrlResponse

logger = structlog.get_logger()

router = APIRouter(tags=["voice"])


@router.get(
    "/ws-signed-url", response_model=SignedUrlResponse, response_model_exclude_none=True,
)
async def signed_url(
    resolver: SignedUrlResolver = Depends(get_signed_url_resolver),
) -> SignedUrlResponse:
    try:
        result = await resolver.resolve()
    except Exception as exc:  # noqa: BLE001
        logger.error("signed_url_unexpected_error", exc_info=True)
        return SignedUrlResponse(url="", error=str(RelayError.from_exception(exc)))
    return result.to_response()

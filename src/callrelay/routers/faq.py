"""
FAQ endpoint.

Serves the remote FAQ document, or the built-in FAQ when it cannot be
fetched.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends

from callrelay.dependencies import get_faq_source
from callrelay.facade import FaqSource, default_faq
from callrelay.models import FaqResponse

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["faq"])


@router.get("/faq", response_model=FaqResponse, response_model_exclude_none=True)
async def list_faq(source: FaqSource = Depends(get_faq_source)) -> FaqResponse:
    try:
        return await source.fetch()
    except Exception:  # noqa: BLE001
        logger.error("faq_unexpected_error", exc_info=True)
        return default_faq()

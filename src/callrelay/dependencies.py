"""
FastAPI dependency injection providers for callrelay.

The broadcaster, settings and external services are created once by
``create_app`` and stored on ``app.state``; these providers hand them to
the routers for both HTTP and WebSocket routes.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.requests import HTTPConnection

from callrelay.broadcaster import EventBroadcaster
from callrelay.config import Settings
from callrelay.facade import EmailDispatcher, FaqSource, SignedUrlResolver


def get_app_settings(conn: HTTPConnection) -> Settings:
    return conn.app.state.settings


def get_broadcaster(conn: HTTPConnection) -> EventBroadcaster:
    return conn.app.state.broadcaster


def get_faq_source(conn: HTTPConnection) -> FaqSource:
    return conn.app.state.faq_source


def get_email_dispatcher(conn: HTTPConnection) -> EmailDispatcher:
    return conn.app.state.email_dispatcher


def get_signed_url_resolver(conn: HTTPConnection) -> SignedUrlResolver:
    return conn.app.state.signed_url_resolver


async def get_json_body(request: Request) -> dict[str, Any]:
    """Return the request's JSON object body.

    A missing, malformed or non-object body is treated as ``{}`` so that
    handlers answer with their own ``{ok: false}`` envelope instead of a
    422.
    """
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}

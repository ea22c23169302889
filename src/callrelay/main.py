"""
FastAPI application entry point for callrelay.

Creates the broadcaster and external services from settings, registers
routers, middleware and the fallback exception handler, and runs the
server with uvicorn.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from prometheus_client import make_asgi_app

from callrelay import __version__
from callrelay.broadcaster import EventBroadcaster
from callrelay.config import Settings, get_settings
from callrelay.errors import RelayError
from callrelay.facade import EmailDispatcher, FaqSource, SignedUrlResolver
from callrelay.logging import configure_logging
from callrelay.middleware.logging import LoggingMiddleware
from callrelay.routers import calls, email, faq, health, realtime, signed_url, static, ws

logger = structlog.get_logger()

JSON_PREFIXES: tuple[str, ...] = ("/api", "/rt", "/ws-signed-url")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    settings: Settings = app.state.settings

    # ── Startup ──
    logger.info("boot", url=f"http://localhost:{settings.port}")
    if not settings.eleven_api_key:
        logger.warning(
            "eleven_api_key_missing",
            detail="ELEVEN_API_KEY / ELEVENLABS_API_KEY is not set "
            "(using public fallback if agent is Public).",
        )
    if not settings.agent_id:
        logger.warning(
            "agent_id_missing", detail="ELEVENLABS_AGENT_ID / AGENT_ID is not set.",
        )

    yield

    # ── Shutdown ──
    logger.info("shutdown")
    await app.state.faq_source.close()
    await app.state.email_dispatcher.close()
    await app.state.signed_url_resolver.close()
    await app.state.broadcaster.close()


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    """Turn an exception escaping a route into a response.

    JSON endpoints answer ``{ok: false, error}`` with HTTP 200; everything
    else (static files) gets a plain 500 with the error text.
    """
    logger.error(
        "unhandled_exception", path=request.url.path, error=str(exc), exc_info=exc,
    )
    if request.url.path.startswith(JSON_PREFIXES):
        return JSONResponse({"ok": False, "error": str(RelayError.from_exception(exc))})
    return PlainTextResponse(str(exc), status_code=500)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="callrelay",
        version=__version__,
        docs_url="/docs",
        redoc_url=None,
        lifespan=lifespan,
    )

    # ── Shared state ──
    app.state.settings = settings
    app.state.broadcaster = EventBroadcaster(send_timeout=settings.send_timeout)
    app.state.faq_source = FaqSource(settings.faq_url, timeout=settings.http_timeout)
    app.state.email_dispatcher = EmailDispatcher(
        settings.webhook_url,
        api_key=settings.webhook_key,
        from_email=settings.from_email,
        timeout=settings.http_timeout,
    )
    app.state.signed_url_resolver = SignedUrlResolver(
        settings.agent_id, settings.eleven_api_key, timeout=settings.http_timeout,
    )

    # ── Routers ──
    app.include_router(static.router)
    app.include_router(calls.router)
    app.include_router(realtime.router)
    app.include_router(faq.router)
    app.include_router(email.router)
    app.include_router(signed_url.router)
    app.include_router(ws.router)
    app.include_router(health.router)

    static.mount_static(app, settings.static_dir)
    app.mount("/metrics", make_asgi_app())

    app.add_middleware(LoggingMiddleware)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    return app


def main() -> None:
    """Run callrelay with uvicorn; failing to bind the port ends the process."""
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

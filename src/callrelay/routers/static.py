"""
Dashboard page and static assets.

``/`` serves ``index.html`` from the working directory when present,
otherwise from the static directory. The static directory itself is
mounted under both ``/public`` and ``/assets``.
"""

from __future__ import annotations

from pathlib import Path

import structlog
from fastapi import APIRouter, Depends, FastAPI
from fastapi.responses import FileResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles

from callrelay.config import Settings
from callrelay.dependencies import get_app_settings

logger = structlog.get_logger()

router = APIRouter(tags=["static"])

STATIC_PREFIXES: tuple[str, ...] = ("/public", "/assets")


def resolve_index_path(static_dir: Path) -> Path:
    """Return ``./index.html`` if it exists, else ``<static_dir>/index.html``."""
    root_index = Path.cwd() / "index.html"
    if root_index.is_file():
        return root_index
    return static_dir / "index.html"


@router.get("/", include_in_schema=False)
async def index(settings: Settings = Depends(get_app_settings)) -> Response:
    try:
        path = resolve_index_path(Path(settings.static_dir))
        if not path.is_file():
            raise FileNotFoundError(f"index page not found: {path}")
        return FileResponse(path, media_type="text/html")
    except OSError as exc:
        logger.error("index_unavailable", error=str(exc))
        return PlainTextResponse(str(exc), status_code=500)


def mount_static(app: FastAPI, directory: str) -> None:
    """Serve *directory* under every prefix in ``STATIC_PREFIXES``."""
    for prefix in STATIC_PREFIXES:
        app.mount(
            prefix,
            StaticFiles(directory=directory, check_dir=False),
            name=prefix.strip("/"),
        )

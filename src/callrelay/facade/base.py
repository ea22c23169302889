"""
Base class for third-party HTTP services in callrelay.

Owns the lazily created ``httpx.AsyncClient`` shared by a service's
requests and the outcome counter every service reports to.
"""

from __future__ import annotations

import httpx

from callrelay.metrics import external_calls_total

DEFAULT_TIMEOUT_S = 10.0


class ExternalService:
    """Common plumbing for a service that calls out over HTTP.

    Subclasses issue requests through :meth:`_get_client`. A request that
    exceeds *timeout* fails like any other transport error; there is no
    retry.

    Args:
        timeout: Per-request timeout in seconds (default 10).

    Attributes:
        name: Service identifier used in logs and metrics.
    """

    name: str = "external"

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT_S) -> None:
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Return (and lazily create) the shared ``httpx.AsyncClient``."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def _record(self, outcome: str) -> None:
        external_calls_total.labels(service=self.name, outcome=outcome).inc()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

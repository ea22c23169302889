"""
Event broadcaster for callrelay.

Pushes call-lifecycle and transcript events to every connected dashboard
viewer over WebSocket. Delivery is best effort and at most once: viewers
that join late get no history, and a viewer whose send fails is dropped
without affecting the others.
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog
from starlette.websockets import WebSocketDisconnect, WebSocketState
from websockets.exceptions import ConnectionClosed

from callrelay.metrics import event_deliveries_failed_total, events_published_total
from callrelay.models.events import RelayEvent

logger = structlog.get_logger()

DEFAULT_SEND_TIMEOUT_S = 5.0


def _is_open(ws: Any) -> bool:
    """``True`` when both ends of *ws* have completed the handshake and not closed."""
    return (
        ws.client_state == WebSocketState.CONNECTED
        and ws.application_state == WebSocketState.CONNECTED
    )


def _is_closed(ws: Any) -> bool:
    return (
        ws.client_state == WebSocketState.DISCONNECTED
        or ws.application_state == WebSocketState.DISCONNECTED
    )


class EventBroadcaster:
    """Fan out events to all registered viewer connections.

    Holds one set of open WebSocket connections. :meth:`publish` serialises
    an event once and sends the same text to every open connection
    concurrently, so a slow viewer does not hold up the rest. Each send is
    bounded by *send_timeout*; a viewer that does not accept the frame in
    time counts as failed. Connections that fail are pruned from the
    registry.
    """

    def __init__(self, send_timeout: float = DEFAULT_SEND_TIMEOUT_S) -> None:
        self._clients: set[Any] = set()
        self._send_timeout = send_timeout

    # ── client management ──

    def register(self, ws: Any) -> None:
        """Add a viewer connection to the registry.

        Args:
            ws: A starlette ``WebSocket`` (or anything exposing
                ``send_text`` and the starlette connection states).
        """
        self._clients.add(ws)
        logger.debug("viewer_registered", total=len(self._clients))

    def unregister(self, ws: Any) -> None:
        """Remove a viewer connection; unknown connections are ignored."""
        self._clients.discard(ws)
        logger.debug("viewer_unregistered", total=len(self._clients))

    @property
    def clients(self) -> frozenset[Any]:
        """Snapshot of the registered connections."""
        return frozenset(self._clients)

    # ── delivery ──

    async def _deliver(self, ws: Any, payload: str) -> bool:
        try:
            await asyncio.wait_for(ws.send_text(payload), timeout=self._send_timeout)
        except asyncio.TimeoutError:
            logger.warning("viewer_send_timeout", timeout=self._send_timeout)
            return False
        except (WebSocketDisconnect, ConnectionClosed, RuntimeError, OSError) as exc:
            logger.debug("viewer_send_failed", error=str(exc))
            return False
        return True

    async def publish(self, event: RelayEvent) -> int:
        """Send *event* to every open viewer.

        Never raises: closed or failing connections are skipped and
        removed, and nothing is retried.

        Args:
            event: The event to broadcast.

        Returns:
            The number of viewers the event was delivered to.
        """
        payload = event.serialize()
        events_published_total.labels(type=event.type).inc()

        # Snapshot so viewers joining mid-publish cannot disturb iteration.
        targets = list(self._clients)
        open_targets = [ws for ws in targets if _is_open(ws)]
        # Still-handshaking viewers are skipped but kept.
        stale: list[Any] = [ws for ws in targets if _is_closed(ws)]

        results = await asyncio.gather(
            *(self._deliver(ws, payload) for ws in open_targets),
            return_exceptions=True,
        )

        delivered = 0
        for ws, result in zip(open_targets, results):
            if result is True:
                delivered += 1
            else:
                if isinstance(result, BaseException):
                    logger.warning("viewer_send_error", error=repr(result))
                event_deliveries_failed_total.inc()
                stale.append(ws)

        for ws in stale:
            self._clients.discard(ws)

        logger.info(
            "event_published",
            type=event.type,
            delivered=delivered,
            stale_removed=len(stale),
        )
        return delivered

    async def close(self) -> None:
        """Clear the registry (connections are not closed here)."""
        self._clients.clear()

"""
callrelay: live call relay for the voice-agent booking demo.

Fans call-lifecycle and transcript events out to dashboard viewers over a
single WebSocket channel, and fronts the third-party calls the dashboard
needs (FAQ content, email-confirmation webhook, signed conversation URL)
with local fallbacks when those services are unavailable.
"""

from callrelay.config import Settings, get_settings

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "__version__",
    "get_settings",
]

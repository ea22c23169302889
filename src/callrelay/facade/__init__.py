"""
External call façade package for callrelay.

Each service wraps one third-party operation behind a call that never
raises for remote failures: it returns the remote result, or a local
fallback, or a structured error value.
"""

from .base import ExternalService
from .email import DispatchResult, EmailDispatcher
from .faq import DEFAULT_FAQ_ITEMS, FaqSource, default_faq
from .signed_url import SignedUrlResolver, SignedUrlResult, extract_signed_url, public_url

__all__ = [
    "DEFAULT_FAQ_ITEMS",
    "DispatchResult",
    "EmailDispatcher",
    "ExternalService",
    "FaqSource",
    "SignedUrlResolver",
    "SignedUrlResult",
    "default_faq",
    "extract_signed_url",
    "public_url",
]

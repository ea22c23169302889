"""
Environment-based configuration management for callrelay.

Uses pydantic-settings to load configuration values from environment
variables and .env files. Values are read once at startup and shared,
read-only, by every handler and external service.

Several settings accept more than one environment name; the first name
found wins (e.g. ``ELEVEN_API_KEY`` before ``ELEVENLABS_API_KEY``).
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Levels both structlog filtering and uvicorn accept.
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Central configuration loaded from environment variables.

    Attributes:
        port: Bind port for the HTTP/WebSocket server.
        host: Bind address for the HTTP/WebSocket server.
        eleven_api_key: ElevenLabs API key used to request signed URLs.
        agent_id: ElevenLabs conversational agent identifier.
        faq_url: Remote FAQ document URL (empty = built-in FAQ).
        webhook_url: Email-confirmation webhook URL (empty = demo mode).
        webhook_key: Optional ``x-make-apikey`` header value for the webhook.
        from_email: Sender address placed in email-confirmation payloads.
        static_dir: Directory served under ``/public`` and ``/assets``.
        http_timeout: Per-request timeout in seconds for outbound calls.
        send_timeout: Seconds a viewer may take to accept one broadcast frame.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            unknown names fall back to INFO.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    # ── Server ──
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT"),
        description="HTTP bind port.",
    )
    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("HOST"),
        description="HTTP bind address.",
    )

    # ── ElevenLabs ──
    eleven_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("ELEVEN_API_KEY", "ELEVENLABS_API_KEY"),
        description="ElevenLabs API key.",
    )
    agent_id: str = Field(
        default="",
        validation_alias=AliasChoices("ELEVENLABS_AGENT_ID", "AGENT_ID"),
        description="ElevenLabs agent identifier.",
    )

    # ── FAQ ──
    faq_url: str = Field(
        default="",
        validation_alias=AliasChoices("FAQ_URL"),
        description="Remote FAQ document URL.",
    )

    # ── Email webhook ──
    webhook_url: str = Field(
        default="",
        validation_alias=AliasChoices("WEBHOOK_URL"),
        description="Email-confirmation webhook URL.",
    )
    webhook_key: str = Field(
        default="",
        validation_alias=AliasChoices("WEBHOOK_KEY"),
        description="Optional webhook API key.",
    )
    from_email: str = Field(
        default="noreply@ncts.ie",
        validation_alias=AliasChoices("FROM_EMAIL"),
        description="Sender address for confirmation emails.",
    )

    # ── Static files ──
    static_dir: str = Field(
        default="public",
        validation_alias=AliasChoices("STATIC_DIR"),
        description="Directory holding the dashboard assets.",
    )

    # ── Outbound HTTP ──
    http_timeout: float = Field(
        default=10.0,
        gt=0.0,
        validation_alias=AliasChoices("HTTP_TIMEOUT"),
        description="Per-request timeout for third-party calls, in seconds.",
    )
    send_timeout: float = Field(
        default=5.0,
        gt=0.0,
        validation_alias=AliasChoices("SEND_TIMEOUT"),
        description="Per-viewer broadcast send timeout, in seconds.",
    )

    # ── Logging ──
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL"),
        description="Logging level.",
    )

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        return level if level in LOG_LEVELS else "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached application settings singleton.

    Returns:
        The global ``Settings`` instance.
    """
    return Settings()

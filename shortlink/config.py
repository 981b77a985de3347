"""Configuration management for the link shortener."""

from typing import List, Literal, Optional
from pydantic_settings import BaseSettings
from pydantic import Field

from .telegram.notifier import InlineButton


# Per-deployment defaults applied when the setting is left unset
MODE_DEFAULTS = {
    "api": {"short_code_length": 6, "track_clicks": True},
    "bot": {"short_code_length": 7, "track_clicks": False},
}


class Config(BaseSettings):
    """Application configuration."""

    mode: Literal["api", "bot"] = Field(
        default="api",
        description="Deployment variant: 'api' (JSON API + landing page) or 'bot' (Telegram webhook)"
    )

    # Store settings
    store_backend: Literal["memory", "redis"] = Field(
        default="memory",
        description="Key-value store: 'memory' (per-process) or 'redis'"
    )

    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL (required for the redis store)"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=9200,
        description="Port to listen on"
    )

    workers: int = Field(
        default=1,
        ge=1,
        description="Number of uvicorn worker processes. Each worker has its own memory store."
    )

    # Shortener settings
    base_url: str = Field(
        default="http://localhost:9200",
        description="Base URL for generating short URLs when the request carries no host"
    )

    path_prefix: str = Field(
        default="",
        description="Path prefix for short URLs (e.g., '/s' for /s/abc123)"
    )

    short_code_length: Optional[int] = Field(
        default=None,
        ge=1,
        le=32,
        description="Length of generated short codes (6 for api, 7 for bot when unset)"
    )

    max_collision_retries: int = Field(
        default=10,
        ge=1,
        description="Maximum code generation attempts before giving up"
    )

    track_clicks: Optional[bool] = Field(
        default=None,
        description="Count clicks on resolve (on for api, off for bot when unset)"
    )

    # External services
    qr_service_url: str = Field(
        default="https://api.qrserver.com/v1/create-qr-code/",
        description="QR code image service endpoint"
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for outbound HTTP calls (QR service, Telegram)"
    )

    # Telegram bot settings
    telegram_bot_token: Optional[str] = Field(
        default=None,
        description="Telegram bot token (required for the bot variant)"
    )

    repository_url: Optional[str] = Field(
        default=None,
        description="Project repository URL (bot root redirect and welcome button)"
    )

    credit_button_text: Optional[str] = Field(
        default=None,
        description="Label of a second welcome button (e.g. a credit link)"
    )

    credit_button_url: Optional[str] = Field(
        default=None,
        description="Link of the second welcome button; both text and URL must be set"
    )

    welcome_media_url: Optional[str] = Field(
        default=None,
        description="Photo or animation sent in reply to /start"
    )

    welcome_media_type: Literal["photo", "animation"] = Field(
        default="animation",
        description="Kind of welcome media"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @property
    def welcome_extra_buttons(self) -> List[InlineButton]:
        """Configured welcome buttons beyond the repository link."""
        if self.credit_button_text and self.credit_button_url:
            return [InlineButton(self.credit_button_text, self.credit_button_url)]
        return []

    @property
    def code_length(self) -> int:
        """Short code length after applying the mode default."""
        if self.short_code_length is not None:
            return self.short_code_length
        return MODE_DEFAULTS[self.mode]["short_code_length"]

    @property
    def clicks_enabled(self) -> bool:
        """Click tracking after applying the mode default."""
        if self.track_clicks is not None:
            return self.track_clicks
        return MODE_DEFAULTS[self.mode]["track_clicks"]

    def safe_dump(self) -> dict:
        """Settings for logging, with secrets masked."""
        data = self.model_dump()
        if data.get("telegram_bot_token"):
            data["telegram_bot_token"] = "***"
        return data


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()

"""Configuration management for authpay."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlparse

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from authpay.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings."""

    # Server
    dev: bool = Field(default=False, description="Target the local development server")
    server_url: str = Field(default="https://poc-server.dev-a3e.workers.dev", description="Deployed server origin")
    dev_server_url: str = Field(default="http://localhost:8787", description="Local development server origin")
    request_timeout_seconds: float | None = Field(default=None, description="HTTP timeout, unset for none")

    # Auth / payment material
    identity_key: str | None = Field(default=None, description="Client identity public key")
    payment_proof: str | None = Field(default=None, description="Serialized payment proof to attach to paid calls")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")

    model_config = SettingsConfigDict(
        env_prefix="AUTHPAY_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def server_origin(self) -> str:
        origin = self.dev_server_url if self.dev else self.server_url
        return origin.rstrip("/")


def _validate_origin(origin: str) -> None:
    parsed = urlparse(origin)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigurationError(f"invalid server origin: {origin!r}")


def load_settings(**overrides: Any) -> Settings:
    """Load settings from the environment, applying non-empty overrides."""

    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc
    updates = {key: value for key, value in overrides.items() if value is not None}
    if updates:
        settings = settings.model_copy(update=updates)
    _validate_origin(settings.server_origin)
    return settings

"""
sixpack_sdk.tier0_core.config
──────────────────────────────
Typed client configuration with env layering. Reads from .env → environment
variables → explicit constructor arguments (highest priority). All fields
are typed via Pydantic and frozen once built.

Minimal stack: pydantic-settings + python-dotenv
Env vars:      SIXPACK_BASE_URL, SIXPACK_TIMEOUT, SIXPACK_IP_ADDRESS,
               SIXPACK_USER_AGENT
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sixpack_sdk.tier0_core.errors import ConfigurationError

DEFAULT_BASE_URL = "http://localhost:5000"

# Seconds, per request.
DEFAULT_TIMEOUT = 0.5


class ClientConfig(BaseSettings):
    """
    Connection settings shared by every call a Session makes.
    All env vars are prefixed with SIXPACK_.
    """

    model_config = SettingsConfigDict(
        env_prefix="SIXPACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    base_url: str = Field(default=DEFAULT_BASE_URL)
    timeout: float = Field(default=DEFAULT_TIMEOUT)
    ip_address: str | None = Field(default=None)
    user_agent: str | None = Field(default=None)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {v!r}")
        return v.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout must be positive, got {v!r}")
        return v


def build_config(base: ClientConfig | None = None, **overrides: Any) -> ClientConfig:
    """
    Build a ClientConfig from an optional base config plus explicit
    overrides. ``None`` overrides are ignored so callers can pass their
    keyword arguments straight through.

    Raises ConfigurationError (not Pydantic's) on invalid values.
    """
    values = {k: v for k, v in overrides.items() if v is not None}
    if base is not None:
        if not values:
            return base
        values = {**base.model_dump(), **values}
    try:
        return ClientConfig(**values)
    except PydanticValidationError as exc:
        fields = {
            ".".join(str(loc) for loc in err["loc"]): err["msg"]
            for err in exc.errors()
        }
        raise ConfigurationError(
            user_message="Invalid Sixpack client configuration.",
            detail=f"Invalid Sixpack client configuration: {fields}",
            fields=fields,
        ) from exc


@lru_cache(maxsize=1)
def get_config() -> ClientConfig:
    """
    Return the env-derived default config. Cached after first call.
    Call _reset_config() in tests to pick up new env vars.
    """
    return build_config()


def _reset_config() -> None:
    """For tests: clear the config cache."""
    get_config.cache_clear()


__all__ = [
    "ClientConfig", "DEFAULT_BASE_URL", "DEFAULT_TIMEOUT",
    "build_config", "get_config",
]

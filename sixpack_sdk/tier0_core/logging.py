"""
sixpack_sdk.tier0_core.logging
───────────────────────────────
Structured logs for the client: levels, contextvars injection, and
redaction of experiment-subject PII (ip address, user agent) before
anything is rendered.

Library-safe: loggers are wrapped per call and never touch structlog's
global configuration. Rendered lines go to the stdlib ``sixpack_sdk``
logger, which carries only a NullHandler, so the host application's
logging setup decides where they end up.

Minimal stack: structlog (JSON or console rendering over stdlib logging)
Configure via: SIXPACK_LOG_LEVEL, SIXPACK_LOG_FORMAT=json|console
"""
from __future__ import annotations

import logging
import os
from typing import Any

import structlog

ROOT_LOGGER = "sixpack_sdk"


# ── Redaction processor ───────────────────────────────────────────────────────

_REDACT_KEYS = frozenset({
    "ip_address", "user_agent",
    "password", "secret", "token", "api_key", "authorization",
})

_REDACTED = "[REDACTED]"


def _redact_processor(
    logger: Any, method: str, event_dict: dict
) -> dict:
    """Strip subject PII and credentials from log records before output."""
    for key in list(event_dict.keys()):
        if key.lower() in _REDACT_KEYS:
            event_dict[key] = _REDACTED
    return event_dict


# ── Processor chain ───────────────────────────────────────────────────────────

def _processors() -> list[Any]:
    if os.getenv("SIXPACK_LOG_FORMAT", "json").lower() == "console":
        renderer: Any = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _redact_processor,
        renderer,
    ]


def _level() -> int:
    name = os.getenv("SIXPACK_LOG_LEVEL", "INFO").upper()
    return getattr(logging, name, logging.INFO)


def _stdlib_logger(name: str) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not any(isinstance(h, logging.NullHandler) for h in root.handlers):
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)


# ── Public API ────────────────────────────────────────────────────────────────

def get_logger(name: str | None = None) -> Any:
    """
    Return a structured logger bound to the given name.

    Usage:
        log = get_logger(__name__)
        log.info("sixpack.participate.forced", experiment="checkout-cta")
    """
    return structlog.wrap_logger(
        _stdlib_logger(name or ROOT_LOGGER),
        processors=_processors(),
        wrapper_class=structlog.make_filtering_bound_logger(_level()),
        context_class=dict,
    )


__all__ = ["get_logger"]

"""
nano64_core/log.py - Structured logging for Nano64.

structlog on top of stdlib logging. Library modules only call
get_logger(); applications (the CLI, the demos) call configure_logging()
once at startup. Library loggers wrap stdlib loggers, so without that
call they follow the stdlib defaults and stay quiet below WARNING.

Nothing secret is ever logged: no AEAD keys, no IVs, no plaintext IDs
recovered from encrypted payloads.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


# Keys that must never reach a log line, whatever the caller binds.
REDACTED_FIELDS = {
    "key",
    "aead_key",
    "iv",
    "plaintext",
    "secret",
}


def redact_secrets(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor masking sensitive fields."""
    for field in REDACTED_FIELDS.intersection(event_dict):
        event_dict[field] = "***REDACTED***"
    return event_dict


def configure_logging(
    *,
    json_output: bool = False,
    log_level: str = "WARNING",
) -> None:
    """Configure structured logging for an application using Nano64.

    Args:
        json_output: JSON lines for production, console renderer otherwise.
        log_level:   DEBUG, INFO, WARNING, ERROR or CRITICAL.
    """
    level = getattr(logging, log_level.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )
    logging.getLogger("nano64_core").setLevel(level)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_secrets,
    ]

    if json_output:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger (name is typically __name__)."""
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )

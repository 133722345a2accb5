"""Structured logging configuration using structlog.

Provides JSON logging for services and console logging for interactive use,
with automatic context binding and redaction of credential material.
"""

import sys
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any, cast

import structlog
from structlog.types import EventDict, WrappedLogger

if TYPE_CHECKING:
    from hadoopconf.config.settings import Settings

# Credential field names (O(1) lookup)
SENSITIVE_KEYS: frozenset[str] = frozenset({
    "password",
    "passwd",
    "secret",
    "secret_key",
    "token",
    "tokens",
    "identifier",
    "delegation_token",
    "api_key",
    "auth",
    "authorization",
    "credential",
    "credentials",
    "private_key",
    "access_key",
    "access_token",
    "refresh_token",
    "bearer",
})

# Substrings marking Hadoop property keys that carry secrets,
# e.g. "fs.s3a.secret.key" or "ssl.server.keystore.password"
SENSITIVE_MARKERS: tuple[str, ...] = ("password", "secret")


class CredentialRedactor:
    """Processor that redacts credential material from log events.

    Uses two-tier approach:
    1. Key-name lookup via frozenset (O(1)) for known credential fields
    2. Substring markers for Hadoop property names that hold secrets
    """

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """Redact credentials from event dictionary."""
        return cast(EventDict, self._redact_dict(event_dict))

    def is_sensitive(self, key: str) -> bool:
        key_lower = key.lower()
        if key_lower in SENSITIVE_KEYS:
            return True
        return any(marker in key_lower for marker in SENSITIVE_MARKERS)

    def _redact_dict(self, data: MutableMapping[str, Any]) -> dict[str, Any]:
        """Recursively redact credentials from a dictionary."""
        result: dict[str, Any] = {}
        for key, value in data.items():
            if self.is_sensitive(str(key)):
                result[key] = "[REDACTED]"
            elif isinstance(value, dict):
                result[key] = self._redact_dict(value)
            elif isinstance(value, list):
                result[key] = self._redact_list(value)
            else:
                result[key] = value

        return result

    def _redact_list(self, items: list[Any]) -> list[Any]:
        result: list[Any] = []
        for item in items:
            if isinstance(item, dict):
                result.append(self._redact_dict(item))
            elif isinstance(item, list):
                result.append(self._redact_list(item))
            else:
                result.append(item)
        return result


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    redact_credentials: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        format: Output format - "json" for services, "console" for terminals
        redact_credentials: Whether to redact credential fields from logs
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if redact_credentials:
        processors.append(CredentialRedactor())

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    level_map = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    level_num = level_map.get(level.upper(), 20)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )


def setup_logging_from_settings(settings: "Settings") -> None:
    """Configure logging from the observability section of settings."""
    logging_config = settings.observability.logging
    setup_logging(
        level=logging_config.level,
        format=logging_config.format,
        redact_credentials=logging_config.redact_credentials,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        A bound structlog logger
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))

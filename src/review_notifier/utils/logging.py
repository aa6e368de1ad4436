"""Structured logging configuration with secret sanitization.

This module configures structlog for the notifier:
- Configurable log levels and output formats (JSON/console/GitHub Actions)
- Automatic secret sanitization in log output
- Context injection for correlation

The GitHub format renders warnings, errors and notices as workflow
commands so they appear as annotations on the Actions run.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from enum import StrEnum
from typing import Any, cast

import structlog
from structlog.typing import WrappedLogger

from review_notifier.utils.security import SecretRedactor


class LogFormat(StrEnum):
    """Log output format options."""

    JSON = "json"
    CONSOLE = "console"
    GITHUB = "github"


class LogLevel(StrEnum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Global redactor instance for log sanitization
_redactor: SecretRedactor | None = None


def _get_redactor() -> SecretRedactor:
    """Get or create the global secret redactor."""
    global _redactor
    if _redactor is None:
        _redactor = SecretRedactor(placeholder="[REDACTED]")
    return _redactor


def sanitize_log_value(value: Any) -> Any:
    """Recursively sanitize secrets from log values.

    Args:
        value: Value to sanitize (can be nested dict/list/str)

    Returns:
        Sanitized value with secrets redacted
    """
    redactor = _get_redactor()

    if isinstance(value, str):
        return redactor.redact(value)
    elif isinstance(value, dict):
        return {k: sanitize_log_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return type(value)(sanitize_log_value(v) for v in value)
    else:
        return value


def secret_sanitizer(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor to sanitize secrets from log entries."""
    result = sanitize_log_value(event_dict)
    return cast(MutableMapping[str, Any], result)


def add_context_processor(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Add the service name and version to all log entries."""
    event_dict["service"] = "review-notifier"

    try:
        from review_notifier._version import __version__

        event_dict["version"] = __version__
    except (ImportError, RuntimeError):
        pass

    return event_dict


def _escape_command_data(text: str) -> str:
    """Escape text for a workflow command payload."""
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GitHubActionsRenderer:
    """Render log entries as GitHub Actions workflow commands.

    Warnings map to ``::warning::``, errors to ``::error::`` and entries
    logged with ``notice=True`` to ``::notice::``. Anything else is
    rendered as a plain ``event key=value`` line.
    """

    COMMANDS = {
        "warning": "warning",
        "error": "error",
        "critical": "error",
        "exception": "error",
    }

    # Keys added by processors, dropped from the annotation text
    _SKIP_KEYS = frozenset(
        {"event", "level", "timestamp", "logger", "service", "version", "notice"}
    )

    def __call__(
        self,
        logger: WrappedLogger,
        method_name: str,
        event_dict: MutableMapping[str, Any],
    ) -> str:
        event = str(event_dict.get("event", ""))
        level = str(event_dict.get("level", method_name)).lower()
        fields = " ".join(
            f"{key}={value}"
            for key, value in event_dict.items()
            if key not in self._SKIP_KEYS and key != "exception"
        )
        line = f"{event} {fields}".strip()

        exception = event_dict.get("exception")
        if exception:
            line = f"{line}\n{exception}"

        command = self.COMMANDS.get(level)
        if command is None and event_dict.get("notice"):
            command = "notice"
        if command is None:
            return line
        return f"::{command}::{_escape_command_data(line)}"


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    log_format: LogFormat | str = LogFormat.GITHUB,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format (json, console or github)

    Example:
        # Inside a workflow run
        configure_logging(level="INFO", log_format="github")

        # Local debugging
        configure_logging(level="DEBUG", log_format="console")
    """
    if isinstance(level, str):
        level = LogLevel(level.upper())
    if isinstance(log_format, str):
        log_format = LogFormat(log_format.lower())

    numeric_level = getattr(logging, level.value)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_context_processor,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        secret_sanitizer,  # Always sanitize secrets
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == LogFormat.JSON:
        shared_processors.append(structlog.processors.JSONRenderer())
    elif log_format == LogFormat.GITHUB:
        shared_processors.append(GitHubActionsRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True, exception_formatter=structlog.dev.plain_traceback
            )
        )

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Logging is reconfigured once the config file is read
        cache_logger_on_first_use=False,
    )

    # Workflow commands are only recognized on stdout
    stream = sys.stdout if log_format == LogFormat.GITHUB else sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setLevel(numeric_level)

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=[handler],
        force=True,
    )


def bind_context(**kwargs: Any) -> None:
    """Bind contextual variables for all subsequent log calls.

    Example:
        bind_context(pr_url="https://github.com/owner/repo/pull/1")
        log.info("reviewer_mapped")  # Includes pr_url
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound contextual variables."""
    structlog.contextvars.clear_contextvars()

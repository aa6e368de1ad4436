"""Utility functions and helpers.

- security: Secret redaction, URL origin checks
- logging: Structured logging with secret sanitization
"""

from review_notifier.utils.logging import (
    GitHubActionsRenderer,
    LogFormat,
    LogLevel,
    bind_context,
    clear_context,
    configure_logging,
)
from review_notifier.utils.security import (
    RedactionError,
    SecretRedactor,
    SecurityError,
    is_same_origin,
)

__all__ = [
    # Logging
    "GitHubActionsRenderer",
    "LogFormat",
    "LogLevel",
    "bind_context",
    "clear_context",
    "configure_logging",
    # Security
    "RedactionError",
    "SecretRedactor",
    "SecurityError",
    "is_same_origin",
]

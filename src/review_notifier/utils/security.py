"""Security utilities for secret redaction and URL validation.

Redaction is fail-closed: if a pattern fails to execute, an exception is
raised instead of returning text that may still hold a token.
"""

from __future__ import annotations

import re
from urllib.parse import urlparse


class SecurityError(Exception):
    """Base exception for security-related errors."""


class RedactionError(SecurityError):
    """Raised when secret redaction fails."""


class SecretRedactor:
    """Detects and redacts secrets from text.

    Usage:
        redactor = SecretRedactor()
        safe_text = redactor.redact(potentially_sensitive_text)

    Attributes:
        placeholder: The string to replace secrets with (default: "[REDACTED]").
    """

    # Only the credentials this tool handles, plus generic assignments
    DEFAULT_PATTERNS: tuple[tuple[str, str], ...] = (
        (
            r"(?i)(api[_-]?key|secret|token|password|credential)\s*[=:]\s*[\"']?[\w-]{16,}",
            "Generic secret",
        ),
        # Slack
        (r"xox[baprs]-[\w-]+", "Slack token"),
        (r"https://hooks\.slack\.com/services/[\w/]+", "Slack webhook URL"),
        # GitHub
        (r"ghp_[a-zA-Z0-9]{36}", "GitHub PAT"),
        (r"github_pat_[a-zA-Z0-9_]{22,}", "GitHub fine-grained PAT"),
        (r"gh[osur]_[a-zA-Z0-9]{36}", "GitHub app or OAuth token"),
    )

    def __init__(self, placeholder: str = "[REDACTED]") -> None:
        self.placeholder = placeholder
        self._patterns = [re.compile(pattern) for pattern, _name in self.DEFAULT_PATTERNS]

    def redact(self, text: str) -> str:
        """Redact all secrets from the given text.

        Args:
            text: The text to scan and redact secrets from.

        Returns:
            The text with all detected secrets replaced with placeholder.

        Raises:
            RedactionError: If redaction fails for any reason.
        """
        if not text:
            return text

        try:
            result = text
            for pattern in self._patterns:
                result = pattern.sub(self.placeholder, result)
            return result
        except Exception as e:
            raise RedactionError(f"Redaction failed: {e}") from e


def is_same_origin(url: str, base_url: str) -> bool:
    """Check that a URL points at the same scheme, host and port as a base URL.

    Used before attaching credentials to a URL taken from an event payload.

    Args:
        url: The URL to check.
        base_url: The trusted base URL.

    Returns:
        True if both URLs share scheme, host and port.
    """
    try:
        parsed = urlparse(url)
        base = urlparse(base_url)
        return (
            parsed.scheme == base.scheme
            and parsed.hostname is not None
            and parsed.hostname == base.hostname
            and parsed.port == base.port
        )
    except ValueError:
        return False

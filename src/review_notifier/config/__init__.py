"""Configuration loading and validation."""

from .loader import load_action_config, load_config
from .schema import (
    GitHubConfig,
    LoggingConfig,
    MessageConfig,
    NotifierConfig,
    SlackConfig,
)

__all__ = [
    # Loader
    "load_action_config",
    "load_config",
    # Root config
    "NotifierConfig",
    # Sections
    "GitHubConfig",
    "LoggingConfig",
    "MessageConfig",
    "SlackConfig",
]

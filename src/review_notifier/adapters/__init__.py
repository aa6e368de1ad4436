"""Concrete implementations of provider interfaces."""

from .chat.slack import SlackNotifier
from .vcs.github import GitHubProfileDirectory

__all__ = [
    "GitHubProfileDirectory",
    "SlackNotifier",
]

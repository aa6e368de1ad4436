"""Data models for chat mentions and notification outcomes."""

from dataclasses import dataclass
from enum import Enum


class MentionKind(Enum):
    """How a mention token was obtained."""

    MAPPED = "mapped"  # exact identity map entry
    GUESSED = "guessed"  # local-part of a public email, may not exist in Slack
    TEAM = "team"  # team name rendered as emphasized text


@dataclass(frozen=True)
class Mention:
    """A resolved token naming who should review."""

    token: str
    kind: MentionKind
    target: str


class NotificationOutcome(Enum):
    """Terminal state of a notification run."""

    DRAFT_SKIPPED = "draft_skipped"
    TEAM_NOTIFIED = "team_notified"
    REVIEWER_NOTIFIED = "reviewer_notified"
    ABSTAINED = "abstained"
    DRY_RUN = "dry_run"

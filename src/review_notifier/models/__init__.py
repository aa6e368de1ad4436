"""Data models and transfer objects."""

from .event import Label, PullRequest, RequestedReviewer, RequestedTeam, ReviewEvent
from .message import Mention, MentionKind, NotificationOutcome

__all__ = [
    # Event models
    "Label",
    "PullRequest",
    "RequestedReviewer",
    "RequestedTeam",
    "ReviewEvent",
    # Message models
    "Mention",
    "MentionKind",
    "NotificationOutcome",
]

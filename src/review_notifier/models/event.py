"""Data models for pull-request review request events."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Label:
    """A label attached to a pull request."""

    name: str


@dataclass(frozen=True)
class PullRequest:
    """The pull request a review was requested on."""

    title: str
    url: str
    labels: tuple[Label, ...]
    is_draft: bool = False


@dataclass(frozen=True)
class RequestedReviewer:
    """An individual user asked to review."""

    login: str
    profile_url: str  # API resource URL for the user


@dataclass(frozen=True)
class RequestedTeam:
    """A team asked to review."""

    name: str | None


@dataclass(frozen=True)
class ReviewEvent:
    """A review_requested event, reduced to what the notifier needs."""

    pull_request: PullRequest
    sender_login: str
    repository_name: str  # owner/repo
    requested_reviewer: RequestedReviewer | None = None
    requested_team: RequestedTeam | None = None

"""GitHub adapter: event payload parsing and profile lookups.

The event payload is the JSON document GitHub Actions writes to
``$GITHUB_EVENT_PATH`` for ``pull_request`` events. Profile lookups use
the REST API with the workflow token.

Security features:
- The token is only attached to URLs on the configured API host
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import structlog

from ...config.schema import GitHubConfig
from ...models.event import Label, PullRequest, RequestedReviewer, RequestedTeam, ReviewEvent
from ...utils.security import SecurityError, is_same_origin

log = structlog.get_logger()


class GitHubAdapterError(Exception):
    """Base exception for GitHub adapter errors."""


class EventPayloadError(GitHubAdapterError):
    """Raised when the event payload is missing required fields."""


def _parse_labels(labels_data: Any) -> tuple[Label, ...]:
    """Parse the label list, keeping payload order."""
    if not isinstance(labels_data, list):
        return ()
    return tuple(
        Label(name=label["name"] if isinstance(label, dict) else str(label))
        for label in labels_data
    )


def parse_review_event(payload: dict[str, Any]) -> ReviewEvent:
    """Parse a pull_request event payload into a ReviewEvent.

    Args:
        payload: Decoded event JSON.

    Returns:
        ReviewEvent instance.

    Raises:
        EventPayloadError: If the pull request or repository is missing.
    """
    try:
        pr_data = payload["pull_request"]
        pull_request = PullRequest(
            title=pr_data["title"],
            url=pr_data["html_url"],
            labels=_parse_labels(pr_data.get("labels")),
            is_draft=bool(pr_data.get("draft", False)),
        )
        repository_name = payload["repository"]["full_name"]

        reviewer_data = payload.get("requested_reviewer")
        reviewer = (
            RequestedReviewer(login=reviewer_data["login"], profile_url=reviewer_data["url"])
            if reviewer_data
            else None
        )
    except (KeyError, TypeError) as e:
        raise EventPayloadError(f"Malformed review event payload: missing {e}") from e

    team_data = payload.get("requested_team")
    team = RequestedTeam(name=team_data.get("name")) if isinstance(team_data, dict) else None

    sender_data = payload.get("sender")
    sender_login = (
        sender_data.get("login", "unknown") if isinstance(sender_data, dict) else "unknown"
    )

    return ReviewEvent(
        pull_request=pull_request,
        sender_login=sender_login,
        repository_name=repository_name,
        requested_reviewer=reviewer,
        requested_team=team,
    )


def load_review_event(path: Path) -> ReviewEvent:
    """Read and parse the event payload file.

    Args:
        path: Path to the event JSON file.

    Returns:
        ReviewEvent instance.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        EventPayloadError: If the file is not a valid event payload.
    """
    with path.open(encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise EventPayloadError(f"Event payload is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise EventPayloadError("Event payload must be a JSON object")

    return parse_review_event(payload)


class GitHubProfileDirectory:
    """Profile directory implementing the ProfileDirectory protocol.

    Example:
        directory = GitHubProfileDirectory(GitHubConfig(token="ghp_..."))
        email = await directory.get_public_email("https://api.github.com/users/octocat")
    """

    def __init__(
        self,
        config: GitHubConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the profile directory.

        Args:
            config: GitHub-specific configuration.
            transport: Optional httpx transport, used by tests.
        """
        self._config = config
        self._transport = transport

    async def get_public_email(self, profile_url: str) -> str | None:
        """Fetch the public email of a user.

        Args:
            profile_url: User resource URL from the event payload.

        Returns:
            The public email, or None when the user has none.

        Raises:
            SecurityError: If the URL is not on the configured API host.
            httpx.HTTPError: If the request fails.
        """
        if not is_same_origin(profile_url, self._config.api_url):
            raise SecurityError(f"Profile URL {profile_url} is not on {self._config.api_url}")

        headers = {
            "Authorization": f"token {self._config.token}",
            "Accept": "application/vnd.github+json",
        }
        async with httpx.AsyncClient(headers=headers, transport=self._transport) as client:
            try:
                response = await client.get(profile_url)
                response.raise_for_status()
            except httpx.HTTPError as e:
                log.debug("profile_lookup_failed", url=profile_url, error=str(e))
                raise

        data: dict[str, Any] = response.json()
        email = data.get("email")
        return email if isinstance(email, str) and email else None

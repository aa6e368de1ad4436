"""Mention resolution for review requests.

Resolution order for an individual reviewer:
1. Identity map entry (exact Slack user ID)
2. Local-part of the reviewer's public email (best-effort guess)
3. Nothing: the caller abstains from notifying

A team request is rendered as the emphasized team name without any lookup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from review_notifier.models.message import Mention, MentionKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from review_notifier.interfaces.directory import ProfileDirectory
    from review_notifier.models.event import ReviewEvent

log = structlog.get_logger()

UNKNOWN_TEAM = "unknown-team"


def user_tag(user_id: str) -> str:
    """Render a Slack user mention."""
    return f"<@{user_id}>"


def team_mention(event: ReviewEvent) -> Mention:
    """Build the mention for a team review request."""
    team = event.requested_team
    name = (team.name if team else None) or UNKNOWN_TEAM
    return Mention(token=f"*{name}*", kind=MentionKind.TEAM, target=name)


class MentionResolver:
    """Resolves who to mention for a review request.

    Example:
        resolver = MentionResolver(identity_map, directory)
        mention = await resolver.resolve(event)
        if mention is None:
            ...  # abstain
    """

    def __init__(
        self,
        identity_map: Mapping[str, str],
        directory: ProfileDirectory,
    ) -> None:
        """Initialize the resolver.

        Args:
            identity_map: GitHub login -> Slack user ID
            directory: Profile directory for the email fallback
        """
        self._identity_map = identity_map
        self._directory = directory

    async def resolve(self, event: ReviewEvent) -> Mention | None:
        """Resolve the mention for an event.

        Args:
            event: The review request event

        Returns:
            The mention, or None when an individual reviewer cannot be
            resolved and the notification should be skipped.
        """
        reviewer = event.requested_reviewer
        if reviewer is None:
            return team_mention(event)

        login = reviewer.login

        # Empty values would render a broken "<@>" tag
        slack_id = self._identity_map.get(login)
        if slack_id:
            mention = Mention(token=user_tag(slack_id), kind=MentionKind.MAPPED, target=login)
            log.info("reviewer_mapped", login=login, mention=mention.token)
            return mention

        email = await self._directory.get_public_email(reviewer.profile_url)
        local_part = email.split("@", 1)[0] if email else ""
        if local_part:
            mention = Mention(
                token=user_tag(local_part),
                kind=MentionKind.GUESSED,
                target=local_part,
            )
            log.warning(
                "reviewer_mention_guessed",
                login=login,
                mention=mention.token,
                reason="no identity map entry; may fail if Slack handle != email local-part",
            )
            return mention

        log.warning(
            "reviewer_unresolved",
            login=login,
            reason="no identity map entry or public email",
        )
        return None

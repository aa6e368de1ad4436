"""Tests for mention resolution."""

from __future__ import annotations

from dataclasses import replace
from unittest.mock import AsyncMock, patch

import pytest

from review_notifier.core.mention_resolver import (
    UNKNOWN_TEAM,
    MentionResolver,
    team_mention,
    user_tag,
)
from review_notifier.models.event import RequestedTeam, ReviewEvent
from review_notifier.models.message import MentionKind


@pytest.fixture
def directory() -> AsyncMock:
    """Create a mock profile directory with no public email."""
    mock = AsyncMock()
    mock.get_public_email = AsyncMock(return_value=None)
    return mock


class TestTeamMention:
    """Test mentions for team review requests."""

    def test_team_name_emphasized(self, team_event: ReviewEvent) -> None:
        """Test that the team name is rendered in bold."""
        mention = team_mention(team_event)
        assert mention.token == "*frontend-core*"
        assert mention.kind is MentionKind.TEAM

    def test_missing_team_name(self, team_event: ReviewEvent) -> None:
        """Test the placeholder when the team has no name."""
        event = replace(team_event, requested_team=RequestedTeam(name=None))
        assert team_mention(event).token == f"*{UNKNOWN_TEAM}*"

    def test_no_team_at_all(self, team_event: ReviewEvent) -> None:
        """Test the placeholder when neither reviewer nor team is present."""
        event = replace(team_event, requested_team=None)
        assert team_mention(event).token == "*unknown-team*"

    async def test_resolver_skips_lookups_for_teams(
        self, team_event: ReviewEvent, directory: AsyncMock
    ) -> None:
        """Test that team requests never consult the map or directory."""
        resolver = MentionResolver({"frontend-core": "U999"}, directory)

        mention = await resolver.resolve(team_event)

        assert mention is not None
        assert mention.token == "*frontend-core*"
        directory.get_public_email.assert_not_called()


class TestIndividualMention:
    """Test mentions for individual reviewers."""

    async def test_mapped_login(self, review_event: ReviewEvent, directory: AsyncMock) -> None:
        """Test that a mapped login produces a direct tag without lookups."""
        resolver = MentionResolver({"bob": "U0BOB"}, directory)

        mention = await resolver.resolve(review_event)

        assert mention is not None
        assert mention.token == "<@U0BOB>"
        assert mention.kind is MentionKind.MAPPED
        directory.get_public_email.assert_not_called()

    async def test_email_fallback(self, review_event: ReviewEvent, directory: AsyncMock) -> None:
        """Test that the email local-part is used when the login is unmapped."""
        directory.get_public_email.return_value = "user@example.com"
        resolver = MentionResolver({}, directory)

        with patch("review_notifier.core.mention_resolver.log") as mock_log:
            mention = await resolver.resolve(review_event)

        assert mention is not None
        assert mention.token == "<@user>"
        assert mention.target == "user"
        assert mention.kind is MentionKind.GUESSED
        directory.get_public_email.assert_awaited_once_with("https://api.github.com/users/bob")
        assert mock_log.warning.call_args[0][0] == "reviewer_mention_guessed"

    async def test_local_part_before_first_at(
        self, review_event: ReviewEvent, directory: AsyncMock
    ) -> None:
        """Test that only the text before the first @ is used."""
        directory.get_public_email.return_value = "first.last@mail@example.com"
        resolver = MentionResolver({}, directory)

        mention = await resolver.resolve(review_event)

        assert mention is not None
        assert mention.target == "first.last"

    async def test_unresolvable_returns_none(
        self, review_event: ReviewEvent, directory: AsyncMock
    ) -> None:
        """Test that no mapping and no email yields None with a warning."""
        resolver = MentionResolver({"someone-else": "U1"}, directory)

        with patch("review_notifier.core.mention_resolver.log") as mock_log:
            mention = await resolver.resolve(review_event)

        assert mention is None
        assert mock_log.warning.call_args[0][0] == "reviewer_unresolved"

    async def test_empty_mapped_value_falls_through(
        self, review_event: ReviewEvent, directory: AsyncMock
    ) -> None:
        """Test that an empty Slack ID is treated as unmapped."""
        directory.get_public_email.return_value = "bob@example.com"
        resolver = MentionResolver({"bob": ""}, directory)

        mention = await resolver.resolve(review_event)

        assert mention is not None
        assert mention.token == "<@bob>"
        assert mention.kind is MentionKind.GUESSED

    async def test_empty_local_part_returns_none(
        self, review_event: ReviewEvent, directory: AsyncMock
    ) -> None:
        """Test that an email without a local-part is not used."""
        directory.get_public_email.return_value = "@example.com"
        resolver = MentionResolver({}, directory)

        assert await resolver.resolve(review_event) is None

    async def test_directory_errors_propagate(
        self, review_event: ReviewEvent, directory: AsyncMock
    ) -> None:
        """Test that profile lookup failures are not swallowed."""
        directory.get_public_email.side_effect = RuntimeError("boom")
        resolver = MentionResolver({}, directory)

        with pytest.raises(RuntimeError, match="boom"):
            await resolver.resolve(review_event)


def test_user_tag() -> None:
    """Test Slack user tag rendering."""
    assert user_tag("U123") == "<@U123>"

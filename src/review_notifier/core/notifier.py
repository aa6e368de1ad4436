"""Review request notification pipeline.

This module implements the ReviewNotifier class that runs one
notification end to end:
1. Skip draft pull requests when configured
2. Resolve who to mention (team, mapped user or guessed user)
3. Compose the Slack blocks
4. Post them to the configured channel

Every outcome other than an exception is a success; errors propagate to
the entry point, which reports them once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from review_notifier.core.identity_map import load_identity_map
from review_notifier.core.mention_resolver import MentionResolver, team_mention
from review_notifier.core.message_composer import MessageComposer
from review_notifier.models.message import MentionKind, NotificationOutcome
from review_notifier.utils.logging import bind_context

if TYPE_CHECKING:
    from review_notifier.config.schema import NotifierConfig
    from review_notifier.interfaces.chat import ChatProvider
    from review_notifier.interfaces.directory import ProfileDirectory
    from review_notifier.models.event import ReviewEvent
    from review_notifier.models.message import Mention

log = structlog.get_logger()


class ReviewNotifier:
    """Sends a Slack notice for a review request.

    The destination channel always comes from configuration, never from
    the event.

    Example:
        notifier = ReviewNotifier(config, chat, directory)
        outcome = await notifier.notify(event)
    """

    def __init__(
        self,
        config: NotifierConfig,
        chat: ChatProvider,
        directory: ProfileDirectory,
        composer: MessageComposer | None = None,
        dry_run: bool = False,
    ) -> None:
        """Initialize the notifier.

        Args:
            config: Notifier configuration
            chat: Chat provider used for delivery
            directory: Profile directory for the email fallback
            composer: Message composer. If None, built from config.
            dry_run: Compose and log the message without posting it
        """
        self._config = config
        self._chat = chat
        self._directory = directory
        self._composer = composer or MessageComposer(
            urgency_label=config.message.urgency_label,
            randomize_tone=config.message.randomize_tone,
        )
        self._dry_run = dry_run

    @property
    def channel(self) -> str:
        """Destination channel."""
        return self._config.slack.channel

    async def notify(self, event: ReviewEvent) -> NotificationOutcome:
        """Run the notification pipeline for one event.

        Args:
            event: The review request event

        Returns:
            NotificationOutcome describing the terminal state

        Raises:
            DeliveryError: If Slack rejects the message
        """
        pr = event.pull_request
        bind_context(pr_url=pr.url)

        if self._config.skip_draft and pr.is_draft:
            log.info("draft_skipped", title=pr.title, notice=True)
            return NotificationOutcome.DRAFT_SKIPPED

        if event.requested_reviewer is None:
            mention = team_mention(event)
        else:
            log.info(
                "review_requested",
                sender=event.sender_login,
                reviewer=event.requested_reviewer.login,
                notice=True,
            )
            identity_map = load_identity_map(self._config.identity_map_path)
            resolver = MentionResolver(identity_map, self._directory)
            resolved = await resolver.resolve(event)
            if resolved is None:
                log.info("notification_abstained", reviewer=event.requested_reviewer.login)
                return NotificationOutcome.ABSTAINED
            mention = resolved

        blocks = self._composer.compose(
            repo_name=event.repository_name,
            labels=pr.labels,
            title=pr.title,
            url=pr.url,
            mention=mention.token,
        )

        if self._dry_run:
            log.info("dry_run_message", channel=self.channel, blocks=blocks, notice=True)
            return NotificationOutcome.DRY_RUN

        await self._send(blocks)
        return self._report_sent(mention)

    async def _send(self, blocks: list[dict[str, Any]]) -> None:
        await self._chat.post_message(
            channel=self.channel,
            text=self._config.slack.fallback_text,
            blocks=blocks,
        )

    def _report_sent(self, mention: Mention) -> NotificationOutcome:
        if mention.kind is MentionKind.TEAM:
            log.info("team_notice_sent", team=mention.target, channel=self.channel, notice=True)
            return NotificationOutcome.TEAM_NOTIFIED

        log.info(
            "review_notice_sent",
            mention=mention.token,
            guessed=mention.kind is MentionKind.GUESSED,
            channel=self.channel,
            notice=True,
        )
        return NotificationOutcome.REVIEWER_NOTIFIED


def create_notifier(config: NotifierConfig, dry_run: bool = False) -> ReviewNotifier:
    """Create a notifier with the Slack and GitHub adapters.

    Args:
        config: Notifier configuration
        dry_run: Compose without posting

    Returns:
        Configured ReviewNotifier
    """
    # Import here to avoid loading client libraries in tests of the core
    from review_notifier.adapters.chat.slack import SlackNotifier
    from review_notifier.adapters.vcs.github import GitHubProfileDirectory

    return ReviewNotifier(
        config,
        chat=SlackNotifier(config.slack),
        directory=GitHubProfileDirectory(config.github),
        dry_run=dry_run,
    )

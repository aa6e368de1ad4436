"""Slack chat adapter using slack_sdk.

This module implements the ChatProvider protocol for Slack with the
async Web API client. A single ``chat.postMessage`` call is made per
notification; the response's ``ok`` flag decides success.
"""

from __future__ import annotations

from typing import Any

import structlog
from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from ...config.schema import SlackConfig

log = structlog.get_logger()


class SlackAdapterError(Exception):
    """Base exception for Slack adapter errors."""


class DeliveryError(SlackAdapterError):
    """Raised when Slack rejects a message.

    Attributes:
        code: Error code reported by Slack (e.g. ``channel_not_found``).
        channel: The destination channel.
    """

    def __init__(self, code: str, channel: str) -> None:
        super().__init__(f"Slack rejected message for channel {channel}: {code}")
        self.code = code
        self.channel = channel


class SlackNotifier:
    """Slack chat adapter implementing the ChatProvider protocol.

    Example:
        config = SlackConfig(bot_token="xoxb-...", channel="#reviews")
        notifier = SlackNotifier(config)

        ts = await notifier.post_message(config.channel, "Review request", blocks)
    """

    def __init__(self, config: SlackConfig, client: AsyncWebClient | None = None) -> None:
        """Initialize the Slack adapter.

        Args:
            config: Slack-specific configuration.
            client: Web API client. If None, one is created from the bot token.
        """
        self._config = config
        self._client = client or AsyncWebClient(token=config.bot_token)

    async def post_message(
        self,
        channel: str,
        text: str,
        blocks: list[dict[str, Any]],
    ) -> str:
        """Post a message with blocks to a channel.

        Args:
            channel: Destination channel name or ID.
            text: Plain text fallback shown in notifications.
            blocks: Slack Block Kit blocks.

        Returns:
            Message ID (ts) of the posted message.

        Raises:
            DeliveryError: If Slack answers with ``ok: false``.
        """
        try:
            result = await self._client.chat_postMessage(
                channel=channel,
                text=text,
                blocks=blocks,
            )
        except SlackApiError as e:
            code = str(e.response.get("error") or "unknown_error")
            log.debug("slack_delivery_rejected", channel=channel, error=code)
            raise DeliveryError(code, channel) from e

        if not result.get("ok"):
            code = str(result.get("error") or "unknown_error")
            log.debug("slack_delivery_rejected", channel=channel, error=code)
            raise DeliveryError(code, channel)

        message_ts = str(result.get("ts", ""))
        log.debug("message_sent", channel=channel, message_ts=message_ts)
        return message_ts

"""Abstract interface for chat platform integrations."""

from typing import Any, Protocol


class ChatProvider(Protocol):
    """Abstract interface for chat platform integrations.

    This protocol defines the contract that chat delivery adapters
    must implement.
    """

    async def post_message(
        self,
        channel: str,
        text: str,
        blocks: list[dict[str, Any]],
    ) -> str:
        """
        Post a rich message to a channel.

        Args:
            channel: Destination channel name or ID
            text: Plain text fallback for notifications and clients
                without rich formatting
            blocks: Rich content blocks (platform-specific)

        Returns:
            Message ID of the posted message

        Raises:
            DeliveryError: If the platform rejects the message
        """
        ...

"""Abstract interface for user profile lookups."""

from typing import Protocol


class ProfileDirectory(Protocol):
    """Looks up public contact details of code-hosting users."""

    async def get_public_email(self, profile_url: str) -> str | None:
        """
        Fetch the public email address of a user.

        Args:
            profile_url: API resource URL of the user profile

        Returns:
            The public email, or None if the user does not publish one

        Raises:
            SecurityError: If the URL is not on the configured API host
        """
        ...

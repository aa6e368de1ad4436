"""Slack Block Kit message composition for review requests.

Block layout:
1. Header section with the mention and a call to review
2. Repository name and pull request link
3. Label buttons (only when the pull request has labels)
4. Urgency callout (only when the urgency label is present)
5. Divider and context footer

The header, callout and footer wording comes from tone packs. With
``randomize_tone`` off the first phrasing is always used; with it on a
phrasing is picked uniformly at random. Block structure never depends
on the choice.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Any

from review_notifier.models.event import Label

HEADER_TONES: tuple[str, ...] = (
    ":mailbox_with_mail: {mention} a new review request has arrived! "
    "Please join the review as soon as you can:",
    ":eyes: {mention} your eyes are needed! A pull request is waiting for your review:",
    ":wave: {mention} a teammate is asking for your review. Take a look when you're free:",
)

URGENT_TONES: tuple[str, ...] = (
    "*:rotating_light: `{label}` PR, this one is very urgent! "
    "Please review it right now! :rotating_light:*",
    "*:fire: `{label}` PR needs a review today. Please drop what you can and take a look! :fire:*",
)

FOOTER_TONES: tuple[str, ...] = (
    ":muscle: Code review improves quality, catches bugs early and spreads knowledge "
    "across the team.\n:pray: Thanks for taking part!",
    ":seedling: Every review makes the codebase a little healthier. Thank you!",
    ":handshake: Small, quick reviews keep everyone moving. Thanks for helping out!",
)

# Order matters: "&" first so produced entities are not escaped again
_ESCAPES = (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"))


def escape_text(text: str) -> str:
    """Escape text for Slack mrkdwn so it cannot inject links or mentions."""
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def _section(text: str) -> dict[str, Any]:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


class MessageComposer:
    """Builds review request messages.

    Example:
        composer = MessageComposer(urgency_label="D-0")
        blocks = composer.compose(
            repo_name="owner/repo",
            labels=event.pull_request.labels,
            title=event.pull_request.title,
            url=event.pull_request.url,
            mention=mention.token,
        )
    """

    def __init__(
        self,
        urgency_label: str = "D-0",
        randomize_tone: bool = False,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the composer.

        Args:
            urgency_label: Label name that marks a pull request as urgent
            randomize_tone: Pick phrasings at random instead of the first one
            rng: Random source, injectable for tests
        """
        self.urgency_label = urgency_label
        self._randomize = randomize_tone
        self._rng = rng or random.Random()

    def _pick(self, tones: Sequence[str]) -> str:
        if self._randomize:
            return self._rng.choice(tones)
        return tones[0]

    def compose(
        self,
        repo_name: str,
        labels: Sequence[Label],
        title: str,
        url: str,
        mention: str,
    ) -> list[dict[str, Any]]:
        """Compose the message blocks.

        Args:
            repo_name: Repository full name (owner/repo)
            labels: Pull request labels, in payload order
            title: Pull request title, escaped before embedding
            url: Pull request URL
            mention: Resolved mention token

        Returns:
            Slack Block Kit blocks.
        """
        blocks: list[dict[str, Any]] = [
            _section(self._pick(HEADER_TONES).format(mention=mention)),
            _section(f"*{repo_name}:*\n<{url}|{escape_text(title)}>"),
        ]

        if labels:
            blocks.append(
                {
                    "type": "actions",
                    "elements": [
                        self._label_button(label, index) for index, label in enumerate(labels)
                    ],
                }
            )

        if any(label.name == self.urgency_label for label in labels):
            blocks.append(_section(self._pick(URGENT_TONES).format(label=self.urgency_label)))

        blocks.append({"type": "divider"})
        blocks.append(
            {
                "type": "context",
                "elements": [{"type": "mrkdwn", "text": self._pick(FOOTER_TONES)}],
            }
        )
        return blocks

    def _label_button(self, label: Label, index: int) -> dict[str, Any]:
        """Render one label as a button; the urgency label is styled as danger."""
        button: dict[str, Any] = {
            "type": "button",
            "action_id": f"label-{index}",
            "text": {"type": "plain_text", "text": label.name},
        }
        if label.name == self.urgency_label:
            button["style"] = "danger"
        return button

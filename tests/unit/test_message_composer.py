"""Tests for Slack message composition."""

from __future__ import annotations

import random
from typing import Any

import pytest

from review_notifier.core.message_composer import (
    FOOTER_TONES,
    HEADER_TONES,
    MessageComposer,
    escape_text,
)
from review_notifier.models.event import Label


def _compose(composer: MessageComposer, labels: tuple[Label, ...], title: str = "Fix login"):
    return composer.compose(
        repo_name="acme/storefront",
        labels=labels,
        title=title,
        url="https://github.com/acme/storefront/pull/42",
        mention="<@U0BOB>",
    )


def _types(blocks: list[dict[str, Any]]) -> list[str]:
    return [block["type"] for block in blocks]


def _urgency_blocks(blocks: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [b for b in blocks if b["type"] == "section" and "`D-0`" in b["text"]["text"]]


class TestEscapeText:
    """Test mrkdwn escaping."""

    def test_script_tag_escaped(self) -> None:
        """Test that angle brackets become entities."""
        assert escape_text("<script>") == "&lt;script&gt;"

    def test_ampersand_escaped_once(self) -> None:
        """Test that ampersands are escaped before angle brackets."""
        assert escape_text("a & <b>") == "a &amp; &lt;b&gt;"

    def test_plain_text_unchanged(self) -> None:
        """Test that text without special characters is unchanged."""
        assert escape_text("Fix login flow") == "Fix login flow"


class TestComposeStructure:
    """Test block structure."""

    def test_no_labels(self) -> None:
        """Test that no labels means no label row and no callout."""
        blocks = _compose(MessageComposer(), ())

        assert _types(blocks) == ["section", "section", "divider", "context"]
        assert _urgency_blocks(blocks) == []

    def test_labels_without_urgency(self) -> None:
        """Test that labels produce one actions block in order."""
        labels = (Label("frontend"), Label("bug"), Label("a11y"))
        blocks = _compose(MessageComposer(), labels)

        assert _types(blocks) == ["section", "section", "actions", "divider", "context"]
        buttons = blocks[2]["elements"]
        assert [b["text"]["text"] for b in buttons] == ["frontend", "bug", "a11y"]
        assert all("style" not in b for b in buttons)
        assert len({b["action_id"] for b in buttons}) == 3

    def test_urgency_label(self) -> None:
        """Test that the urgency label adds one callout after the label row."""
        labels = (Label("frontend"), Label("D-0"))
        blocks = _compose(MessageComposer(), labels)

        assert _types(blocks) == ["section", "section", "actions", "section", "divider", "context"]
        callouts = _urgency_blocks(blocks)
        assert len(callouts) == 1
        assert blocks.index(callouts[0]) == 3

        buttons = blocks[2]["elements"]
        assert "style" not in buttons[0]
        assert buttons[1]["style"] == "danger"

    def test_urgency_requires_exact_name(self) -> None:
        """Test that similar label names are not treated as urgent."""
        blocks = _compose(MessageComposer(), (Label("d-0"), Label("D-01")))

        assert _types(blocks) == ["section", "section", "actions", "divider", "context"]

    def test_custom_urgency_label(self) -> None:
        """Test a configured urgency label."""
        composer = MessageComposer(urgency_label="hotfix")
        blocks = _compose(composer, (Label("hotfix"),))

        assert _types(blocks) == ["section", "section", "actions", "section", "divider", "context"]
        assert "`hotfix`" in blocks[3]["text"]["text"]
        assert blocks[2]["elements"][0]["style"] == "danger"


class TestComposeContent:
    """Test block content."""

    def test_header_contains_mention(self) -> None:
        """Test that the header carries the mention token."""
        blocks = _compose(MessageComposer(), ())

        assert "<@U0BOB>" in blocks[0]["text"]["text"]
        assert blocks[0]["text"]["type"] == "mrkdwn"

    def test_title_link(self) -> None:
        """Test the repository and title link line."""
        blocks = _compose(MessageComposer(), ())

        assert blocks[1]["text"]["text"] == (
            "*acme/storefront:*\n<https://github.com/acme/storefront/pull/42|Fix login>"
        )

    def test_title_escaped(self) -> None:
        """Test that markup in the title is escaped."""
        blocks = _compose(MessageComposer(), (), title="Drop <script>alert(1)</script>")
        text = blocks[1]["text"]["text"]

        assert "&lt;script&gt;" in text
        assert "<script>" not in text

    def test_default_tone_is_first(self) -> None:
        """Test that the first phrasing is used without randomization."""
        blocks = _compose(MessageComposer(), ())

        assert blocks[0]["text"]["text"] == HEADER_TONES[0].format(mention="<@U0BOB>")
        assert blocks[-1]["elements"][0]["text"] == FOOTER_TONES[0]


class TestRandomTone:
    """Test tone pack randomization."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_structure_independent_of_wording(self, seed: int) -> None:
        """Test that randomized wording never changes the block structure."""
        composer = MessageComposer(randomize_tone=True, rng=random.Random(seed))
        labels = (Label("D-0"),)

        blocks = _compose(composer, labels)

        assert _types(blocks) == ["section", "section", "actions", "section", "divider", "context"]
        assert "<@U0BOB>" in blocks[0]["text"]["text"]
        assert blocks[-1]["elements"][0]["text"] in FOOTER_TONES

    def test_random_choices_come_from_pack(self) -> None:
        """Test that randomized headers are drawn from the header pack."""
        composer = MessageComposer(randomize_tone=True, rng=random.Random(7))
        expected = {tone.format(mention="<@U0BOB>") for tone in HEADER_TONES}

        headers = {_compose(composer, ())[0]["text"]["text"] for _ in range(20)}

        assert headers <= expected

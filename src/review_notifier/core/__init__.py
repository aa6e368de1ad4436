"""Core business logic components.

This module exports the main business logic classes:
- ReviewNotifier: Runs one review request notification
- MentionResolver: Decides who to mention
- MessageComposer: Builds the Slack blocks
- load_identity_map: Reads the login -> Slack ID mapping
"""

from review_notifier.core.identity_map import load_identity_map
from review_notifier.core.mention_resolver import MentionResolver
from review_notifier.core.message_composer import MessageComposer, escape_text
from review_notifier.core.notifier import ReviewNotifier, create_notifier

__all__ = [
    "MentionResolver",
    "MessageComposer",
    "ReviewNotifier",
    "create_notifier",
    "escape_text",
    "load_identity_map",
]

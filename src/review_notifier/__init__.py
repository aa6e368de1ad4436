"""Slack notifications for pull-request review requests."""

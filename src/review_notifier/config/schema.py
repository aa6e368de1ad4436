"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SlackConfig(BaseModel):
    """Slack-specific configuration."""

    bot_token: str
    channel: str = "#review-requests"
    fallback_text: str = "Review request"

    @field_validator("bot_token")
    @classmethod
    def validate_bot_token(cls, v: str) -> str:
        """Validate Slack bot token format."""
        if not v.startswith("xoxb-"):
            raise ValueError("Bot token must start with xoxb-")
        return v

    @field_validator("channel")
    @classmethod
    def validate_channel(cls, v: str) -> str:
        """Reject an empty destination channel."""
        if not v.strip():
            raise ValueError("Destination channel must not be empty")
        return v


class GitHubConfig(BaseModel):
    """GitHub-specific configuration."""

    token: str
    api_url: str = "https://api.github.com"

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Validate the API base URL."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError(f"Invalid GitHub API URL: {v}")
        return v.rstrip("/")


class MessageConfig(BaseModel):
    """Message composition configuration."""

    urgency_label: str = "D-0"
    randomize_tone: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console", "github"] = "github"


class NotifierConfig(BaseSettings):
    """Root configuration for the review request notifier."""

    slack: SlackConfig
    github: GitHubConfig
    identity_map_path: Path = Path(".github/slack-map.json")
    skip_draft: bool = False
    message: MessageConfig = MessageConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="NOTIFIER_",
        env_nested_delimiter="__",
    )

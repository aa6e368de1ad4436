"""Entry point for the review request notifier.

This module provides the main entry point. It handles:
- Configuration loading (YAML file or GitHub Action inputs)
- Logging setup with secret sanitization
- Event payload loading
- Reporting the single failure of a run
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError

from review_notifier._version import __version__
from review_notifier.config.schema import LoggingConfig
from review_notifier.utils.logging import clear_context

log = structlog.get_logger()


def setup_logging(
    debug: bool = False,
    log_format: str | None = None,
    config: LoggingConfig | None = None,
) -> None:
    """Configure structured logging with secret sanitization.

    Command line flags take precedence over the logging section of the
    configuration file.

    Args:
        debug: Enable debug logging if True
        log_format: Output format ("json", "console" or "github"), or None
        config: Logging section of the loaded configuration, if any
    """
    from review_notifier.utils.logging import LogLevel, configure_logging

    if config is None:
        config = LoggingConfig()

    level = LogLevel.DEBUG if debug else config.level
    configure_logging(level=level, log_format=log_format or config.format)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        prog="review-notifier",
        description="Post a Slack notice when a pull request review is requested",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: read GitHub Action inputs)",
    )

    parser.add_argument(
        "-e",
        "--event-path",
        type=Path,
        default=None,
        help="Path to the event payload (default: $GITHUB_EVENT_PATH)",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compose the message and log it without posting to Slack",
    )

    parser.add_argument(
        "--format",
        choices=["json", "console", "github"],
        default=None,
        help="Log output format (default: from config, else github)",
    )

    return parser.parse_args(argv)


def resolve_event_path(event_path: Path | None) -> Path:
    """Return the event payload path from the CLI or the Actions environment.

    Raises:
        ValueError: If no path is given and GITHUB_EVENT_PATH is unset
    """
    if event_path is not None:
        return event_path

    env_path = os.environ.get("GITHUB_EVENT_PATH")
    if not env_path:
        raise ValueError("No event payload: pass --event-path or set GITHUB_EVENT_PATH")
    return Path(env_path)


async def run_notifier(
    config_path: Path | None,
    event_path: Path | None,
    dry_run: bool = False,
    debug: bool = False,
    log_format: str | None = None,
) -> int:
    """Run one notification.

    Args:
        config_path: Path to configuration file, or None for action inputs
        event_path: Path to the event payload, or None for GITHUB_EVENT_PATH
        dry_run: If True, compose without posting
        debug: Debug logging requested on the command line
        log_format: Log format requested on the command line, or None

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    log.debug("starting_review_notifier", version=__version__)

    try:
        from review_notifier.config.loader import load_action_config, load_config

        if config_path is not None:
            log.debug("loading_configuration", path=str(config_path))
            config = load_config(config_path)
        else:
            config = load_action_config()

        setup_logging(debug=debug, log_format=log_format, config=config.logging)

        from review_notifier.adapters.vcs.github import load_review_event

        event = load_review_event(resolve_event_path(event_path))

        from review_notifier.core.notifier import create_notifier

        notifier = create_notifier(config, dry_run=dry_run)
        outcome = await notifier.notify(event)

        log.debug("review_notifier_finished", outcome=outcome.value)
        return 0

    except ValidationError as e:
        log.error("configuration_invalid", error=str(e))
        return 1
    except Exception as e:
        log.error("notification_failed", error=str(e), error_type=type(e).__name__)
        return 1
    finally:
        clear_context()


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_format=args.format)

    return asyncio.run(
        run_notifier(
            args.config,
            args.event_path,
            dry_run=args.dry_run,
            debug=args.debug,
            log_format=args.format,
        )
    )


if __name__ == "__main__":
    sys.exit(main())

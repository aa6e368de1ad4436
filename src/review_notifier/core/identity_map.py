"""Identity map loading.

The identity map is a JSON object kept in the repository that maps GitHub
logins to Slack user IDs::

    {"octocat": "U012AB3CD", "hubot": "U045EF6GH"}

A missing or broken file never stops a notification: the loader logs a
warning and returns an empty mapping, which sends every reviewer through
the fallback path.
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog

log = structlog.get_logger()


def load_identity_map(path: Path) -> dict[str, str]:
    """Load the login -> Slack user ID mapping.

    Args:
        path: Path to the JSON file, relative paths resolved from the
            working directory.

    Returns:
        The mapping, empty if the file is missing or invalid.
    """
    full_path = path.resolve()

    try:
        with full_path.open(encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        log.warning("identity_map_unavailable", path=str(path), error=str(e))
        return {}

    if not isinstance(data, dict):
        log.warning(
            "identity_map_unavailable",
            path=str(path),
            error=f"expected a JSON object, got {type(data).__name__}",
        )
        return {}

    identity_map: dict[str, str] = {}
    for login, slack_id in data.items():
        if not isinstance(slack_id, str):
            log.warning("identity_map_entry_ignored", login=login, value=repr(slack_id))
            continue
        identity_map[login] = slack_id

    log.debug("identity_map_loaded", path=str(path), entries=len(identity_map))
    return identity_map

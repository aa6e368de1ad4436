"""Configuration loader with YAML parsing and environment variable substitution."""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from .schema import NotifierConfig

# GitHub Action input name (as exposed in INPUT_* variables) -> config key path
ACTION_INPUTS: dict[str, tuple[str, ...]] = {
    "TOKEN": ("github", "token"),
    "SLACKBOTTOKEN": ("slack", "bot_token"),
    "SKIPDRAFT": ("skip_draft",),
    "CHANNEL": ("slack", "channel"),
    "MAPPATH": ("identity_map_path",),
}

# Action inputs that are switches; only the exact string "true" turns them on
SWITCH_INPUTS = frozenset({"SKIPDRAFT"})


def substitute_env_vars(text: str) -> str:
    """
    Replace ${VAR_NAME} patterns with environment variable values.

    Args:
        text: Text containing ${VAR_NAME} patterns

    Returns:
        Text with environment variables substituted

    Raises:
        ValueError: If a referenced environment variable is not found
    """

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ValueError(f"Environment variable {var_name} not found")
        return value

    return re.sub(r"\$\{([^}]+)\}", replacer, text)


def load_config(path: Path) -> NotifierConfig:
    """
    Load configuration from YAML file with environment variable substitution.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated NotifierConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If environment variables are missing or config is invalid
        ValidationError: If config doesn't match schema
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with path.open(encoding="utf-8") as f:
        raw_yaml = f.read()

    yaml_with_env = substitute_env_vars(raw_yaml)
    config_dict = yaml.safe_load(yaml_with_env) or {}

    return NotifierConfig.model_validate(config_dict)


def load_action_config(environ: dict[str, str] | None = None) -> NotifierConfig:
    """
    Build configuration from GitHub Action inputs.

    Inputs left empty are skipped so schema defaults apply. Switch inputs
    are enabled only by the exact string "true", as in workflow YAML.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Validated NotifierConfig instance

    Raises:
        ValidationError: If required inputs are missing or invalid
    """
    env = os.environ if environ is None else environ
    config_dict: dict[str, Any] = {}

    for input_name, key_path in ACTION_INPUTS.items():
        value = env.get(f"INPUT_{input_name}", "").strip()
        if not value:
            continue

        parsed: Any = value == "true" if input_name in SWITCH_INPUTS else value

        target = config_dict
        for key in key_path[:-1]:
            target = target.setdefault(key, {})
        target[key_path[-1]] = parsed

    return NotifierConfig.model_validate(config_dict)

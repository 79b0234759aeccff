"""CLI configuration: YAML config file, runtime tunables and package presets.

Applies config values onto Constants with the precedence
CLI flag > environment variable > config file > built-in default.
A missing or broken config file never breaks the CLI.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from constants import Constants
from common.errors import InputValidationError

logger = logging.getLogger(__name__)


@dataclass
class Preset:
    """Pre-filled resolution inputs for one well-known package."""
    name: str
    package: Optional[str] = None
    repo: Optional[str] = None
    ref: Optional[str] = None
    source_prefix: Optional[str] = None
    lockfile_only: bool = True


def find_config_path(explicit: Optional[str], project_root: Optional[str] = None) -> Optional[str]:
    """Locate the config file: explicit path, $DEPFETCH_CONFIG, project root, user config."""
    if explicit:
        return explicit
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        return env_path
    if project_root:
        for file_name in Constants.CONFIG_FILE_NAMES:
            candidate = os.path.join(project_root, file_name)
            if os.path.isfile(candidate):
                return candidate
    user_path = os.path.expanduser(Constants.USER_CONFIG_PATH)
    if os.path.isfile(user_path):
        return user_path
    return None


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML config file.

    Args:
        config_path: Path to the YAML file, or None.

    Returns:
        Config mapping; empty when the path is unset, missing or invalid.
    """
    if not config_path:
        return {}
    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", config_path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level must be a mapping", config_path)
        return {}
    return data


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = config.get(name)
    return value if isinstance(value, dict) else {}


def apply_config(config: Dict[str, Any]) -> None:
    """Apply config file tunables onto Constants."""
    http = _section(config, "http")
    if http.get("timeout") is not None:
        try:
            timeout = float(http["timeout"])
        except (TypeError, ValueError):
            timeout = None
        if timeout is None or timeout <= 0:
            logger.warning("Ignoring invalid http.timeout: %r", http["timeout"])
        else:
            Constants.REQUEST_TIMEOUT = timeout

    npm = _section(config, "npm")
    if npm.get("registry_url"):
        Constants.REGISTRY_URL_NPM = str(npm["registry_url"])

    github = _section(config, "github")
    if github.get("api_base"):
        Constants.GITHUB_API_BASE = str(github["api_base"])
    if github.get("raw_base"):
        Constants.GITHUB_RAW_BASE = str(github["raw_base"])


def get_github_token(cli_token: Optional[str], config: Dict[str, Any]) -> Optional[str]:
    """GitHub token: CLI flag, then $GITHUB_TOKEN, then github.token from config."""
    if cli_token and cli_token.strip():
        return cli_token.strip()
    env_token = os.environ.get(Constants.ENV_GITHUB_TOKEN)
    if env_token and env_token.strip():
        return env_token.strip()
    token = _section(config, "github").get("token")
    return str(token).strip() if token else None


def get_preset(name: Optional[str], config: Dict[str, Any]) -> Optional[Preset]:
    """Look up a named preset from the ``presets`` config section.

    Raises:
        InputValidationError: If a name is given but not defined.
    """
    if not name:
        return None
    presets = _section(config, "presets")
    raw = presets.get(name)
    if not isinstance(raw, dict):
        known = ", ".join(sorted(presets)) or "none configured"
        raise InputValidationError(f'Unknown preset "{name}" (available: {known}).')
    return Preset(
        name=name,
        package=raw.get("package") or None,
        repo=raw.get("repo") or None,
        ref=raw.get("ref") or None,
        source_prefix=raw.get("source_prefix") or None,
        lockfile_only=bool(raw.get("lockfile_only", True)),
    )

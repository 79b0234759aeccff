"""Local package.json readers: project root detection and installed manifests."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from constants import Constants

logger = logging.getLogger(__name__)


def detect_project_root(start: Optional[str] = None) -> str:
    """Walk up from ``start`` to the nearest directory containing package.json.

    Falls back to ``start`` (default: the current directory) when none is found
    within Constants.PROJECT_ROOT_MAX_DEPTH levels.
    """
    origin = os.path.abspath(start or os.getcwd())
    current = origin
    for _ in range(Constants.PROJECT_ROOT_MAX_DEPTH):
        if os.path.isfile(os.path.join(current, Constants.PACKAGE_JSON_FILE)):
            return current
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return origin


def read_json_file(path: str) -> Optional[Dict[str, Any]]:
    """Read a JSON object from disk, or None when missing or malformed."""
    if not os.path.isfile(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.debug("Failed to parse %s: %s", path, e)
        return None
    return data if isinstance(data, dict) else None


def read_installed_manifest(project_root: str, package_name: str) -> Optional[Dict[str, Any]]:
    """Read ``node_modules/<package>/package.json`` of an installed dependency."""
    if not project_root or not package_name:
        return None
    manifest_path = os.path.join(
        project_root,
        Constants.NODE_MODULES_DIR,
        *package_name.split("/"),
        Constants.PACKAGE_JSON_FILE,
    )
    return read_json_file(manifest_path)

"""Lockfile reader for the npm ecosystem (package-lock.json, npm-shrinkwrap.json).

Reading never raises: a missing or unparsable lockfile is simply "no
evidence" for the resolver.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from constants import Constants

logger = logging.getLogger(__name__)


def find_lockfile(project_root: str) -> Optional[str]:
    """Return the lockfile path, preferring package-lock.json over npm-shrinkwrap.json."""
    for file_name in (Constants.PACKAGE_LOCK_FILE, Constants.SHRINKWRAP_FILE):
        candidate = os.path.join(project_root, file_name)
        if os.path.isfile(candidate):
            return candidate
    return None


def read_lock_data(project_root: str) -> Optional[Dict[str, Any]]:
    """Parse the project's lockfile.

    Args:
        project_root: Directory holding package.json / package-lock.json

    Returns:
        The decoded lockfile, or None when absent or unreadable
    """
    lockfile_path = find_lockfile(project_root)
    if not lockfile_path:
        return None
    try:
        with open(lockfile_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.debug("Failed to parse %s: %s", lockfile_path, e)
        return None
    return data if isinstance(data, dict) else None


def get_lock_entry(lock_data: Optional[Dict[str, Any]], package_name: str) -> Optional[Dict[str, Any]]:
    """Find the top-level lock entry (``version``, ``resolved``) for a package.

    Supports lockfileVersion 2/3 (flat ``packages`` keyed by
    ``node_modules/<name>``) and lockfileVersion 1 (``dependencies``).

    Args:
        lock_data: Decoded lockfile
        package_name: Package name, scoped or not

    Returns:
        The entry dict or None
    """
    if not isinstance(lock_data, dict) or not package_name:
        return None

    packages = lock_data.get("packages")
    if isinstance(packages, dict):
        entry = packages.get(f"{Constants.NODE_MODULES_DIR}/{package_name}")
        if isinstance(entry, dict) and entry:
            return entry

    dependencies = lock_data.get("dependencies")
    if isinstance(dependencies, dict):
        entry = dependencies.get(package_name)
        if isinstance(entry, dict) and entry:
            return entry

    return None

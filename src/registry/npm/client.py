"""NPM registry client: package metadata (packument) retrieval."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from constants import Constants
from common.errors import HttpError
from common.http_client import get_json
from common.logging_utils import extra_context, is_debug_enabled, Timer

logger = logging.getLogger(__name__)


def encode_package_name(package_name: str) -> str:
    """Encode a package name for the registry URL (``@scope/pkg`` -> ``@scope%2fpkg``)."""
    if package_name.startswith("@"):
        return package_name.replace("/", "%2f", 1)
    return package_name


def fetch_packument(package_name: str, url: Optional[str] = None) -> Dict[str, Any]:
    """Get the full metadata document of a package from the NPM registry.

    Args:
        package_name: Package name, scoped or not.
        url: Registry base URL; defaults to Constants.REGISTRY_URL_NPM.

    Returns:
        The packument dict (``dist-tags``, ``repository``, ``versions``, ``readme``).

    Raises:
        HttpError: On network failure, non-2xx status or a non-object body.
    """
    base = url or Constants.REGISTRY_URL_NPM
    if not base.endswith("/"):
        base += "/"
    package_url = base + encode_package_name(package_name)

    with Timer() as timer:
        packument = get_json(package_url, context="npm", headers={"Accept": "application/json"})

    if not isinstance(packument, dict):
        raise HttpError("npm returned a non-object packument", url=package_url)

    if is_debug_enabled(logger):
        logger.debug(
            "Packument fetched",
            extra=extra_context(
                event="http_response",
                component="client",
                action="fetch_packument",
                outcome="success",
                package=package_name,
                count=len(packument.get("versions") or {}),
                duration_ms=timer.duration_ms(),
            ),
        )
    return packument

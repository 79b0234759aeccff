"""Shared HTTP helpers used across registry and repository clients.

Encapsulates common request/timeout error handling so modules avoid
duplicating try/except blocks. Unlike a CLI-level helper these functions never
exit the process: every failure surfaces as ``HttpError`` so that callers can
degrade (missing registry metadata) or advance to the next candidate ref.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import requests

from constants import Constants
from common.errors import HttpError
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def _build_headers(headers: Optional[Dict[str, str]]) -> Dict[str, str]:
    merged = {"User-Agent": Constants.USER_AGENT}
    if headers:
        merged.update(headers)
    return merged


def safe_get(
    url: str,
    *,
    context: str,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any,
) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Redirects are followed by requests; the timeout bounds each hop.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "npm", "github").
        headers: Optional request headers, merged over the default User-Agent.
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: A response with a status code below 400.

    Raises:
        HttpError: On timeout, connection failure or an HTTP error status.
    """
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    source=context,
                ),
            )
        try:
            res = requests.get(
                url,
                timeout=Constants.REQUEST_TIMEOUT,
                headers=_build_headers(headers),
                allow_redirects=True,
                **kwargs,
            )
        except requests.Timeout as exc:
            raise HttpError(
                f"{context} request timed out after {Constants.REQUEST_TIMEOUT} seconds",
                url=safe_target,
            ) from exc
        except requests.RequestException as exc:  # includes ConnectionError
            raise HttpError(f"{context} connection error: {exc}", url=safe_target) from exc

    if res.status_code >= 400:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP error status",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="error_status",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                ),
            )
        preview = (res.text or "")[: Constants.ERROR_BODY_PREVIEW]
        raise HttpError(
            f"HTTP {res.status_code}: {preview}",
            url=safe_target,
            status_code=res.status_code,
        )

    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response ok",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="GET",
                outcome="success",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
            ),
        )
    return res


def get_json(
    url: str,
    *,
    context: str,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any,
) -> Any:
    """Perform GET request and parse the JSON response.

    Args:
        url: Target URL
        context: Source tag for logs
        headers: Optional request headers
        **kwargs: Additional requests.get parameters

    Returns:
        The decoded JSON document.

    Raises:
        HttpError: When the request fails or the body is not valid JSON.
    """
    res = safe_get(url, context=context, headers=headers, **kwargs)
    try:
        return json.loads(res.text)
    except json.JSONDecodeError as exc:
        raise HttpError(
            f"{context} returned invalid JSON: {exc}",
            url=safe_url(url),
            status_code=res.status_code,
        ) from exc


def get_bytes(
    url: str,
    *,
    context: str,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any,
) -> bytes:
    """Perform GET request and return the raw response body."""
    return safe_get(url, context=context, headers=headers, **kwargs).content

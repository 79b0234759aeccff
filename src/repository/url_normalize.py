"""Repository URL normalization for GitHub-hosted packages.

Accepts the URL shapes found in npm metadata and lockfiles:
``git+https://``, ``git://``, ``ssh://git@``, ``git@github.com:``,
plain ``https://`` and the ``github:owner/repo`` shorthand.
"""
from __future__ import annotations

import re
from typing import Any, Optional

from resolution.models import RepoCandidate

_PREFIX_REWRITES = (
    (re.compile(r"^git\+"), ""),
    (re.compile(r"^git://"), "https://"),
    (re.compile(r"^ssh://git@"), "https://"),
    (re.compile(r"^git@github\.com:", re.IGNORECASE), "https://github.com/"),
    (re.compile(r"^github:", re.IGNORECASE), "https://github.com/"),
)

_GITHUB_REPO_RE = re.compile(
    r"github\.com/([^/]+)/([^/#?]+?)(?:\.git)?(?:[/?].*)?(?:#(.+))?$",
    re.IGNORECASE,
)
_RESOLVED_REF_RE = re.compile(r"#([A-Za-z0-9._/-]+)$")


def parse_github_repo(value: Any) -> Optional[RepoCandidate]:
    """Parse a GitHub owner/repo (and optional ``#ref``) from a URL-ish string.

    Args:
        value: Repository URL in any accepted form.

    Returns:
        RepoCandidate, or None when the value does not point at github.com.
    """
    if not value:
        return None
    raw = str(value).strip()
    for pattern, replacement in _PREFIX_REWRITES:
        raw = pattern.sub(replacement, raw)
    raw = raw.strip()

    match = _GITHUB_REPO_RE.search(raw)
    if not match:
        return None
    return RepoCandidate(owner=match.group(1), repo=match.group(2), ref=match.group(3) or None)


def parse_ref_from_resolved(resolved: Any) -> Optional[str]:
    """Extract the trailing ``#<ref>`` of a lockfile ``resolved`` URL."""
    if not resolved:
        return None
    match = _RESOLVED_REF_RE.search(str(resolved))
    return match.group(1) if match else None

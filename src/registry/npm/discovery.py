"""NPM discovery utilities: repository fields from packuments and manifests."""
from __future__ import annotations

import re
from typing import Any, Dict, Optional

from repository.url_normalize import parse_github_repo
from resolution.models import RepoCandidate

_README_GITHUB_RE = re.compile(r"github\.com/([A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+)", re.IGNORECASE)


def extract_latest_version(packument: Optional[Dict[str, Any]]) -> str:
    """Extract latest version from packument dist-tags.

    Args:
        packument: NPM packument dictionary

    Returns:
        Latest version string or empty string if not found
    """
    if not isinstance(packument, dict):
        return ""
    dist_tags = packument.get("dist-tags") or {}
    if not isinstance(dist_tags, dict):
        return ""
    return str(dist_tags.get("latest") or "")


def get_repository_url(repo_field: Any) -> Optional[str]:
    """Return the URL of a ``repository`` field in string or ``{url}`` form."""
    if not repo_field:
        return None
    if isinstance(repo_field, str):
        return repo_field
    if isinstance(repo_field, dict) and repo_field.get("url"):
        return str(repo_field["url"])
    return None


def root_repository_url(packument: Optional[Dict[str, Any]]) -> Optional[str]:
    if not isinstance(packument, dict):
        return None
    return get_repository_url(packument.get("repository"))


def version_repository_url(packument: Optional[Dict[str, Any]], version: str) -> Optional[str]:
    """Repository URL declared by one published version of the package."""
    if not isinstance(packument, dict) or not version:
        return None
    versions = packument.get("versions") or {}
    version_info = versions.get(version) if isinstance(versions, dict) else None
    if not isinstance(version_info, dict):
        return None
    return get_repository_url(version_info.get("repository"))


def extract_github_repo_from_readme(readme: Any) -> Optional[RepoCandidate]:
    """Best-effort: the first github.com/<owner>/<repo> link in a README."""
    if not readme or not isinstance(readme, str):
        return None
    match = _README_GITHUB_RE.search(readme)
    if not match:
        return None
    return parse_github_repo(f"https://github.com/{match.group(1)}")

"""GitHub API client for repository metadata, trees and raw file content.

Provides a lightweight REST client. Every method raises ``HttpError`` on
failure; callers decide whether that is fatal (it never is for a single ref).
"""
from __future__ import annotations

import os
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from constants import Constants
from common.http_client import get_bytes, get_json
from resolution.models import TreeEntry


class GitHubClient:
    """Lightweight REST client for GitHub API operations.

    Supports optional authentication via GITHUB_TOKEN environment variable.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        raw_base_url: Optional[str] = None,
    ):
        """Initialize GitHub client.

        Args:
            token: GitHub personal access token (defaults to GITHUB_TOKEN env var)
            base_url: Base URL for the REST API (defaults to Constants.GITHUB_API_BASE)
            raw_base_url: Base URL for raw content (defaults to Constants.GITHUB_RAW_BASE)
        """
        self.base_url = (base_url or Constants.GITHUB_API_BASE).rstrip("/")
        self.raw_base_url = (raw_base_url or Constants.GITHUB_RAW_BASE).rstrip("/")
        self.token = token or os.environ.get(Constants.ENV_GITHUB_TOKEN)

    def _auth_headers(self) -> Dict[str, str]:
        headers = {}
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def _get_headers(self) -> Dict[str, str]:
        """Get API request headers including authorization if token is available."""
        headers = {"Accept": "application/vnd.github.v3+json"}
        headers.update(self._auth_headers())
        return headers

    def get_repo(self, owner: str, repo: str) -> Dict[str, Any]:
        """Fetch repository metadata.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            Repository metadata dict (``default_branch`` among others)
        """
        url = f"{self.base_url}/repos/{owner}/{repo}"
        data = get_json(url, context="github", headers=self._get_headers())
        return data if isinstance(data, dict) else {}

    def get_default_branch(self, owner: str, repo: str) -> Optional[str]:
        return self.get_repo(owner, repo).get("default_branch") or None

    def get_tree(self, owner: str, repo: str, ref: str) -> List[TreeEntry]:
        """Fetch the recursive file listing of a repository at ``ref``.

        Args:
            owner: Repository owner
            repo: Repository name
            ref: Commit hash, tag or branch

        Returns:
            List of TreeEntry; empty when the response carries no tree list
        """
        url = f"{self.base_url}/repos/{owner}/{repo}/git/trees/{quote(ref, safe='')}?recursive=1"
        data = get_json(url, context="github", headers=self._get_headers())
        tree = data.get("tree") if isinstance(data, dict) else None
        if not isinstance(tree, list):
            return []
        return [
            TreeEntry(path=str(item["path"]), type=str(item.get("type", "")))
            for item in tree
            if isinstance(item, dict) and item.get("path")
        ]

    def get_raw(self, owner: str, repo: str, file_path: str, ref: str) -> bytes:
        """Fetch the byte content of ``file_path`` at ``ref``."""
        url = f"{self.raw_base_url}/{owner}/{repo}/{quote(ref, safe='/')}/{quote(file_path)}"
        return get_bytes(url, context="github-raw", headers=self._auth_headers())

"""Exception types shared by clients, resolution and the CLI."""
from __future__ import annotations

from typing import List, Optional, Sequence


class DepfetchError(Exception):
    """Base class for all depfetch errors."""


class InputValidationError(DepfetchError):
    """Malformed import path, unsupported extension or unknown preset."""


class HttpError(DepfetchError):
    """A network request failed, timed out or returned status >= 400."""

    def __init__(self, message: str, *, url: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ResolutionError(DepfetchError):
    """No repository could be identified, or every candidate ref was exhausted."""

    def __init__(
        self,
        message: str,
        *,
        package_name: str,
        owner: Optional[str] = None,
        repo: Optional[str] = None,
        attempted_refs: Sequence[str] = (),
    ):
        super().__init__(message)
        self.package_name = package_name
        self.owner = owner
        self.repo = repo
        self.attempted_refs: List[str] = list(attempted_refs)

"""Candidate git reference ordering."""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from constants import Constants


def unique_non_empty(values: Iterable[Optional[str]]) -> List[str]:
    """Trimmed, non-empty values in first-occurrence order without duplicates."""
    seen = set()
    result = []
    for value in values:
        if value is None:
            continue
        text = str(value).strip()
        if not text or text in seen:
            continue
        seen.add(text)
        result.append(text)
    return result


def stable_refs(
    manual_ref: Optional[str] = None,
    lock_ref: Optional[str] = None,
    candidate_ref: Optional[str] = None,
    version: Optional[str] = None,
) -> List[str]:
    """Refs pinned to an exact snapshot: overrides, commits, version tags."""
    return unique_non_empty([
        manual_ref,
        lock_ref,
        candidate_ref,
        f"v{version}" if version else None,
        version,
    ])


def branch_refs(default_branch: Optional[str] = None) -> List[str]:
    """Moving refs: the repository default branch, then the usual fallbacks."""
    return unique_non_empty([default_branch, *Constants.FALLBACK_BRANCHES])


def build_refs(stable: Sequence[str], branch: Sequence[str], prefer_latest: bool = False) -> List[str]:
    """Interleave stable and branch refs: branch-first when preferring latest."""
    if prefer_latest:
        return unique_non_empty([*branch, *stable])
    return unique_non_empty([*stable, *branch])

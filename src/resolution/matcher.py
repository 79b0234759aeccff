"""Path Matcher: pick the best real file for a logical import path.

Scoring runs over normalized, case-insensitive, slash-separated paths. Only
the first matching base rule applies; bonuses are added on top:

    exact path                     120
    wanted + ".ext"                110
    ends with "/wanted"             95
    ends with "/wanted-stem"        90
    same filename stem              80
    filename contains wanted stem   60

    +20 requested extension matches
    +8  path starts with "<source_prefix>/"
    +5  per aligned trailing segment (max +20)

Ties keep listing order (stable sort), so equal scores depend on the order
the tree endpoint returns entries.
"""
from __future__ import annotations

import posixpath
import re
from typing import Iterable, List, Optional, Tuple

from constants import Constants
from resolution.import_path import normalize_extension
from resolution.models import TreeEntry

_MULTI_SLASH_RE = re.compile(r"/+")
_LEADING_DOT_SLASH_RE = re.compile(r"^\.?/")
_EXTENSION_RE = re.compile(r"\.[^.]+$")

MAX_ALIGNED_BONUS = 20
ALIGNED_SEGMENT_BONUS = 5
EXTENSION_BONUS = 20
SOURCE_PREFIX_BONUS = 8


def normalize_path_for_match(path: Optional[str]) -> str:
    """Posix separators, no leading ``./`` or ``/``, single slashes, lowercase."""
    text = str(path or "").replace("\\", "/")
    text = _LEADING_DOT_SLASH_RE.sub("", text)
    return _MULTI_SLASH_RE.sub("/", text).lower()


def _strip_extension(name: str) -> str:
    return _EXTENSION_RE.sub("", name)


def _extension_of(path: str) -> Optional[str]:
    return normalize_extension(posixpath.splitext(posixpath.basename(path))[1])


def _aligned_segments(candidate: str, wanted: str) -> int:
    wanted_segments = [seg for seg in wanted.split("/") if seg]
    candidate_segments = [seg for seg in candidate.split("/") if seg]
    aligned = 0
    for wanted_seg, candidate_seg in zip(reversed(wanted_segments), reversed(candidate_segments)):
        if wanted_seg != candidate_seg:
            break
        aligned += 1
    return aligned


def score_path_match(
    candidate_path: str,
    wanted_path: str,
    requested_ext: Optional[str] = None,
    source_prefix: Optional[str] = None,
) -> int:
    """Score one tree path against the wanted logical path; higher is better."""
    c = normalize_path_for_match(candidate_path)
    w = normalize_path_for_match(wanted_path)
    c_base = posixpath.basename(c)
    w_base = posixpath.basename(w)
    c_stem = _strip_extension(c_base)
    w_stem = _strip_extension(w_base)

    if c == w:
        score = 120
    elif c.startswith(f"{w}."):
        score = 110
    elif c.endswith(f"/{w}"):
        score = 95
    elif c.endswith(f"/{w_stem}"):
        score = 90
    elif c_stem == w_stem:
        score = 80
    elif w_stem in c_base:
        score = 60
    else:
        score = 0

    if requested_ext and _extension_of(c) == requested_ext:
        score += EXTENSION_BONUS
    if source_prefix and c.startswith(f"{normalize_path_for_match(source_prefix)}/"):
        score += SOURCE_PREFIX_BONUS

    score += min(_aligned_segments(c, w) * ALIGNED_SEGMENT_BONUS, MAX_ALIGNED_BONUS)
    return score


def _is_candidate(entry: TreeEntry, requested_ext: Optional[str]) -> bool:
    if not entry.is_blob or not entry.path:
        return False
    ext = _extension_of(entry.path)
    if requested_ext:
        return ext == requested_ext
    return not ext or ext in Constants.CODE_EXTENSIONS


def rank_tree_files(
    entries: Iterable[TreeEntry],
    wanted_path: str,
    requested_ext: Optional[str] = None,
    source_prefix: Optional[str] = None,
) -> List[Tuple[str, int]]:
    """Return ``(path, score)`` for every positive candidate, best first."""
    if not wanted_path:
        return []
    scored = [
        (entry.path, score_path_match(entry.path, wanted_path, requested_ext, source_prefix))
        for entry in entries
        if _is_candidate(entry, requested_ext)
    ]
    # sorted() is stable: equal scores keep listing order
    return sorted(
        (item for item in scored if item[1] > 0),
        key=lambda item: item[1],
        reverse=True,
    )


def pick_best_tree_file(
    entries: Iterable[TreeEntry],
    wanted_path: str,
    requested_ext: Optional[str] = None,
    source_prefix: Optional[str] = None,
) -> Optional[str]:
    """Return the best matching blob path, or None when nothing scores above zero."""
    ranked = rank_tree_files(entries, wanted_path, requested_ext, source_prefix)
    return ranked[0][0] if ranked else None

"""Evidence providers and repository candidate selection.

Each source (manual override, lockfile, installed manifest, registry) yields
an optional RepoCandidate. Selection is a pure fold over a named priority
order: the first source with a parsable GitHub candidate wins.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from registry.npm.discovery import (
    extract_github_repo_from_readme,
    extract_latest_version,
    get_repository_url,
    root_repository_url,
    version_repository_url,
)
from repository.url_normalize import parse_github_repo, parse_ref_from_resolved
from resolution.models import EvidenceSource, RepoCandidate

S = EvidenceSource

DEFAULT_PRIORITY: Tuple[EvidenceSource, ...] = (
    S.MANUAL,
    S.LOCKFILE,
    S.INSTALLED,
    S.REGISTRY_ROOT,
    S.REGISTRY_LATEST,
    S.REGISTRY_README,
)

PREFER_LATEST_PRIORITY: Tuple[EvidenceSource, ...] = (
    S.MANUAL,
    S.REGISTRY_ROOT,
    S.REGISTRY_LATEST,
    S.REGISTRY_README,
    S.LOCKFILE,
    S.INSTALLED,
)

# Package presets: repository pre-filled, version pinned by the lockfile only.
LOCKFILE_ONLY_PRIORITY: Tuple[EvidenceSource, ...] = (
    S.MANUAL,
    S.LOCKFILE,
)

REGISTRY_SOURCES = frozenset({S.REGISTRY_ROOT, S.REGISTRY_LATEST, S.REGISTRY_README})


def priority_order(prefer_latest: bool = False, lockfile_only: bool = False) -> Tuple[EvidenceSource, ...]:
    if lockfile_only:
        return LOCKFILE_ONLY_PRIORITY
    return PREFER_LATEST_PRIORITY if prefer_latest else DEFAULT_PRIORITY


def needs_registry(order: Sequence[EvidenceSource]) -> bool:
    return any(source in REGISTRY_SOURCES for source in order)


@dataclass
class Evidence:
    """Raw evidence gathered for one package; any field may be missing."""
    manual_repo: Optional[str] = None
    lock_entry: Optional[Dict[str, Any]] = None
    installed_manifest: Optional[Dict[str, Any]] = None
    packument: Optional[Dict[str, Any]] = None

    @property
    def lock_resolved(self) -> str:
        if not isinstance(self.lock_entry, dict):
            return ""
        return str(self.lock_entry.get("resolved") or "")

    @property
    def lock_ref(self) -> Optional[str]:
        return parse_ref_from_resolved(self.lock_resolved)

    @property
    def lock_version(self) -> Optional[str]:
        if not isinstance(self.lock_entry, dict):
            return None
        return self.lock_entry.get("version") or None

    @property
    def installed_version(self) -> Optional[str]:
        if not isinstance(self.installed_manifest, dict):
            return None
        return self.installed_manifest.get("version") or None

    def effective_version(self) -> Optional[str]:
        """Installed manifest version, else the locked version."""
        version = self.installed_version or self.lock_version
        return str(version) if version else None


def _manual(evidence: Evidence) -> Optional[RepoCandidate]:
    return parse_github_repo(evidence.manual_repo)


def _lockfile(evidence: Evidence) -> Optional[RepoCandidate]:
    return parse_github_repo(evidence.lock_resolved)


def _installed(evidence: Evidence) -> Optional[RepoCandidate]:
    if not isinstance(evidence.installed_manifest, dict):
        return None
    return parse_github_repo(get_repository_url(evidence.installed_manifest.get("repository")))


def _registry_root(evidence: Evidence) -> Optional[RepoCandidate]:
    return parse_github_repo(root_repository_url(evidence.packument))


def _registry_latest(evidence: Evidence) -> Optional[RepoCandidate]:
    latest = extract_latest_version(evidence.packument)
    return parse_github_repo(version_repository_url(evidence.packument, latest))


def _registry_readme(evidence: Evidence) -> Optional[RepoCandidate]:
    if not isinstance(evidence.packument, dict):
        return None
    return extract_github_repo_from_readme(evidence.packument.get("readme"))


PROVIDERS: Dict[EvidenceSource, Callable[[Evidence], Optional[RepoCandidate]]] = {
    S.MANUAL: _manual,
    S.LOCKFILE: _lockfile,
    S.INSTALLED: _installed,
    S.REGISTRY_ROOT: _registry_root,
    S.REGISTRY_LATEST: _registry_latest,
    S.REGISTRY_README: _registry_readme,
}


def collect_repo_candidates(evidence: Evidence) -> Dict[EvidenceSource, Optional[RepoCandidate]]:
    """Run every provider over the evidence."""
    return {source: provider(evidence) for source, provider in PROVIDERS.items()}


def select_repo_candidate(
    candidates: Dict[EvidenceSource, Optional[RepoCandidate]],
    order: Sequence[EvidenceSource],
) -> Optional[Tuple[EvidenceSource, RepoCandidate]]:
    """Pick the first present candidate following ``order``."""
    for source in order:
        candidate = candidates.get(source)
        if candidate is not None:
            return source, candidate
    return None

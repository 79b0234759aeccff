"""Reference Resolver: which GitHub repository and refs back a package.

Evidence gathering is failure tolerant. Missing local files and failed
registry or repository-metadata requests degrade to "no evidence" and are
reported as diagnostic events; only a missing repository candidate makes the
resolver return None.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from common.errors import HttpError
from registry.npm.client import fetch_packument
from registry.npm.lockfile_parser import get_lock_entry, read_lock_data
from registry.npm.manifest import read_installed_manifest
from repository.github import GitHubClient
from resolution.evidence import (
    Evidence,
    collect_repo_candidates,
    needs_registry,
    priority_order,
    select_repo_candidate,
)
from resolution.models import EvidenceSource, ReferenceSet, ResolutionRequest
from resolution.refs import branch_refs, build_refs, stable_refs
from resolution.reporter import Reporter


class ReferenceResolver:
    """Builds a ReferenceSet from lockfile, manifest, registry and overrides.

    Collaborators are injectable so the cascade can be exercised without
    network or filesystem access.
    """

    def __init__(
        self,
        github: Optional[GitHubClient] = None,
        packument_fetcher: Callable[[str], Dict[str, Any]] = fetch_packument,
        lock_reader: Callable[[str], Optional[Dict[str, Any]]] = read_lock_data,
        manifest_reader: Callable[[str, str], Optional[Dict[str, Any]]] = read_installed_manifest,
        reporter: Optional[Reporter] = None,
    ):
        self.github = github or GitHubClient()
        self.packument_fetcher = packument_fetcher
        self.lock_reader = lock_reader
        self.manifest_reader = manifest_reader
        self.reporter = reporter or Reporter()

    def gather_evidence(self, request: ResolutionRequest) -> Evidence:
        """Collect evidence from every source the active priority order uses."""
        order = priority_order(request.prefer_latest, request.lockfile_only)
        evidence = Evidence(manual_repo=request.manual_repo or None)

        lock_data = self.lock_reader(request.project_root)
        if lock_data is None:
            self.reporter.info(
                "lockfileMissing",
                "package-lock.json not found or unreadable; continuing with remaining metadata sources",
                target=request.project_root,
            )
        evidence.lock_entry = get_lock_entry(lock_data, request.package_name)

        if EvidenceSource.INSTALLED in order:
            evidence.installed_manifest = self.manifest_reader(
                request.project_root, request.package_name
            )

        if needs_registry(order):
            try:
                evidence.packument = self.packument_fetcher(request.package_name)
            except HttpError as err:
                self.reporter.debug(
                    "npmMetadataFailed",
                    package=request.package_name,
                    error=str(err),
                )
        return evidence

    def default_branch(self, owner: str, repo: str) -> Optional[str]:
        try:
            return self.github.get_default_branch(owner, repo)
        except HttpError as err:
            self.reporter.debug("githubRepoMetaFailed", repo=f"{owner}/{repo}", error=str(err))
            return None

    def resolve(self, request: ResolutionRequest) -> Optional[ReferenceSet]:
        """Produce the ordered refs to try, or None if no repository is known.

        Args:
            request: Package name, project root, overrides and ordering flags.

        Returns:
            ReferenceSet with deduplicated refs, most likely first; None when no
            evidence source names a GitHub repository.
        """
        order = priority_order(request.prefer_latest, request.lockfile_only)
        evidence = self.gather_evidence(request)
        selected = select_repo_candidate(collect_repo_candidates(evidence), order)

        if selected is None:
            self.reporter.debug(
                "noRepoCandidate",
                package=request.package_name,
                target=request.manual_repo or "none",
            )
            return None

        source, candidate = selected
        self.reporter.debug(
            "repoCandidateSelected",
            package=request.package_name,
            repo=candidate.slug,
            source=source.value,
        )

        version = evidence.effective_version()
        stable = stable_refs(
            manual_ref=request.manual_ref,
            lock_ref=evidence.lock_ref,
            candidate_ref=candidate.ref,
            version=version,
        )
        branch = branch_refs(self.default_branch(candidate.owner, candidate.repo))
        refs = build_refs(stable, branch, request.prefer_latest)

        self.reporter.debug(
            "refsBuilt",
            repo=candidate.slug,
            count=len(refs),
            target=",".join(refs),
        )
        return ReferenceSet(owner=candidate.owner, repo=candidate.repo, refs=refs, source=source)

"""The ref cascade: try each candidate ref in order until one yields a file."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from common.errors import HttpError, ResolutionError
from repository.github import GitHubClient
from resolution.import_path import normalize_extension, parse_import_path, validate_requested_extension
from resolution.matcher import pick_best_tree_file
from resolution.models import PackageReference, ReferenceSet, ResolutionRequest, ResolvedFile
from resolution.reporter import Reporter
from resolution.resolver import ReferenceResolver


def resolve_from_github(
    reference_set: Optional[ReferenceSet],
    wanted_path: str,
    requested_ext: Optional[str],
    source_prefix: Optional[str],
    github: GitHubClient,
    reporter: Reporter,
    package_name: str = "",
) -> ResolvedFile:
    """Walk ``reference_set.refs`` strictly in order; first tree hit plus raw fetch wins.

    Raises:
        ResolutionError: When no repository is known or every ref is exhausted.
    """
    if reference_set is None:
        reporter.debug("resolveSkipped", package=package_name, outcome="noRepoInfo")
        raise ResolutionError(
            f'No GitHub repository could be identified for package "{package_name}".',
            package_name=package_name,
        )

    owner, repo = reference_set.owner, reference_set.repo
    attempted = []
    for ref in reference_set.refs:
        attempted.append(ref)
        try:
            reporter.debug("tryingRef", repo=reference_set.slug, ref=ref)
            tree = github.get_tree(owner, repo, ref)
            reporter.debug("treeFetched", ref=ref, count=len(tree))

            target_path = pick_best_tree_file(tree, wanted_path, requested_ext, source_prefix)
            if not target_path:
                reporter.debug("pathNotFound", ref=ref, target=wanted_path)
                continue

            content = github.get_raw(owner, repo, target_path, ref)
            reporter.debug("rawFetchSuccess", ref=ref, path=target_path, bytes=len(content))
            return ResolvedFile(
                content=content,
                repo_path=target_path,
                ref=ref,
                owner=owner,
                repo=repo,
            )
        except HttpError as err:
            reporter.debug("refFailed", ref=ref, error=str(err))

    reporter.debug("allRefsExhausted", repo=reference_set.slug, count=len(attempted))
    raise ResolutionError(
        f'Could not resolve "{wanted_path}" in {reference_set.slug} '
        f"after trying {len(attempted)} ref(s): {', '.join(attempted) or 'none'}.",
        package_name=package_name,
        owner=owner,
        repo=repo,
        attempted_refs=attempted,
    )


@dataclass
class FetchRequest:
    """Everything one CLI invocation needs to resolve a file."""
    import_path: str
    project_root: str
    extension: Optional[str] = None
    source_prefix: Optional[str] = None
    manual_repo: Optional[str] = None
    manual_ref: Optional[str] = None
    prefer_latest: bool = False
    lockfile_only: bool = False


def prepare(request: FetchRequest) -> Tuple[PackageReference, Optional[str]]:
    """Validate the input before any network call.

    Raises:
        InputValidationError: Malformed import path or unsupported extension.
    """
    package_ref = parse_import_path(request.import_path)
    requested_ext = normalize_extension(request.extension)
    validate_requested_extension(requested_ext)
    return package_ref, requested_ext


def fetch_source(
    request: FetchRequest,
    github: Optional[GitHubClient] = None,
    resolver: Optional[ReferenceResolver] = None,
    reporter: Optional[Reporter] = None,
) -> ResolvedFile:
    """Resolve the repository and refs, then run the cascade.

    Raises:
        InputValidationError: Before any network activity, on bad input.
        ResolutionError: When the file could not be located.
    """
    package_ref, requested_ext = prepare(request)
    reporter = reporter or Reporter()
    github = github or GitHubClient()
    resolver = resolver or ReferenceResolver(github=github, reporter=reporter)

    reference_set = resolver.resolve(
        ResolutionRequest(
            package_name=package_ref.name,
            project_root=request.project_root,
            manual_repo=request.manual_repo,
            manual_ref=request.manual_ref,
            prefer_latest=request.prefer_latest,
            lockfile_only=request.lockfile_only,
        )
    )
    return resolve_from_github(
        reference_set,
        package_ref.file_path,
        requested_ext,
        request.source_prefix,
        github,
        reporter,
        package_name=package_ref.name,
    )

"""Data models for source resolution."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class EvidenceSource(Enum):
    """Where a repository candidate came from."""
    MANUAL = "manual"
    LOCKFILE = "lockfile"
    INSTALLED = "installed"
    REGISTRY_ROOT = "registry_root"
    REGISTRY_LATEST = "registry_latest"
    REGISTRY_README = "registry_readme"


@dataclass(frozen=True)
class PackageReference:
    """An import-style path split into package name and in-package path."""
    name: str
    path_parts: Tuple[str, ...]
    raw: str = ""

    @property
    def file_path(self) -> str:
        return "/".join(self.path_parts)


@dataclass(frozen=True)
class RepoCandidate:
    """A GitHub owner/repo pair, optionally pinned to a ref."""
    owner: str
    repo: str
    ref: Optional[str] = None

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass
class ReferenceSet:
    """Repository plus the ordered refs to try, most likely first."""
    owner: str
    repo: str
    refs: List[str] = field(default_factory=list)
    source: Optional[EvidenceSource] = None

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class TreeEntry:
    """One entry of a recursive repository listing."""
    path: str
    type: str  # "blob" | "tree" | "commit"

    @property
    def is_blob(self) -> bool:
        return self.type == "blob"


@dataclass(frozen=True)
class ResolvedFile:
    """Terminal artifact of a successful resolution."""
    content: bytes
    repo_path: str
    ref: str
    owner: str
    repo: str
    source: str = "github"

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass
class ResolutionRequest:
    """Inputs for one Reference Resolver run."""
    package_name: str
    project_root: str
    manual_repo: Optional[str] = None
    manual_ref: Optional[str] = None
    prefer_latest: bool = False
    lockfile_only: bool = False

"""Shared fakes for resolution tests. Nothing here touches the network."""

import json

import pytest

from common.errors import HttpError
from resolution.models import TreeEntry
from resolution.reporter import Reporter


def blobs(*paths):
    return [TreeEntry(path=p, type="blob") for p in paths]


class FakeGitHub:
    """In-memory stand-in for repository.github.GitHubClient.

    trees: {ref: [TreeEntry] | Exception}; missing refs raise a 404 HttpError.
    raw: {(path, ref): bytes | Exception}; missing entries return b"// <path>".
    """

    def __init__(self, trees=None, raw=None, default_branch=None, repo_error=None):
        self.trees = trees or {}
        self.raw = raw or {}
        self._default_branch = default_branch
        self.repo_error = repo_error
        self.tree_calls = []
        self.raw_calls = []
        self.repo_calls = []

    def get_default_branch(self, owner, repo):
        self.repo_calls.append((owner, repo))
        if self.repo_error:
            raise self.repo_error
        return self._default_branch

    def get_tree(self, owner, repo, ref):
        self.tree_calls.append((owner, repo, ref))
        tree = self.trees.get(ref)
        if tree is None:
            raise HttpError("HTTP 404: Not Found", status_code=404)
        if isinstance(tree, Exception):
            raise tree
        return tree

    def get_raw(self, owner, repo, file_path, ref):
        self.raw_calls.append((owner, repo, file_path, ref))
        content = self.raw.get((file_path, ref), f"// {file_path}".encode())
        if isinstance(content, Exception):
            raise content
        return content


@pytest.fixture
def reporter():
    return Reporter()


@pytest.fixture
def npm_project(tmp_path):
    """Factory writing package.json, package-lock.json and installed manifests."""

    def _make(lock_packages=None, installed=None, lockfile_version=3):
        (tmp_path / "package.json").write_text(json.dumps({"name": "app", "version": "1.0.0"}))
        if lock_packages is not None:
            packages = {"": {"name": "app", "version": "1.0.0"}}
            for name, entry in lock_packages.items():
                packages[f"node_modules/{name}"] = entry
            lock = {"name": "app", "lockfileVersion": lockfile_version, "packages": packages}
            (tmp_path / "package-lock.json").write_text(json.dumps(lock, indent=2))
        for name, manifest in (installed or {}).items():
            pkg_dir = tmp_path.joinpath("node_modules", *name.split("/"))
            pkg_dir.mkdir(parents=True, exist_ok=True)
            (pkg_dir / "package.json").write_text(json.dumps(manifest))
        return tmp_path

    return _make

"""Tests for npm packument discovery helpers."""

from registry.npm.discovery import (
    extract_github_repo_from_readme,
    extract_latest_version,
    get_repository_url,
    root_repository_url,
    version_repository_url,
)
from resolution.models import RepoCandidate

PACKUMENT = {
    "dist-tags": {"latest": "2.0.0", "next": "3.0.0-rc.1"},
    "repository": {"type": "git", "url": "git+https://github.com/acme/widgets.git"},
    "versions": {
        "1.0.0": {"repository": "acme/widgets-legacy"},
        "2.0.0": {"repository": {"type": "git", "url": "https://github.com/acme/widgets-v2"}},
    },
}


def test_extract_latest_version():
    assert extract_latest_version(PACKUMENT) == "2.0.0"
    assert extract_latest_version({}) == ""
    assert extract_latest_version(None) == ""


def test_get_repository_url_forms():
    assert get_repository_url("https://github.com/a/b") == "https://github.com/a/b"
    assert get_repository_url({"type": "git", "url": "git://github.com/a/b"}) == "git://github.com/a/b"
    assert get_repository_url({"type": "git"}) is None
    assert get_repository_url(None) is None


def test_root_and_version_repository():
    assert root_repository_url(PACKUMENT) == "git+https://github.com/acme/widgets.git"
    assert version_repository_url(PACKUMENT, "2.0.0") == "https://github.com/acme/widgets-v2"
    assert version_repository_url(PACKUMENT, "9.9.9") is None
    assert version_repository_url(PACKUMENT, "") is None


class TestReadmeExtraction:
    """Test best-effort README repository extraction."""

    def test_first_github_link(self):
        readme = "[![CI](https://github.com/acme/widgets/actions)] see github.com/other/thing"
        assert extract_github_repo_from_readme(readme) == RepoCandidate("acme", "widgets")

    def test_dot_git_suffix(self):
        assert extract_github_repo_from_readme("git clone https://github.com/acme/widgets.git") == (
            RepoCandidate("acme", "widgets")
        )

    def test_no_link(self):
        assert extract_github_repo_from_readme("# widgets\nNo links here.") is None
        assert extract_github_repo_from_readme(None) is None
        assert extract_github_repo_from_readme({"not": "a string"}) is None

"""Tests for tree path scoring and best-file selection."""

import pytest

from resolution.matcher import (
    normalize_path_for_match,
    pick_best_tree_file,
    rank_tree_files,
    score_path_match,
)
from resolution.models import TreeEntry


def blobs(*paths):
    return [TreeEntry(path=p, type="blob") for p in paths]


class TestNormalizePath:
    """Test path normalization used before scoring."""

    def test_backslashes_leading_dot_and_case(self):
        assert normalize_path_for_match(".\\Src\\\\Button.JSX") == "src/button.jsx"

    def test_leading_slash_and_repeated_slashes(self):
        assert normalize_path_for_match("/a//b///c") == "a/b/c"

    def test_none(self):
        assert normalize_path_for_match(None) == ""


class TestScorePathMatch:
    """Test the base rules and additive bonuses."""

    def test_exact_match_with_aligned_segments(self):
        assert score_path_match("a/b/name", "a/b/name") == 120 + 15

    def test_wanted_plus_extension(self):
        assert score_path_match("a/b/name.jsx", "a/b/name") == 110

    def test_trailing_full_path_with_extension(self):
        assert score_path_match("pkg/a/b/name.jsx", "a/b/name.jsx") == 95 + 15

    def test_trailing_stem_segment(self):
        # "/name" suffix plus one aligned trailing segment
        assert score_path_match("x/name", "a/b/name") == 90 + 5

    def test_same_stem(self):
        assert score_path_match("lib/name.ts", "a/b/name") == 80

    def test_stem_substring(self):
        assert score_path_match("lib/my-name-helper.js", "a/b/name") == 60

    def test_unrelated(self):
        assert score_path_match("lib/other.js", "a/b/name") == 0

    def test_only_first_rule_applies(self):
        # exact equality also "ends with" and shares the stem; not summed
        assert score_path_match("name", "name") == 120 + 5

    def test_extension_and_prefix_bonuses(self):
        src = score_path_match("src/checkout/shipment.jsx", "checkout/shipment", "jsx", "src")
        lib = score_path_match("lib/checkout/shipment.jsx", "checkout/shipment", "jsx", "src")
        assert src - lib == 8
        assert lib == score_path_match("lib/checkout/shipment.jsx", "checkout/shipment") + 20

    def test_aligned_bonus_is_capped(self):
        assert score_path_match("a/b/c/d/e/f", "a/b/c/d/e/f") == 120 + 20

    def test_case_insensitive_and_dot_slash(self):
        assert score_path_match("Components/Button.JSX", "./components/button") == 110

    def test_deterministic(self):
        args = ("src/x/y/z.tsx", "x/y/z", "tsx", "src")
        assert len({score_path_match(*args) for _ in range(5)}) == 1


class TestPickBestTreeFile:
    """Test candidate filtering and selection."""

    @pytest.mark.parametrize("reverse", [False, True])
    def test_exact_path_wins_regardless_of_order(self, reverse):
        paths = [
            "components/card/index.js",
            "lib/button/index.js",
            "components/button/index",
            "components/button/index.test.js",
        ]
        if reverse:
            paths.reverse()
        assert pick_best_tree_file(blobs(*paths), "components/button/index") == "components/button/index"

    def test_wanted_plus_extension_beats_same_stem_elsewhere(self):
        tree = blobs("z/other/name.jsx", "a/b/name.jsx")
        assert pick_best_tree_file(tree, "a/b/name") == "a/b/name.jsx"

    # The "wanted + .ext" rule is a startswith() on the whole path, so
    # x/a/b/name.jsx only reaches the same-stem rule (80) and ties with
    # z/other/name.jsx. Listing order decides; keep it that way.
    def test_equal_scores_keep_listing_order(self):
        tree = blobs("x/a/b/name.jsx", "z/other/name.jsx")
        assert pick_best_tree_file(tree, "a/b/name") == "x/a/b/name.jsx"
        assert pick_best_tree_file(list(reversed(tree)), "a/b/name") == "z/other/name.jsx"

    def test_requested_extension_is_a_hard_filter(self):
        tree = blobs("foo.js", "foo.tsx")
        assert score_path_match("foo.tsx", "foo") > 0
        assert pick_best_tree_file(tree, "foo", requested_ext="ts") is None

    def test_requested_extension_selects_matching_file(self):
        tree = blobs("foo.js", "foo.tsx")
        assert pick_best_tree_file(tree, "foo", requested_ext="tsx") == "foo.tsx"

    def test_source_prefix_scenario(self):
        tree = blobs("lib/checkout/shipment.jsx", "src/checkout/shipment.jsx")
        best = pick_best_tree_file(tree, "checkout/shipment", requested_ext="jsx", source_prefix="src")
        assert best == "src/checkout/shipment.jsx"

    def test_source_prefix_is_only_a_tiebreak(self):
        tree = blobs("src/misc/shipment.jsx", "lib/checkout/shipment.jsx")
        best = pick_best_tree_file(tree, "lib/checkout/shipment", source_prefix="src")
        assert best == "lib/checkout/shipment.jsx"

    def test_non_code_assets_excluded_without_extension(self):
        tree = blobs("assets/logo.png", "assets/logo.svg")
        assert pick_best_tree_file(tree, "assets/logo") is None

    def test_extensionless_files_allowed_without_extension(self):
        assert pick_best_tree_file(blobs("bin/cli", "README.md"), "bin/cli") == "bin/cli"

    def test_directories_are_not_candidates(self):
        tree = [
            TreeEntry(path="components/button", type="tree"),
            TreeEntry(path="components/button.js", type="blob"),
        ]
        assert pick_best_tree_file(tree, "components/button") == "components/button.js"

    def test_empty_wanted_path(self):
        assert pick_best_tree_file(blobs("a.js"), "") is None

    def test_empty_tree(self):
        assert pick_best_tree_file([], "a/b") is None

    def test_original_casing_is_returned(self):
        assert pick_best_tree_file(blobs("Src/Button.JSX"), "src/button") == "Src/Button.JSX"

    def test_rank_drops_non_positive_scores(self):
        ranked = rank_tree_files(blobs("a/name.js", "b/unrelated.js"), "x/name")
        assert [path for path, _ in ranked] == ["a/name.js"]

"""Tests for create-mode destinations, relative imports and reports."""

import os

from output import (
    build_output_file,
    chat_payload,
    create_report,
    decode_content,
    to_relative_import,
    write_output_file,
)
from resolution.models import ResolvedFile

IMPORT_PATH = "@acme/theme/checkout/shipment"


def resolved_file(content=b"<Shipment />", repo_path="src/checkout/shipment.jsx"):
    return ResolvedFile(content=content, repo_path=repo_path, ref="v1.0.0", owner="acme", repo="theme")


class TestBuildOutputFile:
    """Destination rules for create mode."""

    def test_directory_uses_matched_extension(self, tmp_path):
        out = build_output_file(str(tmp_path), "theme/out", IMPORT_PATH, "src/checkout/shipment.jsx")
        assert out == os.path.join(str(tmp_path), "theme", "out", "shipment.jsx")

    def test_requested_extension_wins(self, tmp_path):
        out = build_output_file(str(tmp_path), "theme/out", IMPORT_PATH, "src/checkout/shipment.jsx", ".TSX")
        assert out.endswith(os.path.join("out", "shipment.tsx"))

    def test_output_with_extension_is_the_file(self, tmp_path):
        out = build_output_file(str(tmp_path), '"theme/out/custom.js"', IMPORT_PATH, "src/x.jsx")
        assert out == os.path.join(str(tmp_path), "theme", "out", "custom.js")

    def test_no_output_writes_into_project_root(self, tmp_path):
        out = build_output_file(str(tmp_path), None, IMPORT_PATH, "src/checkout/shipment.jsx")
        assert out == os.path.join(str(tmp_path), "shipment.jsx")

    def test_import_stem_drops_extension(self, tmp_path):
        out = build_output_file(str(tmp_path), "out", "pkg/lib/helpers.js", "lib/helpers.ts")
        assert os.path.basename(out) == "helpers.ts"

    def test_extensionless_match(self, tmp_path):
        out = build_output_file(str(tmp_path), "out", "pkg/bin/cli", "bin/cli")
        assert os.path.basename(out) == "cli"


class TestRelativeImport:
    def test_sibling_directory(self):
        assert to_relative_import("/p/theme/a/checkout.jsx", "/p/theme/out/shipment.jsx") == (
            "../out/shipment.jsx"
        )

    def test_same_directory_gets_dot_prefix(self):
        assert to_relative_import("/p/theme/a.jsx", "/p/theme/b.jsx") == "./b.jsx"


class TestReports:
    """Chat payload and create report shapes."""

    def test_chat_payload(self):
        payload = chat_payload(resolved_file(), "@acme/theme", IMPORT_PATH)
        assert payload == {
            "success": True,
            "content": "<Shipment />",
            "repoPath": "src/checkout/shipment.jsx",
            "ref": "v1.0.0",
            "repo": "acme/theme",
            "packageName": "@acme/theme",
            "importPath": IMPORT_PATH,
        }

    def test_decode_replaces_invalid_utf8(self):
        assert decode_content(b"ok\xff") == "ok�"

    def test_create_report_with_call_path(self, tmp_path):
        output_file = os.path.join(str(tmp_path), "theme", "out", "shipment.jsx")
        report = create_report(
            resolved_file(),
            str(tmp_path),
            output_file,
            "@acme/theme",
            IMPORT_PATH,
            call_path="theme/checkout/checkout.jsx",
        )
        assert report["mode"] == "create"
        assert report["outputFile"] == "theme/out/shipment.jsx"
        assert report["bytes"] == len(b"<Shipment />")
        assert report["source"] == "github"
        assert report["suggestedLocalImport"] == "../out/shipment.jsx"
        assert report["callPath"] == "theme/checkout/checkout.jsx"

    def test_create_report_without_call_path(self, tmp_path):
        report = create_report(
            resolved_file(), str(tmp_path), os.path.join(str(tmp_path), "a.jsx"), "@acme/theme", IMPORT_PATH
        )
        assert "suggestedLocalImport" not in report
        assert "callPath" not in report


def test_write_output_file_creates_directories(tmp_path):
    target = tmp_path / "deep" / "er" / "file.jsx"
    write_output_file(str(target), b"\xef\xbb\xbfbody")
    assert target.read_bytes() == b"\xef\xbb\xbfbody"

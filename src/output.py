"""Output helpers: chat payloads, create-mode file placement and reports."""

from __future__ import annotations

import json
import os
import posixpath
import re
from typing import Any, Dict, Optional

from resolution.import_path import normalize_extension, strip_quotes
from resolution.models import ResolvedFile

_EXTENSION_RE = re.compile(r"\.[^.]+$")


def to_posix(path: Optional[str]) -> str:
    return str(path or "").replace("\\", "/")


def build_output_file(
    project_root: str,
    output_path: Optional[str],
    import_path: str,
    resolved_repo_path: str,
    ext: Optional[str] = None,
) -> str:
    """Absolute destination for create mode.

    ``output_path`` with an extension is used as the file itself; otherwise it
    is a directory receiving ``<import stem>.<ext>``, where ext is the
    requested one or the matched file's own.
    """
    cleaned = strip_quotes(output_path)
    output_base = os.path.abspath(os.path.join(project_root, cleaned)) if cleaned else project_root

    if os.path.splitext(output_base)[1]:
        return output_base

    final_ext = normalize_extension(ext) or normalize_extension(
        posixpath.splitext(to_posix(resolved_repo_path))[1]
    )
    file_stem = _EXTENSION_RE.sub("", posixpath.basename(to_posix(import_path)))
    file_name = f"{file_stem}.{final_ext}" if final_ext else file_stem
    return os.path.join(output_base, file_name)


def to_relative_import(from_file_abs: str, to_file_abs: str) -> str:
    """Relative import specifier from one file to another, always starting with '.'."""
    rel = to_posix(os.path.relpath(to_file_abs, os.path.dirname(from_file_abs)))
    return rel if rel.startswith(".") else f"./{rel}"


def decode_content(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


def chat_payload(resolved: ResolvedFile, package_name: str, import_path: str) -> Dict[str, Any]:
    return {
        "success": True,
        "content": decode_content(resolved.content),
        "repoPath": resolved.repo_path,
        "ref": resolved.ref,
        "repo": resolved.slug,
        "packageName": package_name,
        "importPath": import_path,
    }


def write_output_file(output_file: str, content: bytes) -> None:
    """Write content, creating parent directories. Raises OSError on failure."""
    os.makedirs(os.path.dirname(output_file) or ".", exist_ok=True)
    with open(output_file, "wb") as f:
        f.write(content)


def create_report(
    resolved: ResolvedFile,
    project_root: str,
    output_file: str,
    package_name: str,
    import_path: str,
    call_path: Optional[str] = None,
) -> Dict[str, Any]:
    """JSON report printed after create mode wrote the file."""
    report: Dict[str, Any] = {
        "mode": "create",
        "packageName": package_name,
        "importPath": import_path,
        "repoPath": resolved.repo_path,
        "ref": resolved.ref,
        "source": resolved.source,
        "repo": resolved.slug,
        "outputFile": to_posix(os.path.relpath(output_file, project_root)),
        "bytes": len(resolved.content),
    }
    if call_path:
        caller_abs = os.path.abspath(os.path.join(project_root, call_path))
        report["suggestedLocalImport"] = to_relative_import(caller_abs, output_file)
        report["callPath"] = to_posix(call_path)
    return report


def dumps_report(report: Dict[str, Any]) -> str:
    return json.dumps(report, indent=2) + "\n"

"""Import-path parsing and requested-extension validation.

Everything here runs before any network activity, so malformed input fails
fast with an actionable message.
"""
from __future__ import annotations

import re
from typing import Optional

from constants import Constants
from common.errors import InputValidationError
from resolution.models import PackageReference

_QUOTES_RE = re.compile(r"^['\"]|['\"]$")
_LEADING_DOT_RE = re.compile(r"^\.")


def strip_quotes(value) -> str:
    """Trim whitespace and one pair of surrounding quotes."""
    text = str(value or "").strip()
    return _QUOTES_RE.sub("", text)


def normalize_extension(ext) -> Optional[str]:
    """Lowercase an extension and drop its leading dot; empty -> None."""
    if not ext:
        return None
    cleaned = _LEADING_DOT_RE.sub("", str(ext)).lower().strip()
    return cleaned or None


def validate_requested_extension(requested_ext: Optional[str]) -> None:
    """Reject extensions outside the code allow-list.

    Raises:
        InputValidationError: If the extension is set and not allowed.
    """
    if requested_ext and requested_ext not in Constants.CODE_EXTENSIONS:
        raise InputValidationError(
            f'Unsupported extension "{requested_ext}". '
            f"Use one of: {', '.join(Constants.CODE_EXTENSIONS)}"
        )


def parse_import_path(import_path: str) -> PackageReference:
    """Split ``@scope/pkg/sub/path`` or ``pkg/sub/path`` into name and path.

    Args:
        import_path: Raw import-style string, optionally quoted.

    Returns:
        PackageReference with the package name and the in-package path parts.

    Raises:
        InputValidationError: When no in-package path remains after the name.
    """
    trimmed = strip_quotes(import_path)
    parts = [part for part in trimmed.split("/") if part]
    if not parts:
        raise InputValidationError(
            'Missing import path. Expected "<package>/<path>" or "@scope/package/<path>".'
        )

    if trimmed.startswith("@"):
        if len(parts) < 3:
            raise InputValidationError(f'Invalid import path "{trimmed}".')
        name = f"{parts[0]}/{parts[1]}"
        rest = parts[2:]
    else:
        name = parts[0]
        rest = parts[1:]

    if not rest:
        raise InputValidationError(f'Invalid import path "{trimmed}".')
    return PackageReference(name=name, path_parts=tuple(rest), raw=trimmed)

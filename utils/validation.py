"""Path validation for image selections and atlas output files."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Union
from urllib.parse import urlparse


def _has_url_scheme(path_str: str) -> bool:
    """Return True if *path_str* looks like a URL with a scheme.

    Single-letter schemes such as ``"C"`` are treated as drive letters on
    Windows and therefore ignored.
    """
    parsed = urlparse(path_str)
    return bool(parsed.scheme and len(parsed.scheme) > 1)


def _normalise_exts(allowed_exts: Iterable[str]) -> set[str]:
    return {f".{ext.lower().lstrip('.')}" for ext in allowed_exts}


def validate_image_path(path: Union[str, Path], allowed_exts: Iterable[str]) -> Path:
    """Validate a selected image *path* and return it resolved.

    Rejects URLs, missing files, directories and extensions outside
    *allowed_exts* (given with or without the leading dot).
    """
    path_str = str(path)
    if _has_url_scheme(path_str):
        raise ValueError("URLs are not allowed")

    p = Path(path_str).expanduser()
    try:
        p = p.resolve(strict=True)
    except FileNotFoundError as exc:
        raise ValueError(f"File does not exist: {path_str}") from exc

    if not p.is_file():
        raise ValueError(f"Not a file: {path_str}")

    if p.suffix.lower() not in _normalise_exts(allowed_exts):
        raise ValueError(f"Unsupported file extension: {p.suffix or '(none)'}")

    return p


def validate_output_path(
    path: Union[str, Path],
    allowed_exts: Iterable[str],
    *,
    default_ext: str | None = None,
) -> Path:
    """Validate the destination *path* of a saved atlas.

    When the path has no suffix and *default_ext* is given, the extension is
    appended.  The parent directory must already exist.
    """
    path_str = str(path)
    if _has_url_scheme(path_str):
        raise ValueError("URLs are not allowed")

    p = Path(path_str).expanduser()
    if not p.suffix and default_ext:
        p = p.with_name(f"{p.name}.{default_ext.lstrip('.')}")
    p = p.resolve()

    if not p.parent.exists():
        raise ValueError(f"Directory does not exist: {p.parent}")

    if p.suffix.lower() not in _normalise_exts(allowed_exts):
        raise ValueError(f"Unsupported file extension: {p.suffix}")

    return p

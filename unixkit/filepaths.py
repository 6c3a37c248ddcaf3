"""Small helpers for working with POSIX file paths."""

from __future__ import annotations

import os
from typing import Optional


def join_paths(path1: str, path2: str) -> str:
    """Join two path components with a single '/' between them."""
    if path1 and not path1.endswith("/"):
        return f"{path1}/{path2}"
    return path1 + path2


def append_filename(directory: str, filename: str) -> str:
    """Append ``filename`` to ``directory``."""
    return join_paths(directory, filename)


def get_parent_directory(filepath: str) -> str:
    """Return the directory part of ``filepath``, as POSIX dirname does."""
    stripped = filepath.rstrip("/")
    if not stripped:
        return "/" if filepath else "."
    slash = stripped.rfind("/")
    if slash == -1:
        return "."
    parent = stripped[:slash].rstrip("/")
    return parent or "/"


def get_filename(filepath: str) -> str:
    """Return the last component of ``filepath``, as POSIX basename does."""
    if not filepath:
        return "."
    stripped = filepath.rstrip("/")
    if not stripped:
        return "/"
    return stripped[stripped.rfind("/") + 1:]


def normalize_path(path: str) -> Optional[str]:
    """Resolve '.', '..' and links into an absolute path; None if it does not exist."""
    try:
        return os.path.realpath(path, strict=True)
    except OSError:
        return None


def is_absolute_path(path: str) -> bool:
    """True if ``path`` starts at the root."""
    return path.startswith("/")


def get_absolute_path(path: str) -> Optional[str]:
    """Return the absolute, resolved form of an existing ``path``, else None."""
    return normalize_path(path)


def path_exists(path: str) -> bool:
    """True if anything exists at ``path``."""
    return os.access(path, os.F_OK)


def file_exists(path: str) -> bool:
    """True if ``path`` is a regular file."""
    return os.path.isfile(path)


def directory_exists(path: str) -> bool:
    """True if ``path`` is a directory."""
    return os.path.isdir(path)


def get_file_extension(filepath: str) -> Optional[str]:
    """Return the text after the last '.', or None.

    A dot at the very start or the very end of ``filepath`` gives no
    extension.
    """
    dot = filepath.rfind(".")
    if dot > 0 and dot < len(filepath) - 1:
        return filepath[dot + 1:]
    return None
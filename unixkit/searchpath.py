"""Find a file in a colon-separated list of directories."""

from __future__ import annotations

from typing import Optional

from unixkit.filepaths import append_filename, path_exists

COLON = ":"


def searchpath(pathlist: str, file: str) -> Optional[str]:
    """Return the first ``directory/file`` that exists, or None.

    Empty entries in ``pathlist`` are skipped.
    """
    for directory in pathlist.split(COLON):
        if not directory:
            continue
        candidate = append_filename(directory, file)
        if path_exists(candidate):
            return candidate
    return None
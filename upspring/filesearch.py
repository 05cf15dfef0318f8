"""Listing files in a directory tree."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List

__all__ = ["find_files"]


def find_files(path, predicate: Callable[[Path], bool], recursive: bool = False) -> List[Path]:
    """Regular files under ``path`` that satisfy ``predicate``.

    Returns an empty list when ``path`` is not a directory. Subdirectories
    are searched only when ``recursive`` is true.
    """
    root = Path(path)
    if not root.is_dir():
        return []
    found: List[Path] = []
    for entry in sorted(root.iterdir()):
        if entry.is_dir():
            if recursive:
                found.extend(find_files(entry, predicate, True))
            continue
        if entry.is_file() and predicate(entry):
            found.append(entry)
    return found
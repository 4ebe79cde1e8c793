"""Discovery engine for FileCopy Toolkit.

Walks a source folder and returns the absolute paths of the files to
transfer.  File names and folder names are filtered independently: the
file filter decides which files are kept, the folder filter (recursive
mode only) decides which subfolders are descended into at all.

The traversal is an explicit depth-first recursion rather than
``os.walk`` so that pruning a folder never lists its contents.  Entries of
each folder are visited in name order.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Pattern

ErrorCallback = Callable[[Path, OSError], None]


def matches(pattern: Optional[Pattern[str]], name: str) -> bool:
    """Return ``True`` if ``name`` matches ``pattern`` (no pattern matches all)."""
    return pattern is None or pattern.search(name) is not None


def _list_dir(folder: Path) -> List[Path]:
    return sorted(folder.iterdir(), key=lambda p: p.name)


def _collect(
    folder: Path,
    recursive: bool,
    file_filter: Optional[Pattern[str]],
    folder_filter: Optional[Pattern[str]],
    on_error: Optional[ErrorCallback],
    files: List[Path],
) -> None:
    try:
        entries = _list_dir(folder)
    except OSError as exc:
        if on_error is None:
            raise
        on_error(folder, exc)
        return

    for entry in entries:
        # is_dir() follows symlinks, so a link to a folder is a folder
        if entry.is_dir():
            if not recursive or not matches(folder_filter, entry.name):
                continue
            _collect(entry, recursive, file_filter, folder_filter, on_error, files)
        elif matches(file_filter, entry.name):
            files.append(entry)


def select_files(
    root: Path,
    recursive: bool = False,
    file_filter: Optional[Pattern[str]] = None,
    folder_filter: Optional[Pattern[str]] = None,
    on_error: Optional[ErrorCallback] = None,
) -> List[Path]:
    """Return the files under ``root`` selected by the given filters.

    Args:
        root: Folder to search.
        recursive: Descend into subfolders.  When ``False`` subfolders are
            skipped entirely and ``folder_filter`` is ignored.
        file_filter: Regular expression searched in each file's base name.
        folder_filter: Regular expression searched in each subfolder's base
            name; non-matching subfolders are pruned with their contents.
        on_error: Called with ``(folder, exc)`` when a folder cannot be
            listed; the folder is then skipped.  Without it the
            ``OSError`` propagates.

    Returns:
        Absolute file paths in depth-first order.  The list is built eagerly;
        call again to pick up later filesystem changes.
    """
    root = Path(root).absolute()
    files: List[Path] = []
    _collect(root, recursive, file_filter, folder_filter, on_error, files)
    return files

"""Validation module for FileCopy Toolkit.

Before any file is selected, the source root must exist and the
destination root must exist or be creatable.  Failures here abort the
whole run.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import DestinationCreateFailed, DestinationNotFound, SourceNotFound

logger = logging.getLogger(__name__)


def ensure_source(path: Path) -> Path:
    """Check that the source root exists and is a directory.

    Returns the absolute source path.  Raises ``SourceNotFound`` otherwise.
    """
    path = Path(path).absolute()
    if not path.exists():
        raise SourceNotFound(f'Source folder does not exist: {path}', path)
    if not path.is_dir():
        raise SourceNotFound(f'Source is not a folder: {path}', path)
    return path


def ensure_destination(path: Path, create_if_missing: bool = False) -> Path:
    """Check that the destination root exists, creating it if allowed.

    Args:
        path: The destination root.
        create_if_missing: Create the folder and any missing ancestors
            instead of failing.

    Returns:
        The absolute destination path.

    Raises:
        DestinationNotFound: The folder is missing and may not be created,
            or the path exists but is not a folder.
        DestinationCreateFailed: Creating the folder failed.
    """
    path = Path(path).absolute()
    if path.is_dir():
        return path
    if path.exists():
        raise DestinationNotFound(f'Destination is not a folder: {path}', path)
    if not create_if_missing:
        raise DestinationNotFound(f'Destination folder does not exist: {path}', path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DestinationCreateFailed(f'Could not create destination folder {path}: {exc}', path) from exc
    logger.debug('Created destination folder %s', path)
    return path

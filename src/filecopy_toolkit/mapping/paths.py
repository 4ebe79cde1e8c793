"""Destination path mapping for FileCopy Toolkit.

Computes where each selected source file lands.  With
``create_destination_folder`` the source-relative folder layout is
mirrored under the destination root; otherwise every file is placed
directly in the destination root.  An optional rename callable maps the
base name.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Callable, Optional

from ..config_loader import TransferConfig
from ..errors import DestinationCreateFailed, RenameError

logger = logging.getLogger(__name__)

RenameFunc = Callable[[str], str]


def _rename(name: str, rename: RenameFunc) -> str:
    try:
        new_name = rename(name)
    except Exception as exc:
        raise RenameError(f'Rename function failed for {name!r}: {exc}') from exc
    if not isinstance(new_name, str) or new_name in ('', '.', '..'):
        raise RenameError(f'Rename function returned an invalid name for {name!r}: {new_name!r}')
    separators = {os.sep, '/'} | ({os.altsep} if os.altsep else set())
    if any(sep in new_name for sep in separators):
        raise RenameError(f'Rename function returned a path, not a file name: {new_name!r}')
    return new_name


def map_destination(
    source_file: Path,
    config: TransferConfig,
    rename: Optional[RenameFunc] = None,
    create_dirs: bool = True,
) -> Path:
    """Return the destination path of ``source_file``.

    Args:
        source_file: Absolute path of a file under ``config.source``.
        config: The transfer configuration.
        rename: Optional callable mapping the base name to a new base name.
        create_dirs: Create missing mirrored folders.  Pass ``False`` to
            compute the path without touching the filesystem.

    Raises:
        RenameError: ``rename`` failed or returned something that is not a
            plain file name.
        DestinationCreateFailed: A mirrored folder could not be created.
    """
    name = source_file.name
    if rename is not None:
        name = _rename(name, rename)

    destination_root = config.destination.absolute()
    if config.create_destination_folder:
        relative_dir = source_file.parent.relative_to(config.source.absolute())
        folder = destination_root / relative_dir
        if create_dirs and not folder.is_dir():
            try:
                folder.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise DestinationCreateFailed(f'Could not create folder {folder}: {exc}', folder) from exc
            logger.debug('Created folder %s', folder)
    else:
        folder = destination_root
    return folder / name


def make_renamer(
    prefix: Optional[str] = None,
    suffix: Optional[str] = None,
    pattern: Optional[str] = None,
    replacement: str = '',
) -> Optional[RenameFunc]:
    """Build a rename callable from simple options.

    ``pattern`` is a regular expression substituted with ``replacement``
    first, then ``prefix`` is prepended and ``suffix`` is inserted before
    the file extension.  Returns ``None`` when no option is given.
    """
    if not (prefix or suffix or pattern):
        return None
    regex = re.compile(pattern) if pattern else None

    def rename(name: str) -> str:
        if regex is not None:
            name = regex.sub(replacement, name)
        if suffix:
            stem, ext = os.path.splitext(name)
            name = f'{stem}{suffix}{ext}'
        if prefix:
            name = f'{prefix}{name}'
        return name

    return rename

"""Transfer engine for FileCopy Toolkit.

Single-file copy, delete and move primitives.  Copies are plain byte
copies; file metadata is only carried over to the extent ``shutil``
does so by default.  All ``OSError``s are translated into the
``TransferError`` hierarchy so callers can report them per file.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from ..errors import AlreadyExists, IOFailure

logger = logging.getLogger(__name__)

BUFFER_SIZE = 1024 * 1024


def _copy_exclusive(src: Path, dst: Path) -> None:
    with src.open('rb') as fsrc:
        # 'xb' fails atomically if dst exists, so an existing file is never opened for writing
        try:
            fdst = dst.open('xb')
        except FileExistsError as exc:
            raise AlreadyExists(f'Destination file already exists: {dst}', dst) from exc
        with fdst:
            try:
                shutil.copyfileobj(fsrc, fdst, BUFFER_SIZE)
            except OSError:
                fdst.close()
                dst.unlink(missing_ok=True)
                raise


def copy_file(src: Path, dst: Path, overwrite: bool = False) -> Path:
    """Copy the bytes of ``src`` to ``dst``.

    Args:
        src: Source file path.
        dst: Destination file path.  Its folder must already exist.
        overwrite: Replace an existing ``dst``.  When ``False`` an existing
            ``dst`` is left untouched and ``AlreadyExists`` is raised.

    Returns:
        The destination path.

    Raises:
        AlreadyExists: ``dst`` exists and ``overwrite`` is ``False``.
        IOFailure: Reading or writing failed.
    """
    try:
        if overwrite:
            shutil.copyfile(src, dst)
        else:
            _copy_exclusive(src, dst)
    except OSError as exc:
        raise IOFailure(f'Could not copy {src} to {dst}: {exc}', src) from exc
    logger.debug('Copied %s -> %s', src, dst)
    return dst


def delete_file(src: Path) -> None:
    """Remove ``src``, raising ``IOFailure`` if that is not possible."""
    try:
        src.unlink()
    except OSError as exc:
        raise IOFailure(f'Could not delete {src}: {exc}', src) from exc
    logger.debug('Deleted %s', src)


def move_file(src: Path, dst: Path, overwrite: bool = False) -> Path:
    """Copy ``src`` to ``dst`` and delete ``src`` once the copy succeeded."""
    copy_file(src, dst, overwrite=overwrite)
    delete_file(src)
    return dst

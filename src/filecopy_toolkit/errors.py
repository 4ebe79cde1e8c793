"""Error types for FileCopy Toolkit.

Every failure the transfer engine can report derives from
``TransferError``.  The ``code`` attribute is a short, stable identifier
that ends up in ``Outcome.code`` and in the CSV/JSON logs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class TransferError(Exception):
    code = 'transfer_error'

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class SourceNotFound(TransferError):
    code = 'source_not_found'


class DestinationNotFound(TransferError):
    code = 'destination_not_found'


class DestinationCreateFailed(TransferError):
    code = 'destination_create_failed'


class AlreadyExists(TransferError):
    code = 'already_exists'


class IOFailure(TransferError):
    code = 'io_failure'


class RenameError(TransferError):
    code = 'rename_error'


class ConfigError(ValueError):
    """Raised for missing or malformed configuration values."""

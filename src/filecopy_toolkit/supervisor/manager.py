"""Run supervisor for FileCopy Toolkit.

``FileTransfer`` drives one copy or move run: validate the roots, select
the files, then map and transfer them one at a time.  Every result is
reported as an ``Outcome`` to the handlers registered on the instance,
synchronously and in order.

Validation failures end the run before anything is selected.  Failures
for a single file are reported and the run moves on to the next file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from ..config_loader import TransferConfig
from ..discovery.engine import select_files
from ..errors import IOFailure, TransferError
from ..mapping.paths import RenameFunc, map_destination
from ..transfer.engine import copy_file, delete_file
from ..transfer.outcomes import Outcome, RunState, TransferReport
from ..validation.engine import ensure_destination, ensure_source

logger = logging.getLogger(__name__)

OutcomeHandler = Callable[[Outcome], None]


class FileTransfer:
    """Copy or move the files selected by a ``TransferConfig``."""

    def __init__(self, config: TransferConfig, handlers: Iterable[OutcomeHandler] = ()):
        self.config = config
        self._handlers: List[OutcomeHandler] = list(handlers)
        self._state = RunState.IDLE
        self._report: Optional[TransferReport] = None

    @property
    def state(self) -> RunState:
        return self._state

    def subscribe(self, handler: OutcomeHandler) -> 'FileTransfer':
        """Register ``handler`` to receive every outcome.  Returns ``self``."""
        self._handlers.append(handler)
        return self

    def unsubscribe(self, handler: OutcomeHandler) -> None:
        self._handlers.remove(handler)

    def copy_files(self, rename: Optional[RenameFunc] = None) -> TransferReport:
        """Copy every selected file to its destination."""
        return self._run('copy', rename, move=False)

    def move_files(self, rename: Optional[RenameFunc] = None) -> TransferReport:
        """Copy every selected file, deleting each source once its copy succeeded."""
        return self._run('move', rename, move=True)

    def plan(self, rename: Optional[RenameFunc] = None) -> List[Tuple[Path, Path]]:
        """Return ``(source, destination)`` pairs without touching the filesystem.

        Raises ``TransferError`` for a missing source or a bad rename.
        """
        source = ensure_source(self.config.source)
        files = select_files(
            source,
            recursive=self.config.recursive,
            file_filter=self.config.file_glob,
            folder_filter=self.config.folder_glob,
        )
        return [(f, map_destination(f, self.config, rename, create_dirs=False)) for f in files]

    # -- internals ---------------------------------------------------------

    def _current_report(self) -> TransferReport:
        if self._report is None:
            raise RuntimeError('No transfer run in progress')
        return self._report

    def _emit(self, outcome: Outcome) -> None:
        self._current_report().outcomes.append(outcome)
        if outcome.ok:
            logger.info(outcome.message)
        else:
            logger.warning('%s (%s)', outcome.message, outcome.code)
        for handler in list(self._handlers):
            handler(outcome)

    def _fail(self, exc: TransferError, source: Optional[Path] = None) -> None:
        self._emit(Outcome.failed(str(exc), exc.code, source))

    def _set_state(self, state: RunState) -> None:
        self._state = state
        self._current_report().state = state

    def _on_select_error(self, folder: Path, exc: OSError) -> None:
        self._fail(IOFailure(f'Could not list folder {folder}: {exc}', folder), folder)

    def _run(self, operation: str, rename: Optional[RenameFunc], move: bool) -> TransferReport:
        self._report = report = TransferReport(operation)
        cfg = self.config

        self._set_state(RunState.VALIDATING)
        try:
            source = ensure_source(cfg.source)
            ensure_destination(cfg.destination, cfg.create_destination_folder)
        except TransferError as exc:
            self._fail(exc)
            self._set_state(RunState.FAILED)
            return report

        self._set_state(RunState.SELECTING)
        files = select_files(
            source,
            recursive=cfg.recursive,
            file_filter=cfg.file_glob,
            folder_filter=cfg.folder_glob,
            on_error=self._on_select_error,
        )
        logger.debug('Selected %d file(s) under %s', len(files), source)

        self._set_state(RunState.TRANSFERRING)
        for src in files:
            self._transfer_one(src, rename, move)

        self._set_state(RunState.DONE)
        return report

    def _transfer_one(self, src: Path, rename: Optional[RenameFunc], move: bool) -> None:
        try:
            dst = map_destination(src, self.config, rename)
            copy_file(src, dst, overwrite=self.config.overwrite)
        except TransferError as exc:
            self._fail(exc, src)
            return
        self._emit(Outcome.copied(src, dst))

        if not move:
            return
        try:
            delete_file(src)
        except TransferError as exc:
            self._fail(exc, src)
            return
        self._emit(Outcome.deleted(src))

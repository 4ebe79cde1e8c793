"""Logging utilities for FileCopy Toolkit.

Provides simple helpers to write CSV and JSON logs of transfer outcomes.
The ``CSVLogger`` writes each record immediately, while ``JSONLogger``
stores records in a list and writes them to disk when flushed.  Both are
callable so they can be passed straight to ``FileTransfer.subscribe``.

``setup_console_logging`` routes the package's diagnostic log messages
through ``rich``.
"""

from __future__ import annotations

import csv
import json
import logging
import time
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.logging import RichHandler

from ..transfer.outcomes import Outcome

FIELDNAMES = ['run_id', 'timestamp', 'operation', 'kind', 'src_path', 'dst_path', 'code', 'message']


def new_run_id() -> str:
    return uuid.uuid4().hex


def _record(outcome: Outcome, run_id: str, operation: str) -> Dict[str, Any]:
    data = outcome.to_dict()
    return {
        'run_id': run_id,
        'timestamp': time.time(),
        'operation': operation,
        'kind': data['kind'],
        'src_path': data['source'],
        'dst_path': data['destination'],
        'code': data['code'],
        'message': data['message'],
    }


class CSVLogger:
    def __init__(self, path: Path, operation: str, run_id: Optional[str] = None):
        self.path = path
        self.operation = operation
        self.run_id = run_id or new_run_id()
        self.file = path.open('w', newline='', encoding='utf-8')
        self.writer = csv.DictWriter(self.file, fieldnames=FIELDNAMES)
        self.writer.writeheader()

    def log_outcome(self, outcome: Outcome) -> None:
        self.writer.writerow(_record(outcome, self.run_id, self.operation))
        self.file.flush()

    __call__ = log_outcome

    def close(self) -> None:
        self.file.close()


class JSONLogger:
    def __init__(self, path: Path, operation: str, run_id: Optional[str] = None):
        self.path = path
        self.operation = operation
        self.run_id = run_id or new_run_id()
        self.records: List[Dict[str, Any]] = []

    def add_record(self, outcome: Outcome) -> None:
        self.records.append(_record(outcome, self.run_id, self.operation))

    __call__ = add_record

    def flush(self) -> None:
        with self.path.open('w', encoding='utf-8') as f:
            json.dump(self.records, f, indent=2)


def setup_console_logging(verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """Attach a ``RichHandler`` to the ``filecopy_toolkit`` logger.

    ``verbose`` lowers the level to DEBUG; the default is WARNING.  Calling
    this again replaces the previously installed handler.
    """
    logger = logging.getLogger('filecopy_toolkit')
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(console=console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger

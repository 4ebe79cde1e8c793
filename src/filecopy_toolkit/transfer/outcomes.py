"""Outcome records emitted by a transfer run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


class OutcomeKind(Enum):
    COPIED = 'copied'
    DELETED = 'deleted'
    FAILED = 'failed'


class RunState(Enum):
    IDLE = 'idle'
    VALIDATING = 'validating'
    SELECTING = 'selecting'
    TRANSFERRING = 'transferring'
    DONE = 'done'
    FAILED = 'failed'


@dataclass(frozen=True)
class Outcome:
    """Result of one file operation (or of a failed validation)."""

    kind: OutcomeKind
    source: Optional[Path] = None
    destination: Optional[Path] = None
    message: str = ''
    code: str = ''

    @classmethod
    def copied(cls, source: Path, destination: Path) -> 'Outcome':
        return cls(OutcomeKind.COPIED, source, destination, f'Copied {source} to {destination}')

    @classmethod
    def deleted(cls, source: Path) -> 'Outcome':
        return cls(OutcomeKind.DELETED, source, None, f'Deleted {source}')

    @classmethod
    def failed(cls, message: str, code: str, source: Optional[Path] = None) -> 'Outcome':
        return cls(OutcomeKind.FAILED, source, None, message, code)

    @property
    def ok(self) -> bool:
        return self.kind is not OutcomeKind.FAILED

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'source': str(self.source) if self.source else '',
            'destination': str(self.destination) if self.destination else '',
            'code': self.code,
            'message': self.message,
        }


@dataclass
class TransferReport:
    """All outcomes of one ``copy_files``/``move_files`` call, in order."""

    operation: str
    outcomes: List[Outcome] = field(default_factory=list)
    state: RunState = RunState.IDLE

    def _of_kind(self, kind: OutcomeKind) -> List[Outcome]:
        return [o for o in self.outcomes if o.kind is kind]

    @property
    def copied(self) -> List[Outcome]:
        return self._of_kind(OutcomeKind.COPIED)

    @property
    def deleted(self) -> List[Outcome]:
        return self._of_kind(OutcomeKind.DELETED)

    @property
    def failed(self) -> List[Outcome]:
        return self._of_kind(OutcomeKind.FAILED)

    @property
    def ok(self) -> bool:
        """``True`` if the run completed without any failure."""
        return self.state is RunState.DONE and not self.failed

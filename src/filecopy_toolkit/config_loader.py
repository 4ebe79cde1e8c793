"""Configuration for FileCopy Toolkit.

Transfers are described by a ``TransferConfig``.  It can be built directly,
from a plain mapping (``config_from_mapping``) or from a YAML file loaded
with ``load_config``.  Keys are accepted both in camelCase
(``fileGlob``, ``createDestinationFolder``) and snake_case.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Pattern, Union

import yaml

from .errors import ConfigError

PatternLike = Union[str, Pattern[str], None]

_ALIASES = {
    'fileGlob': 'file_glob',
    'folderGlob': 'folder_glob',
    'createDestinationFolder': 'create_destination_folder',
}
_KNOWN_KEYS = {
    'source',
    'destination',
    'file_glob',
    'folder_glob',
    'recursive',
    'overwrite',
    'create_destination_folder',
    'rename',
}
_RENAME_KEYS = {'prefix', 'suffix', 'pattern', 'replacement'}


def compile_pattern(value: PatternLike, key: str = 'pattern') -> Optional[Pattern[str]]:
    """Compile ``value`` into a regular expression, passing through ``None``
    and already compiled patterns."""
    if value is None or isinstance(value, re.Pattern):
        return value
    if not isinstance(value, str):
        raise ConfigError(f'{key} must be a string, got {type(value).__name__}')
    try:
        return re.compile(value)
    except re.error as exc:
        raise ConfigError(f'Invalid regular expression for {key}: {value!r} ({exc})') from exc


@dataclass(frozen=True)
class TransferConfig:
    """Immutable description of one copy or move run.

    ``file_glob`` and ``folder_glob`` are regular expressions searched in
    base names.  ``folder_glob`` is only consulted in recursive mode.
    """

    source: Path
    destination: Path
    file_glob: Optional[Pattern[str]]
    recursive: bool = False
    folder_glob: Optional[Pattern[str]] = None
    overwrite: bool = False
    create_destination_folder: bool = False
    rename: Mapping[str, str] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, 'source', Path(self.source))
        object.__setattr__(self, 'destination', Path(self.destination))
        object.__setattr__(self, 'file_glob', compile_pattern(self.file_glob, 'file_glob'))
        object.__setattr__(self, 'folder_glob', compile_pattern(self.folder_glob, 'folder_glob'))
        object.__setattr__(self, 'rename', MappingProxyType(dict(self.rename)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source': str(self.source),
            'destination': str(self.destination),
            'fileGlob': self.file_glob.pattern if self.file_glob else None,
            'recursive': self.recursive,
            'folderGlob': self.folder_glob.pattern if self.folder_glob else None,
            'overwrite': self.overwrite,
            'createDestinationFolder': self.create_destination_folder,
            'rename': dict(self.rename),
        }


def load_config(path: Path) -> Dict[str, Any]:
    """Load a YAML configuration file into a dictionary.

    An empty file yields an empty dictionary.  Anything other than a
    mapping at the top level is rejected with ``ConfigError``.
    """
    with path.open('r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f'Could not parse {path}: {exc}') from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f'Configuration in {path} must be a mapping')
    return normalize_keys(data)


def normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate camelCase option names to their snake_case form."""
    normalized: Dict[str, Any] = {}
    for key, value in data.items():
        normalized[_ALIASES.get(key, key)] = value
    return normalized


def _as_bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigError(f'{key} must be a boolean, got {value!r}')
    return value


def config_from_mapping(data: Mapping[str, Any]) -> TransferConfig:
    """Validate ``data`` and build a ``TransferConfig`` from it."""
    data = normalize_keys(data)
    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        raise ConfigError(f'Unknown configuration keys: {", ".join(sorted(unknown))}')
    for key in ('source', 'destination', 'file_glob'):
        if data.get(key) in (None, ''):
            raise ConfigError(f'Missing required configuration value: {key}')

    rename = data.get('rename') or {}
    if not isinstance(rename, dict):
        raise ConfigError('rename must be a mapping')
    bad = set(rename) - _RENAME_KEYS
    if bad:
        raise ConfigError(f'Unknown rename options: {", ".join(sorted(bad))}')

    return TransferConfig(
        source=Path(str(data['source'])).expanduser(),
        destination=Path(str(data['destination'])).expanduser(),
        file_glob=compile_pattern(data['file_glob'], 'file_glob'),
        recursive=_as_bool(data, 'recursive'),
        folder_glob=compile_pattern(data.get('folder_glob'), 'folder_glob'),
        overwrite=_as_bool(data, 'overwrite'),
        create_destination_folder=_as_bool(data, 'create_destination_folder'),
        rename={k: str(v) for k, v in rename.items() if v is not None},
    )

"""Command‑line interface for FileCopy Toolkit.

``copy`` and ``move`` run a transfer described by a YAML configuration
file and/or command-line options, printing each outcome as it happens and
a summary table at the end.  ``scan`` previews where files would go, and
``show-config`` prints the effective configuration.
"""

from __future__ import annotations

import functools
import json
import re
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config_loader import TransferConfig, config_from_mapping, load_config
from ..errors import ConfigError, TransferError
from ..logging.logger import CSVLogger, JSONLogger, setup_console_logging
from ..mapping.paths import RenameFunc, make_renamer
from ..supervisor.manager import FileTransfer
from ..transfer.outcomes import Outcome, OutcomeKind, TransferReport


console = Console()
err_console = Console(stderr=True)

_STYLES = {
    OutcomeKind.COPIED: 'green',
    OutcomeKind.DELETED: 'yellow',
    OutcomeKind.FAILED: 'bold red',
}

_CONFIG_OPTIONS = (
    'source',
    'destination',
    'file_glob',
    'folder_glob',
    'recursive',
    'overwrite',
    'create_destination_folder',
    'prefix',
    'suffix',
    'rename_pattern',
    'rename_replacement',
)


def transfer_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that needs a ``TransferConfig``."""
    options = [
        click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help='Path to YAML configuration file.'),
        click.option('--source', type=click.Path(path_type=Path), default=None, help='Source folder.'),
        click.option('--destination', type=click.Path(path_type=Path), default=None, help='Destination folder.'),
        click.option('--file-glob', default=None, help='Regular expression matched against file names.'),
        click.option('--folder-glob', default=None, help='Regular expression matched against folder names (recursive only).'),
        click.option('--recursive/--no-recursive', default=None, help='Descend into subfolders.'),
        click.option('--overwrite/--no-overwrite', default=None, help='Replace existing destination files.'),
        click.option('--create-destination/--no-create-destination', 'create_destination_folder', default=None, help='Create the destination and mirror the source folder layout.'),
        click.option('--prefix', default=None, help='Prefix added to every destination file name.'),
        click.option('--suffix', default=None, help='Suffix added before the extension of every destination file name.'),
        click.option('--rename-pattern', default=None, help='Regular expression replaced in destination file names.'),
        click.option('--rename-replacement', default=None, help='Replacement for --rename-pattern.'),
        click.option('-v', '--verbose', is_flag=True, help='Show debug logging.'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_config(config_path: Optional[Path], **overrides: Any) -> TransferConfig:
    """Merge the YAML file (if any) with command-line overrides."""
    data: Dict[str, Any] = load_config(config_path) if config_path else {}
    rename = dict(data.get('rename') or {})
    for key in ('prefix', 'suffix'):
        if overrides.get(key) is not None:
            rename[key] = overrides[key]
    if overrides.get('rename_pattern') is not None:
        rename['pattern'] = overrides['rename_pattern']
    if overrides.get('rename_replacement') is not None:
        rename['replacement'] = overrides['rename_replacement']
    if rename:
        data['rename'] = rename
    for key in ('source', 'destination', 'file_glob', 'folder_glob', 'recursive', 'overwrite', 'create_destination_folder'):
        if overrides.get(key) is not None:
            data[key] = overrides[key]
    return config_from_mapping(data)


def renamer_for(cfg: TransferConfig) -> Optional[RenameFunc]:
    rename = cfg.rename
    try:
        return make_renamer(
            prefix=rename.get('prefix'),
            suffix=rename.get('suffix'),
            pattern=rename.get('pattern'),
            replacement=rename.get('replacement', ''),
        )
    except re.error as exc:
        raise ConfigError(f'Invalid rename pattern: {exc}') from exc


def with_config(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn the shared options into ``cfg`` and ``rename`` arguments.

    Options that are not part of the configuration are passed through.
    """

    @functools.wraps(func)
    def wrapper(config_path: Optional[Path], verbose: bool, **kwargs: Any) -> Any:
        setup_console_logging(verbose, console=err_console)
        overrides = {key: kwargs.pop(key) for key in _CONFIG_OPTIONS}
        try:
            cfg = build_config(config_path, **overrides)
            rename = renamer_for(cfg)
        except ConfigError as exc:
            raise click.UsageError(str(exc)) from exc
        return func(cfg, rename, **kwargs)

    return wrapper


def log_options(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option('--json-log', type=click.Path(dir_okay=False, path_type=Path), default=None, help='Write outcomes to a JSON file.')(func)
    func = click.option('--csv-log', type=click.Path(dir_okay=False, path_type=Path), default=None, help='Write outcomes to a CSV file.')(func)
    return func


def print_outcome(outcome: Outcome) -> None:
    style = _STYLES[outcome.kind]
    console.print(f'[{style}]{outcome.kind.value:>7}[/{style}] {escape(outcome.message)}', highlight=False)


def summary_table(report: TransferReport) -> Table:
    table = Table(title=f'{report.operation.capitalize()} summary')
    table.add_column('Outcome')
    table.add_column('Count', justify='right')
    table.add_row('Copied', str(len(report.copied)))
    if report.operation == 'move':
        table.add_row('Deleted', str(len(report.deleted)))
    table.add_row('Failed', str(len(report.failed)))
    table.add_row('State', report.state.value)
    return table


def run_transfer(cfg: TransferConfig, rename: Optional[RenameFunc], operation: str, csv_log: Optional[Path], json_log: Optional[Path]) -> None:
    engine = FileTransfer(cfg).subscribe(print_outcome)
    try:
        csv_logger = CSVLogger(csv_log, operation) if csv_log else None
    except OSError as exc:
        raise click.FileError(str(csv_log), str(exc)) from exc
    json_logger = JSONLogger(json_log, operation) if json_log else None
    if csv_logger:
        engine.subscribe(csv_logger)
    if json_logger:
        engine.subscribe(json_logger)
    try:
        if operation == 'move':
            report = engine.move_files(rename)
        else:
            report = engine.copy_files(rename)
    finally:
        if csv_logger:
            csv_logger.close()
        if json_logger:
            try:
                json_logger.flush()
            except OSError as exc:
                raise click.FileError(str(json_log), str(exc)) from exc

    console.print(summary_table(report))
    if not report.ok:
        sys.exit(1)


@click.group()
def cli() -> None:
    """FileCopy Toolkit CLI."""
    pass


@cli.command()
@transfer_options
@log_options
@with_config
def copy(cfg: TransferConfig, rename: Optional[RenameFunc], csv_log: Optional[Path], json_log: Optional[Path]) -> None:
    """Copy matching files from the source to the destination."""
    run_transfer(cfg, rename, 'copy', csv_log, json_log)


@cli.command()
@transfer_options
@log_options
@with_config
def move(cfg: TransferConfig, rename: Optional[RenameFunc], csv_log: Optional[Path], json_log: Optional[Path]) -> None:
    """Move matching files from the source to the destination."""
    run_transfer(cfg, rename, 'move', csv_log, json_log)


@cli.command()
@transfer_options
@with_config
def scan(cfg: TransferConfig, rename: Optional[RenameFunc]) -> None:
    """Show which files would be transferred and where they would go."""
    try:
        pairs = FileTransfer(cfg).plan(rename)
    except TransferError as exc:
        err_console.print(f'[bold red]{escape(str(exc))}[/bold red]', highlight=False)
        sys.exit(1)

    table = Table(title='Planned transfers')
    table.add_column('Source')
    table.add_column('Destination')
    for src, dst in pairs:
        table.add_row(str(src), str(dst))
    console.print(table)


@cli.command()
@transfer_options
@with_config
def show_config(cfg: TransferConfig, rename: Optional[RenameFunc]) -> None:
    """Print the effective configuration."""
    console.print_json(json.dumps(cfg.to_dict(), indent=2))


if __name__ == '__main__':  # pragma: no cover
    cli()

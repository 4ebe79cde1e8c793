import json
from pathlib import Path

from click.testing import CliRunner

from filecopy_toolkit.console.main import cli


def run(*args: str):
    return CliRunner().invoke(cli, list(args))


def test_copy_from_options(source_tree: Path, destination: Path) -> None:
    result = run(
        'copy',
        '--source', str(source_tree),
        '--destination', str(destination),
        '--file-glob', r'\.txt$',
        '--recursive',
        '--create-destination',
        '--prefix', 'copy_',
    )
    assert result.exit_code == 0, result.output
    assert (destination / 'sub' / 'deep' / 'copy_d.txt').read_bytes() == b'delta' * 1000
    assert (destination / 'copy_a.txt').exists()
    assert not (destination / 'b.log').exists()


def test_copy_from_yaml_with_logs(source_tree: Path, destination: Path, tmp_path: Path) -> None:
    config = tmp_path / 'config.yml'
    config.write_text(
        f'source: {source_tree.as_posix()}\n'
        f'destination: {destination.as_posix()}\n'
        "fileGlob: '\\.log$'\n",
        encoding='utf-8',
    )
    csv_log = tmp_path / 'out.csv'
    json_log = tmp_path / 'out.json'
    result = run('copy', '--config', str(config), '--csv-log', str(csv_log), '--json-log', str(json_log))

    assert result.exit_code == 0, result.output
    assert (destination / 'b.log').read_bytes() == b'bravo'
    records = json.loads(json_log.read_text(encoding='utf-8'))
    assert [r['kind'] for r in records] == ['copied']
    assert 'copied' in csv_log.read_text(encoding='utf-8')


def test_move_command(source_tree: Path, destination: Path) -> None:
    result = run(
        'move',
        '--source', str(source_tree),
        '--destination', str(destination),
        '--file-glob', r'^a\.txt$',
    )
    assert result.exit_code == 0, result.output
    assert not (source_tree / 'a.txt').exists()
    assert (destination / 'a.txt').read_bytes() == b'alpha'


def test_failures_set_exit_code(source_tree: Path, tmp_path: Path) -> None:
    result = run(
        'copy',
        '--source', str(source_tree),
        '--destination', str(tmp_path / 'missing'),
        '--file-glob', '.*',
    )
    assert result.exit_code == 1
    assert not (tmp_path / 'missing').exists()


def test_missing_required_option_is_usage_error(source_tree: Path) -> None:
    result = run('copy', '--source', str(source_tree))
    assert result.exit_code == 2


def test_scan_does_not_copy(source_tree: Path, destination: Path) -> None:
    result = run(
        'scan',
        '--source', str(source_tree),
        '--destination', str(destination),
        '--file-glob', r'\.txt$',
        '--recursive',
    )
    assert result.exit_code == 0, result.output
    assert 'Planned transfers' in result.output
    assert list(destination.iterdir()) == []


def test_show_config(tmp_path: Path) -> None:
    result = run(
        'show-config',
        '--source', 'in',
        '--destination', 'out',
        '--file-glob', 'x',
        '--overwrite',
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data['overwrite'] is True
    assert data['recursive'] is False
    assert data['fileGlob'] == 'x'


def test_unwritable_csv_log_is_reported(source_tree: Path, destination: Path, tmp_path: Path) -> None:
    result = run(
        'copy',
        '--source', str(source_tree),
        '--destination', str(destination),
        '--file-glob', r'\.txt$',
        '--csv-log', str(tmp_path / 'no-such-folder' / 'out.csv'),
    )
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert 'Could not open file' in result.output
    assert list(destination.iterdir()) == []

import os
import re
from pathlib import Path

import pytest

from filecopy_toolkit.discovery.engine import matches, select_files


def names(paths, root):
    return sorted(p.relative_to(root).as_posix() for p in paths)


def test_matches_without_pattern_accepts_everything() -> None:
    assert matches(None, 'anything.bin')
    assert matches(re.compile(r'\.txt$'), 'a.txt')
    assert not matches(re.compile(r'\.txt$'), 'a.txt.bak')


def test_flat_selection_skips_folders(source_tree: Path) -> None:
    files = select_files(source_tree, file_filter=re.compile(r'\.txt$'))
    assert names(files, source_tree) == ['a.txt']


def test_flat_selection_without_filter(source_tree: Path) -> None:
    files = select_files(source_tree)
    assert names(files, source_tree) == ['a.txt', 'b.log']


def test_flat_selection_ignores_folder_filter(source_tree: Path) -> None:
    files = select_files(source_tree, folder_filter=re.compile('^sub$'))
    assert names(files, source_tree) == ['a.txt', 'b.log']


def test_recursive_selection(source_tree: Path) -> None:
    files = select_files(source_tree, recursive=True, file_filter=re.compile(r'\.txt$'))
    assert names(files, source_tree) == ['a.txt', 'skip/e.txt', 'sub/c.txt', 'sub/deep/d.txt']


def test_recursive_selection_prunes_folders(source_tree: Path) -> None:
    files = select_files(
        source_tree,
        recursive=True,
        file_filter=re.compile(r'\.txt$'),
        folder_filter=re.compile('^sub$'),
    )
    # 'deep' does not match either, so it is pruned along with 'skip'
    assert names(files, source_tree) == ['a.txt', 'sub/c.txt']


def test_selected_paths_are_absolute_and_unique(source_tree: Path, monkeypatch) -> None:
    monkeypatch.chdir(source_tree.parent)
    files = select_files(Path('source'), recursive=True)
    assert all(p.is_absolute() for p in files)
    assert len(files) == len(set(files)) == 5


def test_depth_first_name_order(source_tree: Path) -> None:
    files = select_files(source_tree, recursive=True)
    assert [p.relative_to(source_tree).as_posix() for p in files] == [
        'a.txt',
        'b.log',
        'skip/e.txt',
        'sub/c.txt',
        'sub/deep/d.txt',
    ]


@pytest.mark.skipif(not hasattr(os, 'symlink'), reason='symlinks unsupported')
def test_symlinked_folder_is_descended(source_tree: Path, tmp_path: Path) -> None:
    outside = tmp_path / 'outside'
    outside.mkdir()
    (outside / 'x.txt').write_bytes(b'x')
    try:
        (source_tree / 'link').symlink_to(outside, target_is_directory=True)
    except OSError:
        pytest.skip('cannot create symlinks here')
    files = select_files(source_tree, recursive=True, file_filter=re.compile('^x'))
    assert names(files, source_tree) == ['link/x.txt']


def test_listing_error_without_callback_propagates(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        select_files(tmp_path / 'missing')


def test_listing_error_is_reported_to_callback(tmp_path: Path) -> None:
    errors = []
    files = select_files(tmp_path / 'missing', on_error=lambda folder, exc: errors.append(folder))
    assert files == []
    assert errors == [(tmp_path / 'missing').absolute()]

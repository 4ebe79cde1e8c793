import logging
from pathlib import Path

import pytest


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Create a small source tree.

    source/
        a.txt
        b.log
        sub/
            c.txt
            deep/
                d.txt
        skip/
            e.txt
    """
    root = tmp_path / 'source'
    (root / 'sub' / 'deep').mkdir(parents=True)
    (root / 'skip').mkdir()
    (root / 'a.txt').write_bytes(b'alpha')
    (root / 'b.log').write_bytes(b'bravo')
    (root / 'sub' / 'c.txt').write_bytes(b'charlie')
    (root / 'sub' / 'deep' / 'd.txt').write_bytes(b'delta' * 1000)
    (root / 'skip' / 'e.txt').write_bytes(b'echo')
    return root


@pytest.fixture
def destination(tmp_path: Path) -> Path:
    dest = tmp_path / 'destination'
    dest.mkdir()
    return dest


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo handlers and level set by ``setup_console_logging`` during a test."""
    logger = logging.getLogger('filecopy_toolkit')
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)

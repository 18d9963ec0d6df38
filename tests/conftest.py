from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

# pytest may run without installing the project; ensure repo root is importable.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from hashcash.core.ledger import MemoryLedger  # noqa: E402

FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """The CLI installs root handlers; undo that after each test."""

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture()
def temp_dir(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture()
def ledger() -> MemoryLedger:
    """A fresh ledger per test: spent fingerprints never leak across cases."""

    return MemoryLedger()


@pytest.fixture()
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture()
def fixed_clock(fixed_now: datetime):
    return lambda: fixed_now

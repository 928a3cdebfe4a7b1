"""
Pytest configuration and shared fixtures for the Merkle commitment tests.

This conftest.py:
1. Adds project root and tests root to sys.path for imports
2. Provides commonly-used fixtures
"""

import os
import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from core.merkle import MerkleTree  # noqa: E402
from fixtures.golden import items_for  # noqa: E402


# =============================================================================
# Pytest Fixtures
# =============================================================================

@pytest.fixture
def abcd_items():
    """The four-item golden list: A, B, C, D."""
    return items_for(4)


@pytest.fixture
def abcd_tree(abcd_items):
    """Tree over A, B, C, D."""
    return MerkleTree.build(abcd_items)


@pytest.fixture
def many_items():
    """Items for trees of assorted, mostly non-power-of-two sizes."""
    return [f"leaf{i}".encode() for i in range(33)]


@pytest.fixture(autouse=True)
def _isolate_merkle_env(monkeypatch, tmp_path):
    """Keep MERKLE_* variables, .env files and config files out of tests."""
    for key in list(os.environ):
        if key.startswith("MERKLE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))

"""
Shared fixtures.
"""

from pathlib import Path

import pytest

from flatcompat.core.compat import FlatCompat

FIXTURES_DIR = Path(__file__).parent / "fixtures"
CONFIG_FIXTURES_DIR = FIXTURES_DIR / "config"


@pytest.fixture
def config_dir() -> Path:
    """Directory holding fixture plugins, parsers and shareable configs."""
    return CONFIG_FIXTURES_DIR


@pytest.fixture
def compat(config_dir: Path) -> FlatCompat:
    return FlatCompat(base_directory=config_dir)

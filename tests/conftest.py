"""Pytest configuration and shared fixtures."""

import io
import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gale.config import Config  # noqa: E402
from gale.ui import Ui, make_console  # noqa: E402


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Keep the cached configuration from leaking between tests."""
    Config._instance = None
    yield
    Config._instance = None


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def ui(output):
    """A Ui that writes plain text into ``output``."""
    return Ui(make_console(file=output, no_color=True))

"""Pytest configuration for local package import resolution and shared fixtures."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    # Ensure tests can import `catalog_merger` and `catalog_merge` without package installation.
    sys.path.insert(0, project_root_str)


@pytest.fixture
def console_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(console_output: io.StringIO) -> Console:
    """Plain-text console wide enough that diff lines never wrap."""
    return Console(file=console_output, width=200, color_system=None, force_terminal=False)

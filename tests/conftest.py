"""
Pytest configuration and fixtures for hywoma tests.

Socket tests run against real Unix sockets in a short temporary directory
(AF_UNIX paths are limited to ~108 bytes).
"""

import tempfile
from pathlib import Path
from typing import Dict, Generator

import pytest

from hywoma.config import HywomaPaths

SIGNATURE = "test_signature"


@pytest.fixture
def runtime_dir() -> Generator[Path, None, None]:
    """Short temporary XDG_RUNTIME_DIR."""
    base = "/tmp" if Path("/tmp").is_dir() else None
    with tempfile.TemporaryDirectory(prefix="hyw", dir=base) as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def environ(runtime_dir) -> Dict[str, str]:
    """Environment of a process running inside a Hyprland session."""
    return {
        "XDG_RUNTIME_DIR": str(runtime_dir),
        "HYPRLAND_INSTANCE_SIGNATURE": SIGNATURE,
    }


@pytest.fixture
def paths(environ) -> HywomaPaths:
    return HywomaPaths.from_env(environ)


@pytest.fixture
def monitors_json() -> str:
    """Three monitors, reported out of left-to-right order."""
    return (
        '[{"id": 20, "name": "DP-2", "x": 1920, "y": 0},'
        ' {"id": 30, "name": "DP-3", "x": 3840, "y": 0},'
        ' {"id": 10, "name": "DP-1", "x": 0, "y": 0}]'
    )


@pytest.fixture
def active_workspace_json() -> str:
    """Workspace 2 on monitor 1 of group 0."""
    return '{"id": 2, "name": "2", "monitor": "DP-1", "windows": 1}'

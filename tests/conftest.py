"""Shared pytest configuration and fixtures for the instance manager test suite."""

import sys
from pathlib import Path

import pytest

# Ensure src/ is importable without installing the package
SRC_ROOT = Path(__file__).parent.parent / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from instance_handling.controller import Controller  # noqa: E402
from instance_handling.registry import Registry  # noqa: E402
from utils.data_model import Instance  # noqa: E402


# =============================================================================
# Test Doubles
# =============================================================================

class RecordingLauncher:
    """Launcher stand-in that records calls instead of spawning processes."""

    def __init__(self, error=None):
        self.runs = []
        self.opened = []
        self.error = error

    def run(self, instance):
        if self.error:
            raise self.error
        self.runs.append(instance)
        return 0

    def open_folder(self, instance):
        if self.error:
            raise self.error
        self.opened.append(instance)


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def game_dir(tmp_path) -> Path:
    """Fake game directory holding a SMAPI executable path and mods folders."""
    directory = tmp_path / "Stardew Valley"
    (directory / "Mods").mkdir(parents=True)
    (directory / "AltMods").mkdir()
    return directory


@pytest.fixture
def registry(game_dir) -> Registry:
    """Registry with "Default" and "Alt" instances."""
    registry = Registry.seed(str(game_dir / "StardewModdingAPI"))
    registry.upsert("Alt", Instance(folder_name="AltMods"))
    return registry


@pytest.fixture
def launcher() -> RecordingLauncher:
    return RecordingLauncher()


@pytest.fixture
def controller(registry, launcher, tmp_path) -> Controller:
    return Controller(registry, tmp_path / "config.json", launcher=launcher)

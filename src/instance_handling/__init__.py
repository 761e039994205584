"""
Instance management module for the SMAPI instance manager.

This module provides:
- Registry: Named instances plus the default SMAPI path, with load/save
- Selector / Wizard: Navigation cursor and add flow
- Controller: Screen state machine driving all of the above
- Launcher: Runs an instance in a terminal emulator

Usage:
    from instance_handling import Controller, load_or_seed, config_path

    registry = load_or_seed(config_path())
    controller = Controller(registry, config_path())
"""

from .errors import (
    ConfigIOError,
    ConfigParseError,
    FolderDeleteError,
    InvariantViolation,
    LaunchSpawnError,
    ManagerError,
)
from .registry import Registry, config_path, load_or_seed
from .selector import Selector
from .wizard import Wizard
from .launcher import Launcher
from .controller import Controller

# Expose public API
__all__ = [
    'ConfigIOError', 'ConfigParseError', 'FolderDeleteError', 'InvariantViolation',
    'LaunchSpawnError', 'ManagerError', 'Registry', 'config_path', 'load_or_seed',
    'Selector', 'Wizard', 'Launcher', 'Controller',
]

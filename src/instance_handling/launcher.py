"""
Instance launcher: runs SMAPI for an instance inside a terminal emulator.

This module provides the Launcher class that:
1. Resolves the SMAPI executable (instance override or registry default)
2. Resolves the terminal emulator from $TERMINAL
3. Spawns `<terminal> -e steam-run <smapi> --mods-path <folder>`
4. Blocks until the terminal exits
"""

import os
from typing import List, Mapping, Optional

from instance_handling.errors import LaunchSpawnError
from instance_handling.registry import Registry
from utils.data_model import Instance
from utils.monitoring import get_logger
from utils.process import open_in_file_manager, run_and_wait

logger = get_logger(__name__)

TERMINAL_ENV = "TERMINAL"
DEFAULT_TERMINAL = "konsole"
SANDBOX_WRAPPER = "steam-run"


class Launcher:
    """Starts instances of a registry in an external terminal."""

    def __init__(self, registry: Registry, environ: Optional[Mapping[str, str]] = None):
        self._registry = registry
        self._environ = environ if environ is not None else os.environ

    def terminal_program(self) -> str:
        return self._environ.get(TERMINAL_ENV) or DEFAULT_TERMINAL

    def command_line(self, instance: Instance) -> List[str]:
        """
        Build the argv used to run an instance.

        Example:
            ['konsole', '-e', 'steam-run', '/games/SDV/StardewModdingAPI',
             '--mods-path', 'Mods']
        """
        return [
            self.terminal_program(),
            "-e",
            SANDBOX_WRAPPER,
            self._registry.effective_launcher_path(instance),
            "--mods-path",
            instance.folder_name,
        ]

    def run(self, instance: Instance) -> int:
        """
        Run an instance and wait for its terminal to close.

        Args:
            instance: Instance to launch

        Returns:
            Exit code of the terminal process

        Raises:
            LaunchSpawnError: If the terminal could not be started
        """
        argv = self.command_line(instance)
        logger.info(f"Launching instance with mods folder '{instance.folder_name}' via {argv[0]}")
        try:
            return_code = run_and_wait(argv)
        except (FileNotFoundError, PermissionError, RuntimeError) as e:
            logger.error(f"Failed to start {argv[0]}: {e}")
            raise LaunchSpawnError(f"Failed to start {argv[0]}: {e}") from e

        if return_code != 0:
            logger.warning(f"{argv[0]} exited with code {return_code}")
        return return_code

    def open_folder(self, instance: Instance) -> None:
        """
        Show an instance's mods folder in the file manager.

        Raises:
            LaunchSpawnError: If the folder is missing or the opener failed
        """
        folder = self._registry.folder_path(instance)
        try:
            open_in_file_manager(folder)
        except (FileNotFoundError, PermissionError, RuntimeError) as e:
            logger.error(f"Failed to open {folder}: {e}")
            raise LaunchSpawnError(f"Failed to open {folder}: {e}") from e
        logger.info(f"Opened mods folder {folder}")

"""
SMAPI instance manager entry point.

Loads (or interactively seeds) the instance registry, then hands the terminal
to the curses interface until the operator confirms exit.
"""

import curses
import os
import sys
from pathlib import Path

from instance_handling import Controller, config_path, load_or_seed
from utils.monitoring import get_logger, resolve_log_level, setup_logging
from utils.terminal_ui import run

LOG_FILE_ENV = "SMAPI_MANAGER_LOG"
DEFAULT_LOG_FILE = Path("./smapi_manager.log")

logger = get_logger(__name__)


def log_file_path() -> Path:
    override = os.environ.get(LOG_FILE_ENV)
    return Path(override) if override else DEFAULT_LOG_FILE


def main() -> int:
    # The curses screen owns stdout, so log to the file only
    setup_logging(log_level=resolve_log_level(), log_file=log_file_path(), console=False)

    registry_file = config_path()
    registry = load_or_seed(registry_file)
    controller = Controller(registry, registry_file)

    logger.info(f"Starting with {len(registry)} instance(s), config file {registry_file}")
    curses.wrapper(run, controller)
    logger.info("Stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())

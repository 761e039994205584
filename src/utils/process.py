"""
Process management utilities for launching external programs.

This module provides:
- launch_process(): Start a command line as a subprocess
- run_and_wait(): Start a command line and block until it exits
- open_in_file_manager(): Hand a directory to the desktop file opener
"""

import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Sequence
from utils.monitoring import get_logger

logger = get_logger(__name__)


def launch_process(argv: Sequence[str], cwd: Optional[Path] = None) -> subprocess.Popen:
    """
    Launch a command line as a subprocess.

    Args:
        argv: Program followed by its arguments
        cwd: Optional working directory for the child

    Returns:
        subprocess.Popen object for the launched process

    Raises:
        FileNotFoundError: If the program cannot be found
        PermissionError: If no permission to execute
        RuntimeError: If launch fails for other reasons
    """
    command: List[str] = [str(part) for part in argv]
    if not command:
        raise ValueError("Cannot launch an empty command line")

    logger.info(f"Launching: {command[0]}")
    logger.debug(f"Command line: {command}")

    try:
        process = subprocess.Popen(command, cwd=cwd)
        logger.info(f"Process launched (PID: {process.pid})")
        return process
    except FileNotFoundError:
        raise FileNotFoundError(f"Program not found: {command[0]}")
    except PermissionError:
        raise PermissionError(f"No permission to execute: {command[0]}")
    except OSError as e:
        raise RuntimeError(f"Failed to launch {command[0]}: {e}")


def run_and_wait(argv: Sequence[str], cwd: Optional[Path] = None) -> int:
    """
    Launch a command line and block until it exits.

    Returns:
        The child's exit code
    """
    process = launch_process(argv, cwd=cwd)
    return_code = process.wait()
    logger.info(f"Process {process.pid} exited with code {return_code}")
    return return_code


def file_opener() -> str:
    """Program used to open a directory in the desktop file manager."""
    if sys.platform == 'darwin':
        return 'open'
    if sys.platform == 'win32':
        return 'explorer'
    return 'xdg-open'


def open_in_file_manager(path: Path) -> subprocess.Popen:
    """
    Open a directory with the platform file opener without waiting for it.

    Raises:
        FileNotFoundError: If the directory or the opener does not exist
        PermissionError: If the opener cannot be executed
        RuntimeError: If launch fails for other reasons
    """
    directory = Path(path)
    if not directory.is_dir():
        raise FileNotFoundError(f"Directory not found: {directory}")
    return launch_process([file_opener(), str(directory)])

"""
Error taxonomy for the instance manager.

Every error the core raises derives from ManagerError so the controller can
report it inline instead of terminating.
"""


class ManagerError(Exception):
    """Base class for recoverable instance manager errors."""


class ConfigParseError(ManagerError):
    """The registry file exists but its content is not a valid registry."""


class ConfigIOError(ManagerError):
    """The registry file could not be read or written."""


class FolderDeleteError(ManagerError):
    """A hard remove could not delete the instance's mods folder."""


class LaunchSpawnError(ManagerError):
    """An external process (terminal or file opener) failed to start."""


class InvariantViolation(ManagerError):
    """A mutation would break a registry invariant (e.g. removing the last instance)."""

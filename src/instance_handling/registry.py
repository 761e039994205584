"""
Instance registry: the named launch configurations plus the default SMAPI path.

The Registry provides a centralized way to:
- Load the registry from config.json, or seed a fresh one on first run
- Insert, replace and remove instances
- Save the registry back to disk on request
"""

import json
import os
import shutil
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Tuple

from pydantic import ValidationError

from instance_handling.errors import (
    ConfigIOError,
    ConfigParseError,
    FolderDeleteError,
    InvariantViolation,
)
from utils.data_model import Instance, RegistryDocument
from utils.monitoring import get_logger

logger = get_logger(__name__)

DEFAULT_INSTANCE_NAME = "Default"
DEFAULT_FOLDER_NAME = "Mods"
SMAPI_EXECUTABLE = "StardewModdingAPI"
CONFIG_PATH_ENV = "SMAPI_MANAGER_CONFIG"
DEFAULT_CONFIG_PATH = Path("./config.json")


def config_path() -> Path:
    """Registry file location, honoring SMAPI_MANAGER_CONFIG."""
    override = os.environ.get(CONFIG_PATH_ENV)
    return Path(override) if override else DEFAULT_CONFIG_PATH


class Registry:
    """Ordered collection of named instances plus the default launcher path."""

    def __init__(self, instances: Dict[str, Instance], default_launcher_path: str):
        if not instances:
            raise InvariantViolation("A registry needs at least one instance")
        self._instances: Dict[str, Instance] = dict(instances)
        self.default_launcher_path = default_launcher_path

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def seed(cls, default_launcher_path: str) -> "Registry":
        """Create a registry holding only the "Default" instance."""
        logger.info(f"Seeding registry with default SMAPI path: {default_launcher_path}")
        return cls(
            {DEFAULT_INSTANCE_NAME: Instance(folder_name=DEFAULT_FOLDER_NAME)},
            default_launcher_path,
        )

    @classmethod
    def from_document(cls, document: RegistryDocument) -> "Registry":
        return cls(document.instances, document.smapi_path)

    @classmethod
    def load(cls, source: Path) -> "Registry":
        """
        Load a registry from a JSON file.

        Args:
            source: Path to the registry file

        Returns:
            The loaded Registry

        Raises:
            ConfigIOError: If the file cannot be read
            ConfigParseError: If the content is not a valid registry
        """
        try:
            contents = Path(source).read_text(encoding='utf-8')
        except OSError as e:
            raise ConfigIOError(f"Cannot read registry file {source}: {e}") from e
        except UnicodeDecodeError as e:
            raise ConfigParseError(f"Registry file {source} is not valid UTF-8: {e}") from e

        try:
            document = RegistryDocument.model_validate_json(contents)
        except ValidationError as e:
            raise ConfigParseError(f"Invalid registry file {source}: {e}") from e

        registry = cls.from_document(document)
        logger.info(f"Loaded {len(registry)} instance(s) from {source}: {registry.names()}")
        return registry

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    def names(self) -> List[str]:
        """Instance names in lexical order."""
        return sorted(self._instances)

    def get(self, name: str) -> Instance:
        """
        Get an instance by name.

        Raises:
            ValueError: If no instance has that name
        """
        if name not in self._instances:
            raise ValueError(
                f"Unknown instance: '{name}'. "
                f"Available instances: {self.names()}"
            )
        return self._instances[name]

    def items(self) -> Iterator[Tuple[str, Instance]]:
        for name in self.names():
            yield name, self._instances[name]

    def effective_launcher_path(self, instance: Instance) -> str:
        """The instance's override if set, otherwise the registry default."""
        return instance.launcher_override or self.default_launcher_path

    def folder_path(self, instance: Instance) -> Path:
        """
        Resolve an instance's mods folder on disk.

        Relative folder names are resolved against the directory holding the
        effective SMAPI executable, which is where SMAPI resolves --mods-path.
        """
        folder = Path(instance.folder_name)
        if folder.is_absolute():
            return folder
        return Path(self.effective_launcher_path(instance)).parent / folder

    def to_document(self) -> RegistryDocument:
        return RegistryDocument(
            instances={name: instance for name, instance in self.items()},
            smapi_path=self.default_launcher_path,
        )

    def __contains__(self, name: object) -> bool:
        return name in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Registry):
            return NotImplemented
        return (
            self._instances == other._instances
            and self.default_launcher_path == other.default_launcher_path
        )

    def __repr__(self) -> str:
        return f"Registry(instances={self.names()!r}, default_launcher_path={self.default_launcher_path!r})"

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def upsert(self, name: str, instance: Instance) -> None:
        """Insert an instance, silently replacing any instance with the same name."""
        replaced = name in self._instances
        self._instances[name] = instance
        logger.info(f"{'Replaced' if replaced else 'Added'} instance '{name}' (folder: {instance.folder_name})")

    def remove(self, name: str, delete_folder: bool = False) -> Instance:
        """
        Remove an instance, optionally deleting its mods folder first.

        The entry is only removed once the folder deletion (if requested) has
        succeeded; on failure the registry is left untouched.

        Args:
            name: Instance to remove
            delete_folder: Also delete the instance's mods folder from disk

        Returns:
            The removed Instance

        Raises:
            ValueError: If no instance has that name
            InvariantViolation: If it is the last remaining instance
            FolderDeleteError: If the mods folder could not be deleted
        """
        instance = self.get(name)
        if len(self._instances) == 1:
            raise InvariantViolation(f"Cannot remove '{name}': it is the last instance")

        if delete_folder:
            folder = self.folder_path(instance)
            if not folder.is_dir():
                raise FolderDeleteError(f"Mods folder not found: {folder}")
            try:
                shutil.rmtree(folder)
            except OSError as e:
                raise FolderDeleteError(f"Could not delete {folder}: {e}") from e
            logger.info(f"Deleted mods folder {folder}")

        del self._instances[name]
        logger.info(f"Removed instance '{name}'")
        return instance

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save(self, destination: Path) -> None:
        """
        Write the registry as pretty-printed JSON, overwriting the destination.

        Raises:
            ConfigIOError: If the file cannot be written
        """
        payload = self.to_document().model_dump(mode='json', by_alias=True)
        try:
            with open(destination, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2)
                f.write("\n")
        except OSError as e:
            raise ConfigIOError(f"Cannot write registry file {destination}: {e}") from e
        logger.info(f"Saved {len(self)} instance(s) to {destination}")


# ============================================================================
# First-run seeding
# ============================================================================

def prompt_default_launcher_path(read_line: Callable[[str], str] = input) -> str:
    """
    Ask the operator for the SMAPI installation directory.

    Returns:
        Path to the SMAPI executable inside that directory
    """
    print("Creating config file")
    answer = read_line("Enter the path to your smapi installation: ")
    directory = answer.replace("\r", "").replace("\n", "")
    return f"{directory}/{SMAPI_EXECUTABLE}"


def load_or_seed(
    source: Path,
    read_line: Callable[[str], str] = input,
) -> Registry:
    """
    Load the registry, falling back to an interactively seeded one.

    Any load failure (missing, unreadable or malformed file) leads to the
    first-run prompt rather than an abort. The seeded registry is not saved.
    """
    try:
        return Registry.load(source)
    except (ConfigIOError, ConfigParseError) as e:
        logger.warning(f"Could not load registry, seeding a new one: {e}")
    return Registry.seed(prompt_default_launcher_path(read_line))

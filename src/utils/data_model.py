"""
Unified data models for the SMAPI instance manager.

This module contains the Pydantic BaseModel classes that describe an instance
and the persisted registry document, plus the small value types shared by the
controller and the terminal interface.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Instance Models
# ============================================================================

class Instance(BaseModel):
    """
    A named launch configuration: a mods folder plus an optional launcher.

    Instances are immutable. Editing an instance means building a new one and
    upserting it under the same name.

    Attributes:
        folder_name: Mods directory passed to SMAPI via --mods-path
        launcher_override: Path to a SMAPI executable used instead of the
                           registry default (persisted as "smapi_path")
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    folder_name: str = Field(..., min_length=1, description="Mods directory passed via --mods-path")
    launcher_override: Optional[str] = Field(
        default=None,
        alias="smapi_path",
        description="SMAPI executable overriding the registry default",
    )


class RegistryDocument(BaseModel):
    """
    On-disk shape of the registry.

    Example JSON:
        {
          "instances": {
            "Default": {"folder_name": "Mods", "smapi_path": null}
          },
          "smapi_path": "/games/Stardew Valley/StardewModdingAPI"
        }

    Attributes:
        instances: Instances keyed by their unique, non-empty name
        smapi_path: Default SMAPI executable used when an instance has no override
    """
    instances: Dict[str, Instance] = Field(..., min_length=1, description="Instances by name")
    smapi_path: str = Field(..., description="Default SMAPI executable")

    @field_validator("instances")
    @classmethod
    def _names_not_blank(cls, value: Dict[str, Instance]) -> Dict[str, Instance]:
        if any(not name for name in value):
            raise ValueError("instance names must not be empty")
        return value


# ============================================================================
# Controller Types
# ============================================================================

class Screen(Enum):
    """Which key-dispatch table applies to the next input event."""
    MAIN = "main"
    ADD = "add"
    REMOVE_CONFIRM = "remove_confirm"
    EXIT_CONFIRM = "exit_confirm"


class Focus(Enum):
    """Field of the add wizard that receives typed characters."""
    NAME = "name"
    FOLDER_NAME = "folder_name"
    LAUNCHER_PATH = "launcher_path"


class Key(Enum):
    """Discrete, platform-independent input events."""
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    TAB = "tab"
    ESC = "esc"
    BACKSPACE = "backspace"
    CHAR = "char"


@dataclass(frozen=True)
class KeyPress:
    """
    One input event. `char` is set only for Key.CHAR.

    Example:
        KeyPress(Key.CHAR, "a")
        KeyPress(Key.ENTER)
    """
    key: Key
    char: Optional[str] = None

    @classmethod
    def of(cls, char: str) -> "KeyPress":
        return cls(Key.CHAR, char)

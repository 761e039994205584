"""
Add wizard: stages a new (or replacement) instance field by field.

The wizard only exists while the controller is on the add screen. It commits
into the registry when the operator confirms the last field.
"""

from typing import Dict

from instance_handling.registry import Registry
from utils.data_model import Focus, Instance
from utils.monitoring import get_logger

logger = get_logger(__name__)

_FOCUS_ORDER = [Focus.NAME, Focus.FOLDER_NAME, Focus.LAUNCHER_PATH]


class Wizard:
    """
    Multi-field text entry for an instance.

    Attributes:
        focus: Field receiving typed characters
        name_buffer: Instance name being typed
        folder_buffer: Mods folder being typed
        path_buffer: Optional SMAPI override being typed (empty means none)
    """

    def __init__(self):
        self.focus: Focus = Focus.NAME
        self.name_buffer = ""
        self.folder_buffer = ""
        self.path_buffer = ""

    def buffers(self) -> Dict[Focus, str]:
        return {
            Focus.NAME: self.name_buffer,
            Focus.FOLDER_NAME: self.folder_buffer,
            Focus.LAUNCHER_PATH: self.path_buffer,
        }

    def advance_focus(self) -> None:
        """Cycle Name -> FolderName -> LauncherPath -> Name."""
        index = _FOCUS_ORDER.index(self.focus)
        self.focus = _FOCUS_ORDER[(index + 1) % len(_FOCUS_ORDER)]

    def type_char(self, char: str) -> None:
        self._set_focused(self._focused() + char)

    def backspace(self) -> None:
        self._set_focused(self._focused()[:-1])

    def confirm(self, registry: Registry) -> bool:
        """
        Handle the commit input for the focused field.

        Returns:
            True once the instance has been written to the registry and the
            wizard is finished, False while it is still collecting input
        """
        if self.focus is Focus.NAME:
            if not self.name_buffer or self.name_buffer in registry:
                logger.debug(f"Refusing instance name '{self.name_buffer}'")
                return False
            self.focus = Focus.FOLDER_NAME
            return False

        if self.focus is Focus.FOLDER_NAME:
            self.focus = Focus.LAUNCHER_PATH
            return False

        # Tabbing past the earlier fields can leave them blank
        if not self.name_buffer:
            self.focus = Focus.NAME
            return False
        if not self.folder_buffer:
            self.focus = Focus.FOLDER_NAME
            return False

        instance = Instance(
            folder_name=self.folder_buffer,
            launcher_override=self.path_buffer or None,
        )
        registry.upsert(self.name_buffer, instance)
        self.clear()
        return True

    def cancel(self) -> None:
        self.clear()

    def clear(self) -> None:
        self.name_buffer = ""
        self.folder_buffer = ""
        self.path_buffer = ""

    def _focused(self) -> str:
        return self.buffers()[self.focus]

    def _set_focused(self, value: str) -> None:
        if self.focus is Focus.NAME:
            self.name_buffer = value
        elif self.focus is Focus.FOLDER_NAME:
            self.folder_buffer = value
        else:
            self.path_buffer = value

    def __repr__(self) -> str:
        return (
            f"Wizard(focus={self.focus.name}, name={self.name_buffer!r}, "
            f"folder={self.folder_buffer!r}, path={self.path_buffer!r})"
        )

"""
Top-level input state machine.

The Controller owns the current screen, the optional add wizard, the selector
and the registry. Each input event is handled in two steps:

- dispatch(): applies the screen transition and in-memory edits and returns
  the side effects the event asks for (launch, open, save, remove, quit)
- execute(): performs one effect, turning any ManagerError into an inline
  notice so nothing short of a confirmed exit ends the program

handle() runs both and is what the terminal loop calls.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

from instance_handling.errors import ManagerError
from instance_handling.launcher import Launcher
from instance_handling.registry import Registry
from instance_handling.selector import Selector
from instance_handling.wizard import Wizard
from utils.data_model import Instance, Key, KeyPress, Screen
from utils.monitoring import get_logger

logger = get_logger(__name__)


# ============================================================================
# Effects
# ============================================================================

@dataclass(frozen=True)
class Launch:
    instance: Instance


@dataclass(frozen=True)
class OpenFolder:
    instance: Instance


@dataclass(frozen=True)
class Remove:
    name: str
    delete_folder: bool


@dataclass(frozen=True)
class Save:
    pass


@dataclass(frozen=True)
class Quit:
    pass


# ============================================================================
# Controller
# ============================================================================

class Controller:
    """
    Interprets input events and drives every registry and selector mutation.

    Attributes:
        registry: The instance registry being edited
        selector: Cursor over the registry's names
        launcher: Runs instances and opens their folders
        config_path: Where Save writes the registry
        screen: Active screen
        wizard: Add wizard, present only on the add screen
        notice: Inline message from the last handled event, if any
        running: False once exit has been confirmed
    """

    def __init__(
        self,
        registry: Registry,
        config_path: Path,
        launcher: Optional[Launcher] = None,
        selector: Optional[Selector] = None,
    ):
        self.registry = registry
        self.config_path = Path(config_path)
        self.launcher = launcher if launcher is not None else Launcher(registry)
        self.selector = selector if selector is not None else Selector(registry)
        self.screen = Screen.MAIN
        self.wizard: Optional[Wizard] = None
        self.notice: Optional[str] = None
        self.running = True

        self._dispatch_table: Dict[Screen, Callable[[KeyPress], List[object]]] = {
            Screen.MAIN: self._on_main,
            Screen.ADD: self._on_add,
            Screen.REMOVE_CONFIRM: self._on_remove_confirm,
            Screen.EXIT_CONFIRM: self._on_exit_confirm,
        }

    @property
    def current_instance(self) -> Instance:
        return self.registry.get(self.selector.current_key)

    # -------------------------------------------------------------------------
    # Event handling
    # -------------------------------------------------------------------------

    def handle(self, press: KeyPress) -> bool:
        """
        Handle one input event to completion.

        Returns:
            True while the program should keep running
        """
        self.notice = None
        for effect in self.dispatch(press):
            if not self.execute(effect):
                break
        return self.running

    def dispatch(self, press: KeyPress) -> List[object]:
        """Apply the transition for `press` on the active screen and return its effects."""
        return self._dispatch_table[self.screen](press)

    def execute(self, effect: object) -> bool:
        """
        Perform one effect.

        Returns:
            False if the effect failed; later effects of the same event are skipped
        """
        try:
            if isinstance(effect, Launch):
                self.launcher.run(effect.instance)
            elif isinstance(effect, OpenFolder):
                self.launcher.open_folder(effect.instance)
            elif isinstance(effect, Remove):
                self._remove(effect)
            elif isinstance(effect, Save):
                self.registry.save(self.config_path)
                self.notice = f"Saved {len(self.registry)} instance(s) to {self.config_path}"
            elif isinstance(effect, Quit):
                logger.info("Exit confirmed")
                self.running = False
            else:
                raise TypeError(f"Unknown effect: {effect!r}")
        except ManagerError as e:
            logger.error(f"{type(e).__name__}: {e}")
            self.notice = str(e)
            return False
        return True

    def _remove(self, effect: Remove) -> None:
        try:
            self.registry.remove(effect.name, delete_folder=effect.delete_folder)
        except ManagerError:
            self.selector.select(effect.name)
            raise

    # -------------------------------------------------------------------------
    # Screens
    # -------------------------------------------------------------------------

    def _on_main(self, press: KeyPress) -> List[object]:
        if press.key is Key.UP:
            self.selector.previous()
        elif press.key is Key.DOWN:
            self.selector.next()
        elif press.key is Key.ENTER:
            return [Launch(self.current_instance)]
        elif press.key is Key.CHAR:
            if press.char == 'a':
                self.screen = Screen.ADD
                self.wizard = Wizard()
            elif press.char == 'r':
                self.screen = Screen.REMOVE_CONFIRM
            elif press.char == 'q':
                self.screen = Screen.EXIT_CONFIRM
            elif press.char == 'o':
                return [OpenFolder(self.current_instance)]
            elif press.char == 's':
                return [Save()]
        return []

    def _on_add(self, press: KeyPress) -> List[object]:
        wizard = self.wizard
        if press.key is Key.ENTER:
            if wizard.confirm(self.registry):
                self._leave_add()
        elif press.key is Key.TAB:
            wizard.advance_focus()
        elif press.key is Key.ESC:
            wizard.cancel()
            self._leave_add()
        elif press.key is Key.BACKSPACE:
            wizard.backspace()
        elif press.key is Key.CHAR and press.char:
            wizard.type_char(press.char)
        return []

    def _leave_add(self) -> None:
        self.wizard = None
        self.screen = Screen.MAIN

    def _on_remove_confirm(self, press: KeyPress) -> List[object]:
        if press.key is not Key.CHAR:
            return []
        if press.char == 'n':
            self.screen = Screen.MAIN
        elif press.char in ('y', 'a'):
            name = self.selector.current_key
            self.selector.next()
            self.screen = Screen.MAIN
            return [Remove(name, delete_folder=press.char == 'a')]
        return []

    def _on_exit_confirm(self, press: KeyPress) -> List[object]:
        if press.key is not Key.CHAR:
            return []
        if press.char in ('y', 'q'):
            return [Quit()]
        if press.char == 'n':
            self.screen = Screen.MAIN
        elif press.char == 's':
            self.screen = Screen.MAIN
            return [Save(), Quit()]
        return []

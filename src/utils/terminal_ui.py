"""
Curses front end: key translation, frame rendering and the input loop.

Rendering only reads controller state; every decision lives in the
Controller. Terminal setup and teardown is left to curses.wrapper().
"""

import curses
from typing import Optional, Union

from instance_handling.controller import Controller
from utils.data_model import Focus, Key, KeyPress, Screen
from utils.monitoring import get_logger

logger = get_logger(__name__)

TITLE = "SMAPI Instance Manager"
ESCAPE_DELAY_MS = 25
LIST_WIDTH = 25
MIN_HEIGHT = 6
MIN_WIDTH = 20

SCREEN_LABELS = {
    Screen.MAIN: "Main Menu",
    Screen.ADD: "Adding Menu",
    Screen.REMOVE_CONFIRM: "Removing Menu",
    Screen.EXIT_CONFIRM: "Exiting Menu",
}

FOCUS_LABELS = {
    Focus.NAME: "Editing Name",
    Focus.FOLDER_NAME: "Editing Folder Name",
    Focus.LAUNCHER_PATH: "Editing Smapi Path",
}

FIELD_TITLES = {
    Focus.NAME: "Name",
    Focus.FOLDER_NAME: "Folder Name",
    Focus.LAUNCHER_PATH: "SMAPI Path",
}

KEY_HINTS = {
    Screen.MAIN: "(a) add / (r) remove / (o) open folder / (s) save / (q) quit / (Enter) start / (Up/Down) select",
    Screen.ADD: "(Esc) cancel / (Tab) switch field / (Enter) confirm field",
    Screen.REMOVE_CONFIRM: "(n) cancel / (y) remove instance / (a) remove with folder",
    Screen.EXIT_CONFIRM: "(q) or (y) quit / (s) save and quit / (n) back to main menu",
}

# Color pair ids
_GREEN, _YELLOW, _RED, _POPUP = 1, 2, 3, 4


def translate_key(code: Union[int, str]) -> Optional[KeyPress]:
    """
    Map a curses get_wch() result to a KeyPress.

    Returns:
        The KeyPress, or None for keys no screen binds
    """
    if code == curses.KEY_UP:
        return KeyPress(Key.UP)
    if code == curses.KEY_DOWN:
        return KeyPress(Key.DOWN)
    if code in (curses.KEY_ENTER, "\n", "\r"):
        return KeyPress(Key.ENTER)
    if code in (curses.KEY_BACKSPACE, "\x7f", "\b"):
        return KeyPress(Key.BACKSPACE)
    if code == "\t":
        return KeyPress(Key.TAB)
    if code == "\x1b":
        return KeyPress(Key.ESC)
    if isinstance(code, str) and code.isprintable():
        return KeyPress.of(code)
    return None


def _init_colors() -> None:
    if not curses.has_colors():
        return
    curses.start_color()
    try:
        curses.use_default_colors()
        background = -1
    except curses.error:
        background = curses.COLOR_BLACK
    curses.init_pair(_GREEN, curses.COLOR_GREEN, background)
    curses.init_pair(_YELLOW, curses.COLOR_YELLOW, background)
    curses.init_pair(_RED, curses.COLOR_RED, background)
    curses.init_pair(_POPUP, curses.COLOR_BLACK, curses.COLOR_YELLOW)


def _color(pair: int) -> int:
    return curses.color_pair(pair) if curses.has_colors() else curses.A_NORMAL


def _put(win, y: int, x: int, text: str, attr: int = curses.A_NORMAL) -> None:
    height, width = win.getmaxyx()
    if 0 <= y < height and 0 <= x < width - 1:
        win.addnstr(y, x, text, width - x - 1, attr)


def pad_field(text: str, width: int) -> str:
    """Left-align text in a field of the given width; a non-positive width leaves it unpadded."""
    return f"{text: <{max(0, width)}}"


def render(stdscr, controller: Controller) -> None:
    """Draw one frame for the controller's current state."""
    stdscr.erase()
    height, width = stdscr.getmaxyx()
    if height < MIN_HEIGHT or width < MIN_WIDTH:
        _put(stdscr, 0, 0, "Terminal too small")
        stdscr.refresh()
        return

    _put(stdscr, 0, 1, TITLE, _color(_GREEN) | curses.A_BOLD)
    stdscr.hline(1, 0, curses.ACS_HLINE, width)

    selected = controller.selector.current_key
    for row, name in enumerate(controller.registry.names(), start=2):
        if row >= height - 3:
            break
        if name == selected:
            _put(stdscr, row, 1, f"{name: <{LIST_WIDTH}}", _color(_GREEN) | curses.A_BOLD)
        else:
            _put(stdscr, row, 1, f"{name: <{LIST_WIDTH}}", _color(_YELLOW))

    stdscr.hline(height - 3, 0, curses.ACS_HLINE, width)
    editing = FOCUS_LABELS[controller.wizard.focus] if controller.wizard else "Not Editing Anything"
    _put(stdscr, height - 2, 1, f"{SCREEN_LABELS[controller.screen]} | {editing}")
    if controller.notice:
        _put(stdscr, height - 1, 1, controller.notice, _color(_RED) | curses.A_BOLD)
    else:
        _put(stdscr, height - 1, 1, KEY_HINTS[controller.screen], _color(_RED))

    stdscr.noutrefresh()
    if controller.wizard:
        _render_wizard(controller, height, width)
    curses.doupdate()


def _render_wizard(controller: Controller, height: int, width: int) -> None:
    popup_height = min(11, height)
    popup_width = max(MIN_WIDTH, width * 6 // 10)
    popup_width = min(popup_width, width)
    popup = curses.newwin(popup_height, popup_width, (height - popup_height) // 2, (width - popup_width) // 2)
    popup.bkgd(" ", _color(_POPUP))
    popup.box()
    _put(popup, 0, 2, " Add a new instance ")

    buffers = controller.wizard.buffers()
    for index, focus in enumerate(FIELD_TITLES):
        attr = curses.A_REVERSE if focus is controller.wizard.focus else curses.A_NORMAL
        _put(popup, 1 + index * 3, 2, FIELD_TITLES[focus], curses.A_BOLD)
        _put(popup, 2 + index * 3, 2, pad_field(buffers[focus], popup_width - 5), attr)
    popup.noutrefresh()


def run(stdscr, controller: Controller) -> None:
    """Draw, read one key, hand it to the controller; repeat until exit is confirmed."""
    # Ctrl+C is read as an unbound key, not raised
    curses.raw()
    curses.curs_set(0)
    curses.set_escdelay(ESCAPE_DELAY_MS)
    stdscr.keypad(True)
    _init_colors()

    running = True
    while running:
        render(stdscr, controller)
        code = stdscr.get_wch()
        press = translate_key(code)
        if press is None:
            continue
        running = controller.handle(press)

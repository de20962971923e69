# ubrowse/ui/InputTranslator.py
"""InputTranslator.py
====================
Description:
-----------------------
Translates raw curses input into the browser's abstract `Command` alphabet.

`get_wch()` delivers printable input and most control characters as
one-character strings and special keys (arrows, paging keys, resize) as
integer key codes. The translator normalizes both into `InputEvent`s using
one key map per interaction mode:

- main keys drive the character table;
- list keys drive the block selector;
- prompt keys edit the one-line text prompt, where any printable character
  that is not an editing key becomes `PROMPT_CHAR`.

The help overlay uses the main map: any key dismisses it.

The translator also owns the cached terminal size. On `KEY_RESIZE` it
re-measures through the `measure` callable before emitting `RESIZE`, so the
state machine always sees current dimensions.

Every raw key is traced to the ``ubrowse.keyevents`` logger, which is only
enabled when key tracing is switched on.
"""

import curses
import logging
from typing import Callable, Union

from ubrowse.core.Commands import Command, InputEvent, Mode


KEY_LOGGER = logging.getLogger("ubrowse.keyevents")

RawKey = Union[str, int]

CTRL_C = "\x03"
CTRL_G = "\x07"
CTRL_H = "\x08"
CTRL_L = "\x0c"
CTRL_U = "\x15"
ESC = "\x1b"
DEL = "\x7f"


# ==================== Key maps ====================
MAIN_KEYS: dict[RawKey, Command] = {
    curses.KEY_RIGHT: Command.COLUMN_FORWARD,
    ">": Command.COLUMN_FORWARD,
    curses.KEY_LEFT: Command.COLUMN_BACK,
    "<": Command.COLUMN_BACK,
    curses.KEY_DOWN: Command.STEP_FORWARD,
    "+": Command.STEP_FORWARD,
    curses.KEY_UP: Command.STEP_BACK,
    "-": Command.STEP_BACK,
    " ": Command.PAGE_FORWARD,
    curses.KEY_NPAGE: Command.PAGE_FORWARD,
    curses.KEY_PPAGE: Command.PAGE_BACK,
    curses.KEY_BACKSPACE: Command.PAGE_BACK,
    CTRL_H: Command.PAGE_BACK,
    DEL: Command.PAGE_BACK,
    "}": Command.JUMP_FORWARD,
    "{": Command.JUMP_BACK,
    "/": Command.SEARCH,
    "n": Command.SEARCH_NEXT,
    "p": Command.SEARCH_PREVIOUS,
    "u": Command.GOTO_CODEPOINT,
    "s": Command.GOTO_CODEPOINT,
    "j": Command.BLOCK_SELECT,
    "b": Command.BLOCK_SELECT,
    "[": Command.ADD_COLUMN,
    "]": Command.REMOVE_COLUMN,
    "?": Command.HELP,
    "h": Command.HELP,
    "v": Command.VERSION,
    CTRL_L: Command.REDRAW,
    "q": Command.QUIT,
    CTRL_C: Command.HARD_QUIT,
}

LIST_KEYS: dict[RawKey, Command] = {
    curses.KEY_DOWN: Command.STEP_FORWARD,
    "+": Command.STEP_FORWARD,
    curses.KEY_UP: Command.STEP_BACK,
    "-": Command.STEP_BACK,
    " ": Command.PAGE_FORWARD,
    curses.KEY_NPAGE: Command.PAGE_FORWARD,
    curses.KEY_PPAGE: Command.PAGE_BACK,
    curses.KEY_BACKSPACE: Command.PAGE_BACK,
    CTRL_H: Command.PAGE_BACK,
    DEL: Command.PAGE_BACK,
    "{": Command.LIST_TOP,
    curses.KEY_HOME: Command.LIST_TOP,
    "}": Command.LIST_BOTTOM,
    curses.KEY_END: Command.LIST_BOTTOM,
    "\n": Command.CONFIRM,
    "\r": Command.CONFIRM,
    curses.KEY_ENTER: Command.CONFIRM,
    "?": Command.HELP,
    "h": Command.HELP,
    "v": Command.VERSION,
    CTRL_L: Command.REDRAW,
    "q": Command.CANCEL,
    CTRL_G: Command.CANCEL,
    ESC: Command.CANCEL,
    CTRL_C: Command.HARD_QUIT,
}

PROMPT_KEYS: dict[RawKey, Command] = {
    "\n": Command.PROMPT_SUBMIT,
    "\r": Command.PROMPT_SUBMIT,
    curses.KEY_ENTER: Command.PROMPT_SUBMIT,
    curses.KEY_BACKSPACE: Command.PROMPT_ERASE,
    CTRL_H: Command.PROMPT_ERASE,
    DEL: Command.PROMPT_ERASE,
    curses.KEY_DC: Command.PROMPT_ERASE,
    CTRL_U: Command.PROMPT_KILL,
    CTRL_G: Command.PROMPT_ABORT,
    ESC: Command.PROMPT_ABORT,
    CTRL_L: Command.REDRAW,
    CTRL_C: Command.HARD_QUIT,
}

_KEYMAPS: dict[Mode, dict[RawKey, Command]] = {
    Mode.MAIN: MAIN_KEYS,
    Mode.HELP_OVERLAY: MAIN_KEYS,
    Mode.BLOCK_SELECT: LIST_KEYS,
    Mode.TEXT_PROMPT: PROMPT_KEYS,
}


# ==================== InputTranslator Class ====================
class InputTranslator:
    """Mode-aware translation of raw keys, plus the cached terminal size.

    Attributes:
        measure: Callable returning the live `(height, width)` of the terminal.
        dimensions: The last measured `(height, width)`.
    """

    def __init__(self, measure: Callable[[], tuple[int, int]]) -> None:
        self.measure = measure
        self.dimensions: tuple[int, int] = measure()

    def current_dimensions(self) -> tuple[int, int]:
        return self.dimensions

    def refresh_dimensions(self) -> tuple[int, int]:
        self.dimensions = self.measure()
        return self.dimensions

    def translate(self, key: RawKey, mode: Mode) -> InputEvent:
        """Map one raw key to an `InputEvent` for the given interaction mode."""
        KEY_LOGGER.debug("mode=%s key=%r", mode.name, key)

        if key == curses.KEY_RESIZE:
            height, width = self.refresh_dimensions()
            KEY_LOGGER.debug("resize to %dx%d", width, height)
            return InputEvent(Command.RESIZE)

        keymap = _KEYMAPS[mode]
        command = keymap.get(key)
        if command is not None:
            return InputEvent(command)

        if isinstance(key, str) and len(key) == 1 and key.isprintable():
            if mode is Mode.TEXT_PROMPT:
                return InputEvent(Command.PROMPT_CHAR, key)
            command = keymap.get(key.lower())
            if command is not None:
                return InputEvent(command)

        return InputEvent(Command.UNMAPPED)

# ubrowse/core/Commands.py
"""ubrowse.core.Commands
=======================

The closed vocabulary shared by the input translator and the view state
machine: abstract commands, interaction modes, prompt purposes, overlay
contexts and dispatch outcomes.
"""

from enum import Enum, auto
from typing import NamedTuple, Optional


class Command(Enum):
    STEP_FORWARD = auto()
    STEP_BACK = auto()
    COLUMN_FORWARD = auto()
    COLUMN_BACK = auto()
    PAGE_FORWARD = auto()
    PAGE_BACK = auto()
    JUMP_FORWARD = auto()
    JUMP_BACK = auto()
    LIST_TOP = auto()
    LIST_BOTTOM = auto()
    SEARCH = auto()
    SEARCH_NEXT = auto()
    SEARCH_PREVIOUS = auto()
    GOTO_CODEPOINT = auto()
    BLOCK_SELECT = auto()
    ADD_COLUMN = auto()
    REMOVE_COLUMN = auto()
    HELP = auto()
    VERSION = auto()
    REDRAW = auto()
    RESIZE = auto()
    CONFIRM = auto()
    CANCEL = auto()
    QUIT = auto()
    HARD_QUIT = auto()
    PROMPT_CHAR = auto()
    PROMPT_ERASE = auto()
    PROMPT_KILL = auto()
    PROMPT_SUBMIT = auto()
    PROMPT_ABORT = auto()
    UNMAPPED = auto()


class InputEvent(NamedTuple):
    """A translated key press; `char` is set only for `PROMPT_CHAR`."""

    command: Command
    char: Optional[str] = None


class Mode(Enum):
    MAIN = auto()
    BLOCK_SELECT = auto()
    TEXT_PROMPT = auto()
    HELP_OVERLAY = auto()


class PromptPurpose(Enum):
    """What a text prompt collects, with its label and capacity in characters."""

    SEARCH = ("/", 255)
    JUMP = ("U+", 6)

    def __init__(self, label: str, capacity: int) -> None:
        self.label = label
        self.capacity = capacity

    def accepts(self, char: str) -> bool:
        if self is PromptPurpose.JUMP:
            return char in "0123456789abcdefABCDEF"
        return char.isprintable()


class OverlayContext(Enum):
    MAIN_HELP = auto()
    BLOCK_HELP = auto()
    VERSION = auto()


class Outcome(Enum):
    CONTINUE = auto()
    QUIT = auto()
    HARD_QUIT = auto()

# ubrowse/core/ViewState.py
"""ubrowse.core.ViewState
========================

The browser's interaction state machine.

A `BrowserSession` owns every piece of mutable session state (the leading
entry, the column request, the current mode and its mode-local data) and
advances it one `InputEvent` at a time through `dispatch`. Each mode has
its own handler table mapping `Command` to a bound method; a command not
listed for the current mode is ignored.

After every dispatch the session re-derives the table geometry and clamps
the column count and leading index, so callers never observe an
out-of-range position whatever the terminal size.

Failures that the user should notice (an empty block, a search miss, an
invalid codepoint, a rejected prompt key) are reported through the
injected `alert` callable and never raise.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ubrowse.core.BlockCatalog import BlockCatalog
from ubrowse.core.CharacterIndex import CharacterIndex
from ubrowse.core.Commands import (
    Command,
    InputEvent,
    Mode,
    Outcome,
    OverlayContext,
    PromptPurpose,
)
from ubrowse.core.Dataset import LAST_CODEPOINT
from ubrowse.core.NameSearch import NameSearch
from ubrowse.core.TableGeometry import Layout, clamp_columns, compute_layout


logger = logging.getLogger("ubrowse.viewstate")

JUMP_DISTANCE = 0x1000
DEFAULT_ACCENT = 0x00B7


@dataclass
class PromptState:
    """An open one-line text prompt."""

    purpose: PromptPurpose
    text: str = ""
    limit: int = 0

    @property
    def label(self) -> str:
        return self.purpose.label

    @property
    def capacity(self) -> int:
        return self.purpose.capacity


## ================= BrowserSession Class ==============================
class BrowserSession:
    """Mutable state of one browsing session and its command handlers.

    Args:
        index: Nearest-match index over the catalog.
        search: Name search; its memory persists for the session.
        blocks: Block catalog used by the block-select mode.
        dimensions: Callable returning the current terminal `(height, width)`.
        alert: Callable invoked with no arguments to signal a user error.
        leading_index: Initial first displayed entry.
        column_count: Requested number of table columns.
        accent: Codepoint drawn beneath combining marks.
        show_combining: Whether combining marks are drawn over the accent.
    """

    def __init__(
        self,
        index: CharacterIndex,
        search: NameSearch,
        blocks: BlockCatalog,
        dimensions: Callable[[], tuple[int, int]],
        alert: Callable[[], None],
        leading_index: int = 0,
        column_count: int = 2,
        accent: int = DEFAULT_ACCENT,
        show_combining: bool = True,
    ) -> None:
        self.index = index
        self.search = search
        self.blocks = blocks
        self.dimensions = dimensions
        self.alert = alert

        self.leading_index = leading_index
        self.column_count = column_count
        self.accent = accent
        self.show_combining = show_combining

        self.mode = Mode.MAIN
        self.block_cursor = 0
        self.prompt: Optional[PromptState] = None
        self.overlay: Optional[OverlayContext] = None
        self.overlay_return = Mode.MAIN

        self._handlers: dict[Mode, dict[Command, Callable[[InputEvent], Outcome]]] = {
            Mode.MAIN: self._setup_main_handlers(),
            Mode.BLOCK_SELECT: self._setup_block_handlers(),
            Mode.TEXT_PROMPT: self._setup_prompt_handlers(),
        }
        self._normalize()

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def layout(self) -> Layout:
        height, width = self.dimensions()
        return compute_layout(width, height, self.column_count, len(self.index))

    def _normalize(self) -> None:
        _, width = self.dimensions()
        self.column_count = clamp_columns(self.column_count, width)
        self.leading_index = self.layout.clamp(self.leading_index)
        if len(self.blocks):
            self.block_cursor = min(max(self.block_cursor, 0), len(self.blocks) - 1)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def dispatch(self, event: InputEvent) -> Outcome:
        """Apply one input event and return whether the session continues."""
        if self.mode is Mode.HELP_OVERLAY:
            outcome = self._handle_overlay(event)
        else:
            handler = self._handlers[self.mode].get(event.command)
            if handler is None:
                logger.debug("Ignoring %s in %s mode.", event.command.name, self.mode.name)
                outcome = Outcome.CONTINUE
            else:
                outcome = handler(event)
        self._normalize()
        return outcome

    def _fail(self, message: str, *args) -> Outcome:
        logger.debug(message, *args)
        self.alert()
        return Outcome.CONTINUE

    # ------------------------------------------------------------------
    # Shared handlers
    # ------------------------------------------------------------------
    def _redraw(self, event: InputEvent) -> Outcome:
        return Outcome.CONTINUE

    def _quit(self, event: InputEvent) -> Outcome:
        return Outcome.QUIT

    def _hard_quit(self, event: InputEvent) -> Outcome:
        return Outcome.HARD_QUIT

    def _open_overlay(self, context: OverlayContext) -> None:
        self.overlay_return = self.mode
        self.overlay = context
        self.mode = Mode.HELP_OVERLAY

    def _show_help(self, event: InputEvent) -> Outcome:
        if self.mode is Mode.BLOCK_SELECT:
            self._open_overlay(OverlayContext.BLOCK_HELP)
        else:
            self._open_overlay(OverlayContext.MAIN_HELP)
        return Outcome.CONTINUE

    def _show_version(self, event: InputEvent) -> Outcome:
        if not self.index.dataset.version:
            return self._fail("No Unicode version label available.")
        self._open_overlay(OverlayContext.VERSION)
        return Outcome.CONTINUE

    def _handle_overlay(self, event: InputEvent) -> Outcome:
        if event.command is Command.RESIZE:
            return Outcome.CONTINUE
        self.mode = self.overlay_return
        self.overlay = None
        return Outcome.CONTINUE

    # ------------------------------------------------------------------
    # MAIN mode
    # ------------------------------------------------------------------
    def _setup_main_handlers(self) -> dict[Command, Callable[[InputEvent], Outcome]]:
        return {
            Command.STEP_FORWARD: lambda e: self._move_by(1),
            Command.STEP_BACK: lambda e: self._move_by(-1),
            Command.COLUMN_FORWARD: lambda e: self._move_by(self.layout.visible_rows),
            Command.COLUMN_BACK: lambda e: self._move_by(-self.layout.visible_rows),
            Command.PAGE_FORWARD: lambda e: self._move_by(self.layout.table_size),
            Command.PAGE_BACK: lambda e: self._move_by(-self.layout.table_size),
            Command.JUMP_FORWARD: lambda e: self._jump_by(JUMP_DISTANCE),
            Command.JUMP_BACK: lambda e: self._jump_by(-JUMP_DISTANCE),
            Command.SEARCH: lambda e: self._open_prompt(PromptPurpose.SEARCH),
            Command.SEARCH_NEXT: lambda e: self._repeat_search(1),
            Command.SEARCH_PREVIOUS: lambda e: self._repeat_search(-1),
            Command.GOTO_CODEPOINT: lambda e: self._open_prompt(PromptPurpose.JUMP),
            Command.BLOCK_SELECT: self._enter_block_select,
            Command.ADD_COLUMN: lambda e: self._change_columns(1),
            Command.REMOVE_COLUMN: lambda e: self._change_columns(-1),
            Command.HELP: self._show_help,
            Command.VERSION: self._show_version,
            Command.REDRAW: self._redraw,
            Command.RESIZE: self._redraw,
            Command.QUIT: self._quit,
            Command.HARD_QUIT: self._hard_quit,
        }

    def _move_by(self, delta: int) -> Outcome:
        self.leading_index += delta
        return Outcome.CONTINUE

    def _jump_by(self, delta: int) -> Outcome:
        self.leading_index = self.index.offset_by_delta(self.leading_index, delta)
        return Outcome.CONTINUE

    def _change_columns(self, delta: int) -> Outcome:
        self.column_count += delta
        return Outcome.CONTINUE

    def _repeat_search(self, direction: int) -> Outcome:
        found = self.search.find(None, self.leading_index, direction)
        if found is None:
            return self._fail("Repeat search found nothing (direction %+d).", direction)
        self.leading_index = found
        return Outcome.CONTINUE

    def _enter_block_select(self, event: InputEvent) -> Outcome:
        if not len(self.blocks):
            return self._fail("No blocks to select from.")
        # Touch the mask so it is built before the list is first drawn.
        self.blocks.empty_mask
        self.block_cursor = self.blocks.initial_selection(
            self.index.codepoint(self.leading_index)
        )
        self.mode = Mode.BLOCK_SELECT
        return Outcome.CONTINUE

    # ------------------------------------------------------------------
    # BLOCK_SELECT mode
    # ------------------------------------------------------------------
    def _setup_block_handlers(self) -> dict[Command, Callable[[InputEvent], Outcome]]:
        return {
            Command.STEP_FORWARD: lambda e: self._move_cursor(1),
            Command.STEP_BACK: lambda e: self._move_cursor(-1),
            Command.PAGE_FORWARD: lambda e: self._move_cursor(self.layout.visible_rows),
            Command.PAGE_BACK: lambda e: self._move_cursor(-self.layout.visible_rows),
            Command.LIST_TOP: lambda e: self._set_cursor(0),
            Command.LIST_BOTTOM: lambda e: self._set_cursor(len(self.blocks) - 1),
            Command.CONFIRM: self._confirm_block,
            Command.CANCEL: self._cancel_block,
            Command.HELP: self._show_help,
            Command.VERSION: self._show_version,
            Command.REDRAW: self._redraw,
            Command.RESIZE: self._redraw,
            Command.HARD_QUIT: self._hard_quit,
        }

    def _move_cursor(self, delta: int) -> Outcome:
        return self._set_cursor(self.block_cursor + delta)

    def _set_cursor(self, position: int) -> Outcome:
        self.block_cursor = min(max(position, 0), len(self.blocks) - 1)
        return Outcome.CONTINUE

    def _confirm_block(self, event: InputEvent) -> Outcome:
        if self.blocks.is_empty(self.block_cursor):
            return self._fail("Block %d has no characters.", self.block_cursor)
        block = self.blocks[self.block_cursor]
        self.leading_index = self.index.lookup_nearest(block.first)
        self.mode = Mode.MAIN
        logger.debug("Selected block %r at index %d.", block.name, self.leading_index)
        return Outcome.CONTINUE

    def _cancel_block(self, event: InputEvent) -> Outcome:
        self.mode = Mode.MAIN
        return Outcome.CONTINUE

    # ------------------------------------------------------------------
    # TEXT_PROMPT mode
    # ------------------------------------------------------------------
    def _setup_prompt_handlers(self) -> dict[Command, Callable[[InputEvent], Outcome]]:
        return {
            Command.PROMPT_CHAR: self._prompt_char,
            Command.PROMPT_ERASE: self._prompt_erase,
            Command.PROMPT_KILL: self._prompt_kill,
            Command.PROMPT_ABORT: self._prompt_abort,
            Command.PROMPT_SUBMIT: self._prompt_submit,
            Command.RESIZE: self._prompt_resize,
            Command.REDRAW: self._redraw,
            Command.HARD_QUIT: self._hard_quit,
        }

    def _prompt_limit(self, purpose: PromptPurpose) -> int:
        _, width = self.dimensions()
        return max(0, min(purpose.capacity, width - len(purpose.label)))

    def _open_prompt(self, purpose: PromptPurpose) -> Outcome:
        self.prompt = PromptState(purpose, "", self._prompt_limit(purpose))
        self.mode = Mode.TEXT_PROMPT
        return Outcome.CONTINUE

    def _close_prompt(self) -> PromptState:
        prompt = self.prompt
        self.prompt = None
        self.mode = Mode.MAIN
        return prompt

    def _prompt_char(self, event: InputEvent) -> Outcome:
        prompt = self.prompt
        char = event.char or ""
        if len(char) != 1 or not prompt.purpose.accepts(char):
            return self._fail("Prompt rejected character %r.", char)
        if len(prompt.text) >= prompt.limit:
            return self._fail("Prompt is full (%d characters).", prompt.limit)
        prompt.text += char
        return Outcome.CONTINUE

    def _prompt_erase(self, event: InputEvent) -> Outcome:
        if not self.prompt.text:
            return self._fail("Nothing to erase.")
        self.prompt.text = self.prompt.text[:-1]
        return Outcome.CONTINUE

    def _prompt_kill(self, event: InputEvent) -> Outcome:
        self.prompt.text = ""
        return Outcome.CONTINUE

    def _prompt_abort(self, event: InputEvent) -> Outcome:
        self._close_prompt()
        return Outcome.CONTINUE

    def _prompt_resize(self, event: InputEvent) -> Outcome:
        prompt = self.prompt
        prompt.limit = self._prompt_limit(prompt.purpose)
        prompt.text = prompt.text[: prompt.limit]
        return Outcome.CONTINUE

    def _prompt_submit(self, event: InputEvent) -> Outcome:
        prompt = self._close_prompt()
        if prompt.purpose is PromptPurpose.SEARCH:
            return self._submit_search(prompt.text)
        return self._submit_jump(prompt.text)

    def _submit_search(self, text: str) -> Outcome:
        found = self.search.find(text or None, self.leading_index, 1)
        if found is None:
            return self._fail("No character name contains %r.", text)
        self.leading_index = found
        return Outcome.CONTINUE

    def _submit_jump(self, text: str) -> Outcome:
        try:
            value = int(text or "0", 16)
        except ValueError:
            return self._fail("Invalid codepoint %r.", text)
        if value > LAST_CODEPOINT:
            return self._fail("Codepoint U+%X is out of range.", value)
        self.leading_index = self.index.lookup_nearest(value)
        return Outcome.CONTINUE

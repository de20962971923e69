# ubrowse/cli.py
"""
ubrowse Command Line
====================

Entry point for the `ubrowse` program. It performs, in order:
1) Environment Loading: reads ~/.config/ubrowse/.env so UBROWSE_CONFIG and
   UBROWSE_KEYTRACE can be set there.
2) Argument Parsing: --accent, --noaccent, --version and the optional START.
3) Configuration & Logging: merges the user's config.toml over the defaults
   and initializes logging before anything else logs.
4) Catalog Build: loads the Unicode catalog and resolves START and the accent.
5) Curses Wrapper: runs the browser loop inside `curses.wrapper` so the
   terminal is always restored, then maps the session outcome to an exit.
"""

import argparse
import curses
import locale
import logging
import sys
import unicodedata
from typing import Any, Optional, Sequence

from dotenv import load_dotenv

from ubrowse import PROGRAM_NAME, __version__
from ubrowse.core import (
    BlockCatalog,
    BrowserSession,
    CharacterIndex,
    Command,
    DatasetError,
    NameSearch,
    Outcome,
    StartPositionError,
    load_dataset,
    resolve_accent,
    resolve_start,
)
from ubrowse.ui.CursesSurface import CursesSurface
from ubrowse.ui.DrawScreen import DrawScreen
from ubrowse.ui.InputTranslator import InputTranslator
from ubrowse.utils.logging_config import setup_logging
from ubrowse.utils.utils import config_int, get_config_dir, load_config


logger = logging.getLogger("ubrowse")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Browse the Unicode character set in a terminal.",
        epilog=(
            "START may be a single character, a hexadecimal codepoint "
            "(optionally prefixed with U+), or part of a character name."
        ),
    )
    parser.add_argument(
        "-a",
        "--accent",
        metavar="C",
        help="character drawn under combining marks (a character or hex codepoint)",
    )
    parser.add_argument(
        "-A",
        "--noaccent",
        action="store_true",
        help="draw combining marks on their own",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="show version information and exit",
    )
    parser.add_argument("start", nargs="?", metavar="START", help="initial position")
    return parser


def version_text(unicode_version: str) -> str:
    return f"{PROGRAM_NAME} {__version__}\nUnicode version {unicode_version or 'unknown'}"


def _load_environment() -> None:
    dotenv_path = get_config_dir() / ".env"
    if dotenv_path.is_file():
        load_dotenv(dotenv_path=dotenv_path)


# --- Curses Application Runner ---
def run_browser(stdscr: Any, session_args: dict[str, Any]) -> Outcome:
    """
    Target for `curses.wrapper`. Builds the session around `stdscr` and runs
    the input loop until the user quits.
    """
    curses.raw()
    curses.noecho()
    curses.nonl()
    stdscr.keypad(True)

    surface = CursesSurface(stdscr)
    translator = InputTranslator(surface.size)
    session = BrowserSession(
        dimensions=translator.current_dimensions,
        alert=surface.beep,
        **session_args,
    )
    screen = DrawScreen(session, surface)
    return event_loop(stdscr, translator, session, screen)


def event_loop(
    stdscr: Any,
    translator: InputTranslator,
    session: BrowserSession,
    screen: DrawScreen,
) -> Outcome:
    """Draw, read one key, dispatch; repeat until the session ends."""
    while True:
        screen.draw()
        try:
            key = stdscr.get_wch()
        except curses.error:
            continue
        event = translator.translate(key, session.mode)
        if event.command in (Command.REDRAW, Command.RESIZE):
            screen.request_full_redraw()
        outcome = session.dispatch(event)
        if outcome is not Outcome.CONTINUE:
            logger.info("Session ended with %s.", outcome.name)
            return outcome


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the program and return its exit status."""
    _load_environment()
    args = build_parser().parse_args(argv)

    if args.version:
        print(version_text(unicodedata.unidata_version))
        return 0

    config = load_config()
    setup_logging(config)

    try:
        dataset = load_dataset()
    except DatasetError as e:
        logger.critical("Could not build the character catalog: %s", e, exc_info=True)
        print(f"{PROGRAM_NAME}: {e}", file=sys.stderr)
        return 1

    display = config.get("display", {})
    index = CharacterIndex(dataset)
    search = NameSearch(dataset)
    try:
        accent_value = args.accent if args.accent is not None else str(display.get("accent", "U+00B7"))
        accent = resolve_accent(accent_value, index)
        leading = resolve_start(args.start, index, search) if args.start is not None else 0
    except StartPositionError as e:
        logger.error("Bad command-line value: %s", e)
        print(f"{PROGRAM_NAME}: {e}", file=sys.stderr)
        return 1

    session_args = {
        "index": index,
        "search": search,
        "blocks": BlockCatalog(index),
        "leading_index": leading,
        "column_count": config_int(display, "columns", 2),
        "accent": accent,
        "show_combining": bool(display.get("show_combining", True)) and not args.noaccent,
    }

    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    logger.info("ubrowse starting at entry %d.", leading)
    try:
        outcome = curses.wrapper(run_browser, session_args)
    except KeyboardInterrupt:
        outcome = Outcome.HARD_QUIT

    if outcome is Outcome.HARD_QUIT:
        raise SystemExit(0)
    return 0


def start() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    start()

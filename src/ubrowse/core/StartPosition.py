# ubrowse/core/StartPosition.py
"""Resolution of the command-line start position and accent arguments."""

import logging
import re

from ubrowse.core.CharacterIndex import CharacterIndex
from ubrowse.core.Dataset import LAST_CODEPOINT
from ubrowse.core.NameSearch import NameSearch


logger = logging.getLogger("ubrowse.start")

_HEX_CODEPOINT = re.compile(r"^(?:[Uu]\+)?([0-9A-Fa-f]+)$")


class StartPositionError(ValueError):
    """Raised when a start or accent argument names no character."""


def parse_codepoint(text: str) -> int:
    """Parse `XXXX` or `U+XXXX` as a codepoint; returns -1 when it is not one."""
    match = _HEX_CODEPOINT.match(text.strip())
    if not match:
        return -1
    value = int(match.group(1), 16)
    return value if value <= LAST_CODEPOINT else -1


def resolve_start(text: str, index: CharacterIndex, search: NameSearch) -> int:
    """Turn the START argument into an entry index.

    Tried in order: a single literal character, a hex codepoint with an
    optional ``U+`` prefix, and finally a case-insensitive substring of a
    character name searched from the top of the catalog. A successful name
    search is remembered as the session's last query.

    Raises:
        StartPositionError: If none of the interpretations yields a character.
    """
    if len(text) == 1:
        return index.lookup_nearest(ord(text))

    codepoint = parse_codepoint(text)
    if codepoint >= 0:
        return index.lookup_nearest(codepoint)

    found = search.find(text, 0, 1) if text else None
    if found is None:
        raise StartPositionError(f'Invalid start value: "{text}".')
    logger.debug("Start value %r matched entry %d by name.", text, found)
    return found


def resolve_accent(text: str, index: CharacterIndex) -> int:
    """Turn the --accent argument into a codepoint.

    A single character is used as-is; anything else must be a hex codepoint,
    which is snapped to the nearest character in the catalog.

    Raises:
        StartPositionError: If the value is neither.
    """
    if len(text) == 1:
        return ord(text)
    codepoint = parse_codepoint(text)
    if codepoint < 0:
        raise StartPositionError(f'invalid accent character value: "{text}"')
    return index.codepoint(index.lookup_nearest(codepoint))

# src/ubrowse/core/__init__.py
"""Public facade for ubrowse.core: re-export the main classes from the CamelCase modules."""

from .BlockCatalog import BlockCatalog  # noqa: F401
from .CharacterIndex import CharacterIndex  # noqa: F401
from .Commands import (  # noqa: F401
    Command,
    InputEvent,
    Mode,
    Outcome,
    OverlayContext,
    PromptPurpose,
)
from .Dataset import (  # noqa: F401
    BlockRange,
    CodepointEntry,
    Dataset,
    DatasetError,
    load_dataset,
)
from .NameSearch import NameSearch  # noqa: F401
from .TableGeometry import Layout, compute_layout  # noqa: F401
from .StartPosition import StartPositionError, resolve_accent, resolve_start  # noqa: F401
from .ViewState import BrowserSession  # noqa: F401


__all__ = [
    "BlockCatalog",
    "BlockRange",
    "BrowserSession",
    "CharacterIndex",
    "CodepointEntry",
    "Command",
    "Dataset",
    "DatasetError",
    "InputEvent",
    "Layout",
    "Mode",
    "NameSearch",
    "Outcome",
    "OverlayContext",
    "PromptPurpose",
    "StartPositionError",
    "compute_layout",
    "load_dataset",
    "resolve_accent",
    "resolve_start",
]

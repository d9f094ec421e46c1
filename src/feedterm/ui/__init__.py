"""Renderers: static report and interactive browser.

The curses session lives in ``feedterm.ui.terminal`` and is imported on demand.
"""

from feedterm.ui.controller import (
    Action,
    BrowserController,
    Focus,
    Key,
    ListEntry,
    consume_feeds,
)
from feedterm.ui.render import colourize, display, format_item

__all__ = [
    "Action",
    "BrowserController",
    "Focus",
    "Key",
    "ListEntry",
    "colourize",
    "consume_feeds",
    "display",
    "format_item",
]

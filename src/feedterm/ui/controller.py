"""Interactive browser state machine.

The controller owns everything the two panes show: the article list, the
cursor, which pane has focus and the detail text. It knows nothing about the
terminal; the curses session feeds it keys and draws what it holds.

Only the UI loop mutates controller state. The background stream consumer
hands batches over through :meth:`BrowserController.post_batch`, which only
enqueues; the UI loop applies them on its own turn via
:meth:`BrowserController.drain_updates`.
"""

import asyncio
from collections.abc import AsyncIterable, Awaitable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol

import structlog

from feedterm.exceptions import ExtractionError
from feedterm.models.feed import RawFeed
from feedterm.models.item import Colour, FeedItem
from feedterm.pipeline.display import DisplayMode, DisplayOption, apply_options
from feedterm.pipeline.filters import Filter, Filters
from feedterm.pipeline.unpack import unpack_feed
from feedterm.ui.render import format_item

logger = structlog.get_logger()


class Focus(Enum):
    LIST = auto()
    DETAIL = auto()


class Key(Enum):
    """Terminal-independent input events."""

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    SELECT = auto()
    DISMISS = auto()
    QUIT = auto()


class Action(Enum):
    """What the UI loop must do after a key was handled."""

    NONE = auto()
    REDRAW = auto()
    EXTRACT = auto()
    QUIT = auto()


class TextExtractor(Protocol):
    """Anything that turns an article link into readable text."""

    async def extract(self, url: str) -> str: ...


@dataclass(frozen=True)
class ListEntry:
    """One row of the article list: display text plus the article link."""

    primary: str
    secondary: str = ""
    colour: Colour | None = None

    @classmethod
    def from_item(cls, item: FeedItem) -> "ListEntry":
        primary = format_item(item, include_links=False).rstrip("\n").replace("\t", "  ")
        colour = Colour.GREEN if item.is_title_card else item.colour
        return cls(primary=primary.strip(), secondary=item.link, colour=colour)


class BrowserController:
    """State of the two-pane browser.

    Attributes:
        entries: Rows of the list pane, append-only.
        cursor: Index of the highlighted row.
        focus: Pane holding input focus.
        detail_lines: Text of the detail pane.
        detail_offset: First visible line of the detail pane.
    """

    def __init__(self, page_size: int = 10):
        self.entries: list[ListEntry] = []
        self.cursor = 0
        self.focus = Focus.LIST
        self.detail_lines: list[str] = []
        self.detail_offset = 0
        self.page_size = page_size

        self._pending: asyncio.Queue[list[ListEntry]] = asyncio.Queue()
        self._insert_at = 0
        self._engine: Awaitable[TextExtractor] | None = None

    # Engine

    def attach_engine(self, engine: Awaitable[TextExtractor]) -> None:
        """Set the extraction engine future.

        Selections made before it resolves wait for it.
        """
        self._engine = engine

    # Incoming feeds

    def post_batch(self, items: Iterable[FeedItem]) -> None:
        """Queue a display-ordered batch for insertion. Safe from any task."""
        self._pending.put_nowait([ListEntry.from_item(item) for item in items])

    def drain_updates(self) -> bool:
        """Insert every queued batch. Called by the UI loop only.

        Rows go in at the insertion point, which only advances, so rows
        already shown never move; the highlighted position is restored after
        each batch.

        Returns:
            True if any rows were added.
        """
        changed = False
        while True:
            try:
                batch = self._pending.get_nowait()
            except asyncio.QueueEmpty:
                break
            position = self.cursor
            for entry in batch:
                self.entries.insert(self._insert_at, entry)
                self._insert_at += 1
            # Keep the cursor where it was
            self.cursor = min(position, max(len(self.entries) - 1, 0))
            changed = changed or bool(batch)
        return changed

    # Navigation

    @property
    def current_entry(self) -> ListEntry | None:
        if not self.entries:
            return None
        return self.entries[self.cursor]

    def handle_key(self, key: Key) -> Action:
        """Apply a key press to the state.

        Returns:
            The follow-up the UI loop must perform.
        """
        if key is Key.QUIT:
            return Action.QUIT
        if self.focus is Focus.LIST:
            return self._handle_list_key(key)
        return self._handle_detail_key(key)

    def _handle_list_key(self, key: Key) -> Action:
        if key is Key.UP:
            return self._move_cursor(-1)
        if key is Key.DOWN:
            return self._move_cursor(1)
        if key is Key.PAGE_UP:
            return self._move_cursor(-self.page_size)
        if key is Key.PAGE_DOWN:
            return self._move_cursor(self.page_size)
        if key is Key.SELECT:
            entry = self.current_entry
            if entry is None or not entry.secondary:
                # Separators and title cards have nothing to open
                return Action.NONE
            return Action.EXTRACT
        if key is Key.RIGHT:
            self.focus = Focus.DETAIL
            return Action.REDRAW
        return Action.NONE

    def _handle_detail_key(self, key: Key) -> Action:
        if key in (Key.LEFT, Key.DISMISS, Key.SELECT):
            self.focus = Focus.LIST
            return Action.REDRAW
        if key is Key.UP:
            return self._scroll_detail(-1)
        if key is Key.DOWN:
            return self._scroll_detail(1)
        if key is Key.PAGE_UP:
            return self._scroll_detail(-self.page_size)
        if key is Key.PAGE_DOWN:
            return self._scroll_detail(self.page_size)
        return Action.NONE

    def _move_cursor(self, delta: int) -> Action:
        """Move the cursor, stopping at either end instead of wrapping."""
        if not self.entries:
            return Action.NONE
        target = min(max(self.cursor + delta, 0), len(self.entries) - 1)
        if target == self.cursor:
            return Action.NONE
        self.cursor = target
        return Action.REDRAW

    def _scroll_detail(self, delta: int) -> Action:
        last = max(len(self.detail_lines) - 1, 0)
        target = min(max(self.detail_offset + delta, 0), last)
        if target == self.detail_offset:
            return Action.NONE
        self.detail_offset = target
        return Action.REDRAW

    # Detail pane

    def set_detail(self, text: str) -> None:
        """Replace the detail text and scroll to its beginning."""
        self.detail_lines = text.splitlines()
        self.detail_offset = 0

    async def extract_selected(self) -> bool:
        """Load the highlighted article into the detail pane.

        Waits for the engine if it is still starting. Failures are shown in
        the pane and leave focus on the list.

        Returns:
            True if the article text was loaded.
        """
        entry = self.current_entry
        if entry is None or not entry.secondary:
            return False
        link = entry.secondary

        try:
            if self._engine is None:
                raise ExtractionError(link, "no reader engine configured")
            engine = await self._engine
            text = await engine.extract(link)
        except ExtractionError as e:
            logger.warning("Article extraction failed", url=link, error=str(e))
            self.set_detail(f"{link}\n\n{e}")
            return False

        self.set_detail(f"{link}\n\n{text}")
        self.focus = Focus.DETAIL
        return True


async def consume_feeds(
    feeds: AsyncIterable[RawFeed | None],
    controller: BrowserController,
    mode: DisplayMode,
    filters: Filters | Iterable[Filter] | None = None,
    options: Sequence[DisplayOption] = (),
) -> int:
    """Feed arriving feeds into the browser until the stream ends.

    Each feed is unpacked through the session's filter chain, ordered by the
    display mode, decorated and posted as one batch. Failed sources (``None``)
    are skipped.

    Returns:
        Number of feeds posted.
    """
    chain = Filters.of(filters)
    posted = 0
    async for feed in feeds:
        if feed is None:
            continue
        items = apply_options(mode(unpack_feed(feed, chain)), options)
        controller.post_batch(items)
        posted += 1
        logger.debug("Feed posted to browser", url=feed.url, item_count=len(items))
    return posted

"""Curses front end for the two-pane browser.

Everything runs on one asyncio loop: the UI loop below (sole owner of the
screen and of controller state), the feed consumer task and the reader engine
start-up task.
"""

import asyncio
import curses
from collections.abc import AsyncIterable, Iterable, Sequence

import structlog

from feedterm.models.feed import RawFeed
from feedterm.models.item import Colour
from feedterm.pipeline.display import DisplayMode, DisplayOption
from feedterm.pipeline.filters import Filter, Filters
from feedterm.reader.extractor import ArticleExtractor
from feedterm.ui.controller import Action, BrowserController, Focus, Key, consume_feeds

logger = structlog.get_logger()

KEYMAP = {
    curses.KEY_UP: Key.UP,
    ord("k"): Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    ord("j"): Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    ord("h"): Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    ord("l"): Key.RIGHT,
    curses.KEY_PPAGE: Key.PAGE_UP,
    curses.KEY_NPAGE: Key.PAGE_DOWN,
    curses.KEY_ENTER: Key.SELECT,
    ord("\n"): Key.SELECT,
    ord("\r"): Key.SELECT,
    27: Key.DISMISS,  # Esc
    ord("\t"): Key.DISMISS,
    17: Key.QUIT,  # Ctrl-Q
    3: Key.QUIT,  # Ctrl-C, delivered as a key in raw mode
    ord("q"): Key.QUIT,
}

CURSES_COLOURS = {
    Colour.RED: curses.COLOR_RED,
    Colour.GREEN: curses.COLOR_GREEN,
    Colour.YELLOW: curses.COLOR_YELLOW,
    Colour.BLUE: curses.COLOR_BLUE,
    Colour.PURPLE: curses.COLOR_MAGENTA,
    Colour.CYAN: curses.COLOR_CYAN,
    Colour.GRAY: curses.COLOR_WHITE,
    Colour.WHITE: curses.COLOR_WHITE,
}


class ColourScheme:
    """Maps display colours onto curses colour pairs."""

    def __init__(self) -> None:
        self._pairs: dict[Colour, int] = {}

    def setup(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        curses.use_default_colors()
        for number, (colour, curses_colour) in enumerate(CURSES_COLOURS.items(), start=1):
            curses.init_pair(number, curses_colour, -1)
            self._pairs[colour] = number

    def attr(self, colour: Colour | None) -> int:
        if colour is None or colour not in self._pairs:
            return curses.A_NORMAL
        attr = curses.color_pair(self._pairs[colour])
        if colour is Colour.WHITE:
            attr |= curses.A_BOLD
        elif colour is Colour.GRAY:
            attr |= curses.A_DIM
        return attr


class BrowserView:
    """Draws controller state: article list on the left, detail on the right.

    The focused pane gets a green border, the other a gray one.
    """

    def __init__(self, stdscr: "curses.window", colours: ColourScheme):
        self._stdscr = stdscr
        self._colours = colours
        self._top = 0

    @property
    def list_rows(self) -> int:
        height, _ = self._stdscr.getmaxyx()
        return max(height - 2, 1)

    def render(self, controller: BrowserController) -> None:
        height, width = self._stdscr.getmaxyx()
        self._stdscr.erase()
        if height < 3 or width < 8:
            self._stdscr.refresh()
            return

        half = width // 2
        list_win = self._stdscr.derwin(height, half, 0, 0)
        detail_win = self._stdscr.derwin(height, width - half, 0, half)

        self._draw_border(list_win, controller.focus is Focus.LIST)
        self._draw_border(detail_win, controller.focus is Focus.DETAIL)
        self._draw_list(list_win, controller)
        self._draw_detail(detail_win, controller)

        self._stdscr.noutrefresh()
        curses.doupdate()

    def _draw_border(self, win: "curses.window", focused: bool) -> None:
        win.attrset(self._colours.attr(Colour.GREEN if focused else Colour.GRAY))
        win.box()
        win.attrset(curses.A_NORMAL)

    def _draw_list(self, win: "curses.window", controller: BrowserController) -> None:
        rows, cols = win.getmaxyx()
        rows, cols = rows - 2, cols - 2

        # Scroll just enough to keep the cursor visible
        if controller.cursor < self._top:
            self._top = controller.cursor
        elif controller.cursor >= self._top + rows:
            self._top = controller.cursor - rows + 1

        visible = controller.entries[self._top : self._top + rows]
        for row, entry in enumerate(visible):
            index = self._top + row
            attr = self._colours.attr(entry.colour)
            if index == controller.cursor:
                attr |= curses.A_REVERSE
                text = entry.primary.ljust(cols)
            else:
                text = entry.primary
            self._put(win, row + 1, 1, text, cols, attr)

    def _draw_detail(self, win: "curses.window", controller: BrowserController) -> None:
        rows, cols = win.getmaxyx()
        rows, cols = rows - 2, cols - 2
        start = controller.detail_offset
        for row, line in enumerate(controller.detail_lines[start : start + rows]):
            self._put(win, row + 1, 1, line.expandtabs(4), cols, curses.A_NORMAL)

    def _put(self, win: "curses.window", y: int, x: int, text: str, width: int, attr: int) -> None:
        try:
            win.addnstr(y, x, text, width, attr)
        except curses.error:
            # Writing into the bottom-right cell raises even though it succeeds
            pass


class Session:
    """One interactive browsing session on a curses screen."""

    def __init__(
        self,
        stdscr: "curses.window",
        feeds: AsyncIterable[RawFeed | None],
        mode: DisplayMode,
        filters: Filters | Iterable[Filter] | None = None,
        options: Sequence[DisplayOption] = (),
        extractor: ArticleExtractor | None = None,
        poll_interval: float = 0.03,
    ):
        self._stdscr = stdscr
        self._feeds = feeds
        self._mode = mode
        self._filters = Filters.of(filters)
        self._options = options
        self._extractor = extractor or ArticleExtractor()
        self._poll_interval = poll_interval

        self._colours = ColourScheme()
        self._view = BrowserView(stdscr, self._colours)
        self.controller = BrowserController()

    async def run(self) -> None:
        """Run until the user quits."""
        engine_task = asyncio.create_task(self._extractor.start())
        self.controller.attach_engine(engine_task)
        consumer_task = asyncio.create_task(
            consume_feeds(
                self._feeds,
                self.controller,
                self._mode,
                self._filters,
                self._options,
            )
        )
        consumer_task.add_done_callback(self._log_consumer_exit)

        try:
            await self._loop()
        finally:
            consumer_task.cancel()
            engine_task.cancel()
            for result in await asyncio.gather(consumer_task, engine_task, return_exceptions=True):
                if isinstance(result, Exception):
                    logger.warning("Background task failed", error=str(result))
            await self._extractor.close()

    async def _loop(self) -> None:
        self._setup_screen()
        dirty = True
        while True:
            if self.controller.drain_updates():
                dirty = True
            if dirty:
                self.controller.page_size = self._view.list_rows
                self._view.render(self.controller)
                dirty = False

            code = self._stdscr.getch()
            if code == -1:
                await asyncio.sleep(self._poll_interval)
                continue
            if code == curses.KEY_RESIZE:
                dirty = True
                continue

            key = KEYMAP.get(code)
            if key is None:
                continue

            action = self.controller.handle_key(key)
            if action is Action.QUIT:
                return
            if action is Action.EXTRACT:
                await self._extract()
            dirty = dirty or action is not Action.NONE

    async def _extract(self) -> None:
        entry = self.controller.current_entry
        if entry is not None:
            self.controller.set_detail(f"{entry.secondary}\n\nLoading...")
            self._view.render(self.controller)
        await self.controller.extract_selected()
        self._view.render(self.controller)

    def _setup_screen(self) -> None:
        curses.raw()
        curses.set_escdelay(25)
        self._stdscr.keypad(True)
        self._stdscr.nodelay(True)
        try:
            curses.curs_set(0)
        except curses.error:
            # Some terminals cannot hide the cursor
            pass
        self._colours.setup()

    @staticmethod
    def _log_consumer_exit(task: "asyncio.Task[int]") -> None:
        if task.cancelled():
            return
        if task.exception() is not None:
            logger.error("Feed consumer crashed", error=str(task.exception()))
        else:
            logger.info("All feeds loaded", feed_count=task.result())


def run_app(
    feeds: AsyncIterable[RawFeed | None],
    mode: DisplayMode,
    filters: Filters | Iterable[Filter] | None = None,
    options: Sequence[DisplayOption] = (),
    extractor: ArticleExtractor | None = None,
) -> None:
    """Open the interactive browser over a stream of feeds.

    Blocks until the user quits; the terminal is restored on exit.
    """

    def _main(stdscr: "curses.window") -> None:
        session = Session(stdscr, feeds, mode, filters, options, extractor)
        asyncio.run(session.run())

    curses.wrapper(_main)

"""Full article text extraction through Firefox reader mode.

Playwright drives a headless Firefox; the article is opened under
``about:reader`` and the reader view's title and paragraphs are collected.
"""

import asyncio

import structlog
from playwright.async_api import Browser, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from feedterm.config.settings import settings
from feedterm.exceptions import ExtractionError
from feedterm.reader.wrap import wrap_lines

logger = structlog.get_logger()

READER_CONTENT_SELECTOR = "div[class='moz-reader-content reader-show-element']"


class ArticleExtractor:
    """Reader-mode text extraction engine.

    Starting the engine launches a browser and takes a few seconds, so callers
    start it once in the background and reuse it for every article.
    """

    def __init__(
        self,
        wrap_width: int | None = None,
        settle_seconds: float | None = None,
    ):
        """Initialize the extractor.

        Args:
            wrap_width: Soft wrap column. Defaults to ``settings.wrap_width``.
            settle_seconds: Wait after page load for reader mode to render.
                Defaults to ``settings.reader_settle_seconds``.
        """
        self._wrap_width = wrap_width or settings.wrap_width
        self._settle_seconds = (
            settings.reader_settle_seconds if settle_seconds is None else settle_seconds
        )
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    async def start(self) -> "ArticleExtractor":
        """Launch the browser.

        Raises:
            ExtractionError: When Playwright or Firefox cannot start.
        """
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.firefox.launch()
        except PlaywrightError as e:
            await self.close()
            raise ExtractionError("about:reader", f"could not launch browser: {e}") from e
        logger.debug("Reader engine started")
        return self

    async def close(self) -> None:
        """Shut the browser down. Safe to call more than once."""
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    async def extract(self, url: str) -> str:
        """Fetch an article and return its reader-mode text.

        Titles are written as-is; each paragraph is wrapped and indented with a
        tab, followed by a blank line.

        Raises:
            ExtractionError: When the engine is not running or the page fails.
        """
        if self._browser is None:
            raise ExtractionError(url, "reader engine is not running")

        try:
            page = await self._browser.new_page()
        except PlaywrightError as e:
            raise ExtractionError(url, f"could not create page: {e}") from e

        try:
            await page.goto(f"about:reader?url={url}")
            # Reader mode renders after the load event
            await asyncio.sleep(self._settle_seconds)
            entries = await page.query_selector_all(READER_CONTENT_SELECTOR)

            chunks: list[str] = []
            for entry in entries:
                title_element = await entry.query_selector("h3")
                if title_element is not None:
                    title = await title_element.text_content()
                    if title:
                        chunks.append(f"{title.strip()}\n")

                for body_element in await entry.query_selector_all("p"):
                    body = await body_element.text_content() or ""
                    for line in wrap_lines(body, self._wrap_width):
                        chunks.append(f"\t{line}\n")
                    chunks.append("\n")
        except PlaywrightError as e:
            raise ExtractionError(url, str(e)) from e
        finally:
            await page.close()

        return "".join(chunks)

"""Feed aggregation service.

Coordinates concurrent fetching, decoding and unpacking of feeds, in batch
mode (index-aligned results) or streaming mode (completion order).
"""

import asyncio
from collections.abc import AsyncIterator, Callable, Iterable, Sequence

import httpx
import structlog

from feedterm.exceptions import DecodeError, FetchError
from feedterm.models.feed import RawFeed
from feedterm.models.item import FeedItem
from feedterm.parsers.base import FeedParser
from feedterm.parsers.rss_parser import RssParser
from feedterm.pipeline.filters import Filter, Filters
from feedterm.pipeline.unpack import unpack_feed
from feedterm.sources.base import FeedSource
from feedterm.sources.http import HttpFeedSource
from feedterm.utils.http_client import create_http_client

logger = structlog.get_logger()

SourceFactory = Callable[[str, httpx.AsyncClient], FeedSource]


class FeedService:
    """Fetches and decodes feeds concurrently.

    Every URL gets its own task. A failing source is logged and reported as
    ``None``; it never disturbs its siblings.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        parser: FeedParser | None = None,
        source_factory: SourceFactory = HttpFeedSource,
    ):
        """Initialize the service.

        Args:
            client: Shared async HTTP client.
            parser: Feed document parser. Defaults to RssParser.
            source_factory: Builds the source for a URL. Defaults to HttpFeedSource.
        """
        self._client = client
        self._parser = parser or RssParser()
        self._source_factory = source_factory

    async def fetch_feed(self, url: str) -> RawFeed:
        """Fetch and decode a single feed.

        Raises:
            FetchError: On network or HTTP failure.
            DecodeError: When the body is not a feed document.
        """
        source = self._source_factory(url, self._client)
        raw_content = await source.fetch_raw()
        return self._parser.parse(raw_content, url)

    async def _fetch_or_none(self, url: str) -> RawFeed | None:
        try:
            feed = await self.fetch_feed(url)
        except (FetchError, DecodeError) as e:
            logger.warning("Feed unavailable", url=url, error=str(e))
            return None
        logger.debug("Feed fetched", url=url, item_count=len(feed.items))
        return feed

    async def refresh_feeds(self, urls: Sequence[str]) -> list[RawFeed | None]:
        """Fetch every URL concurrently.

        Returns:
            One entry per URL, in input order; ``None`` where the fetch failed.
        """
        return list(await asyncio.gather(*(self._fetch_or_none(url) for url in urls)))

    async def refresh_feeds_stream(self, urls: Sequence[str]) -> AsyncIterator[RawFeed | None]:
        """Fetch every URL concurrently, yielding feeds as they complete.

        Yields:
            Feeds in completion order; ``None`` for each failed source. The
            iterator ends once every fetch has finished.
        """
        tasks = [asyncio.create_task(self._fetch_or_none(url)) for url in urls]
        try:
            for next_done in asyncio.as_completed(tasks):
                yield await next_done
        finally:
            for task in tasks:
                task.cancel()


async def fetch_feed(url: str, client: httpx.AsyncClient) -> RawFeed:
    """Fetch and decode one feed, raising on failure."""
    return await FeedService(client).fetch_feed(url)


async def refresh_feeds(
    urls: Sequence[str],
    client: httpx.AsyncClient | None = None,
) -> list[RawFeed | None]:
    """Batch fetch. Creates (and closes) a client when none is given."""
    if client is not None:
        return await FeedService(client).refresh_feeds(urls)
    async with create_http_client() as owned:
        return await FeedService(owned).refresh_feeds(urls)


async def refresh_feeds_stream(
    urls: Sequence[str],
    client: httpx.AsyncClient | None = None,
) -> AsyncIterator[RawFeed | None]:
    """Streaming fetch. Creates (and closes) a client when none is given."""
    if client is not None:
        async for feed in FeedService(client).refresh_feeds_stream(urls):
            yield feed
        return
    async with create_http_client() as owned:
        async for feed in FeedService(owned).refresh_feeds_stream(urls):
            yield feed


def get_feed_items(
    feeds: Iterable[RawFeed | None],
    filters: Filters | Iterable[Filter] | None = None,
) -> list[FeedItem]:
    """Unpack a completed batch of feeds.

    ``None`` entries (failed sources) are skipped. One filter chain spans the
    whole batch, so deduplication and caps apply across feeds.
    """
    chain = Filters.of(filters)
    items: list[FeedItem] = []
    for feed in feeds:
        if feed is None:
            continue
        items.extend(unpack_feed(feed, chain))
    return items


def get_urls(lines: Iterable[str]) -> list[str]:
    """Read feed URLs from a newline-delimited list.

    Blank lines and lines beginning with ``#`` (commented out) are skipped.
    """
    urls = []
    for line in lines:
        url = line.strip()
        if not url or url.startswith("#"):
            continue
        urls.append(url)
    return urls

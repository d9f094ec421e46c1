"""Turns a decoded feed into filtered, normalized FeedItems."""

from collections.abc import Iterable

import structlog

from feedterm.exceptions import DateParseError
from feedterm.models.feed import RawFeed, RawItem
from feedterm.models.item import FeedItem
from feedterm.pipeline.dates import DateParser
from feedterm.pipeline.filters import Filter, Filters
from feedterm.pipeline.links import LinkFormatter

logger = structlog.get_logger()


class FeedItemCreator:
    """Builds FeedItems for one feed.

    Holds the per-feed link formatter and a date parser whose default ("now")
    is fixed when the creator is built.
    """

    def __init__(self, feed: RawFeed):
        self._feed = feed
        self._format_link = LinkFormatter(feed.url)
        self._parse_date = DateParser()

    def __call__(self, item: RawItem) -> FeedItem:
        """Normalize one raw item.

        Raises:
            DateParseError: When the item's publish date cannot be parsed.
        """
        links = [self._format_link(item)]
        if item.comments:
            links.append(item.comments)

        return FeedItem(
            title=item.title,
            publish_time=self._parse_date(item.pub_date),
            links=links,
            feed=self._feed.title,
            channel=self._feed.title,
        )


def unpack_feed(
    feed: RawFeed,
    filters: Filters | Iterable[Filter] | None = None,
) -> list[FeedItem]:
    """Normalize a feed's items and run them through the filters.

    Items whose date cannot be parsed are logged and dropped; items a filter
    rejects are dropped silently.

    Args:
        feed: Decoded feed.
        filters: Filters to apply, in order.

    Returns:
        Surviving items in document order.
    """
    chain = Filters.of(filters)
    create = FeedItemCreator(feed)

    items: list[FeedItem] = []
    for raw_item in feed.items:
        try:
            item = create(raw_item)
        except DateParseError as e:
            logger.warning(
                "Dropping item with bad date",
                feed=feed.url,
                title=raw_item.title,
                error=str(e),
            )
            continue
        if chain.apply(item):
            items.append(item)
    return items

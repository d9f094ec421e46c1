"""Services package."""

from feedterm.services.feed_service import (
    FeedService,
    fetch_feed,
    get_feed_items,
    get_urls,
    refresh_feeds,
    refresh_feeds_stream,
)

__all__ = [
    "FeedService",
    "fetch_feed",
    "get_feed_items",
    "get_urls",
    "refresh_feeds",
    "refresh_feeds_stream",
]

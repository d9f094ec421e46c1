"""Display modes and per-item display options.

A display mode reorders (and may pad) a batch of items; it never mutates its
input, so the interactive browser can re-apply it to every arriving batch.
"""

from collections.abc import Callable, Sequence
from datetime import datetime

from feedterm.models.item import Colour, FeedItem

DisplayMode = Callable[[Sequence[FeedItem]], list[FeedItem]]
DisplayOption = Callable[[FeedItem], FeedItem]


def _newest_first_key(item: FeedItem) -> tuple[bool, float]:
    # Undated items sort after every dated one
    if item.publish_time is None:
        return (True, 0.0)
    return (False, -item.publish_time.timestamp())


def reverse_chronological(items: Sequence[FeedItem]) -> list[FeedItem]:
    """Most recent first. Stable: equal publish times keep their input order."""
    return sorted(items, key=_newest_first_key)


def grouped(items: Sequence[FeedItem]) -> list[FeedItem]:
    """Group items by feed, in the order feeds are first seen.

    Each group is introduced by a blank separator and a title card carrying the
    feed name, followed by the group's items newest first.
    """
    by_feed: dict[str, list[FeedItem]] = {}
    for item in items:
        by_feed.setdefault(item.feed, []).append(item)

    result: list[FeedItem] = []
    for feed, feed_items in by_feed.items():
        result.append(FeedItem())
        result.append(FeedItem(title=feed, feed=feed, channel=feed))
        result.extend(reverse_chronological(feed_items))
    return result


DISPLAY_MODES: dict[str, DisplayMode] = {
    "feed": reverse_chronological,
    "group": grouped,
}


def colour_after(cutoff: datetime) -> DisplayOption:
    """Highlight items published after ``cutoff``; dim the rest."""

    def option(item: FeedItem) -> FeedItem:
        if not item.is_selectable:
            return item
        fresh = item.publish_time is not None and item.publish_time > cutoff
        return item.model_copy(update={"colour": Colour.CYAN if fresh else Colour.WHITE})

    return option


def apply_options(items: Sequence[FeedItem], options: Sequence[DisplayOption]) -> list[FeedItem]:
    """Run every display option over every item, in order."""
    result = []
    for item in items:
        for option in options:
            item = option(item)
        result.append(item)
    return result

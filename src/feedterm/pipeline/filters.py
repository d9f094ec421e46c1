"""Composable item filters.

Each filter is a callable ``(FeedItem) -> bool``; several keep private state
(seen links, counters). Build a fresh set per pipeline run or interactive
session, call each at most once per item, and never share one between tasks.
"""

from collections import Counter
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone
from typing import Protocol

from feedterm.models.item import FeedItem


class Filter(Protocol):
    """Item predicate; returns False to drop the item."""

    def __call__(self, item: FeedItem) -> bool: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Deduplicate:
    """Keeps only the first item carrying any given link.

    Order sensitive: whichever feed presents a link first wins, later items
    sharing any of its links are dropped. Empty links are ignored.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def __call__(self, item: FeedItem) -> bool:
        links = [link for link in item.links if link]
        if any(link in self._seen for link in links):
            return False
        self._seen.update(links)
        return True


class OldestItem:
    """Drops items older than ``max_age``.

    The boundary is inclusive. Items without a publish time count as
    infinitely old and are always dropped, matching their position at the
    end of reverse-chronological output.
    """

    def __init__(self, max_age: timedelta, now: Callable[[], datetime] = _utcnow):
        self._max_age = max_age
        self._now = now

    def __call__(self, item: FeedItem) -> bool:
        if item.publish_time is None:
            return False
        return self._now() - item.publish_time <= self._max_age


class MaxItemsPerChannel:
    """Keeps the first ``n`` items of each channel, in presentation order.

    Passing zero results in no limit.
    """

    def __init__(self, n: int):
        self._limit = n
        self._counts: Counter[str] = Counter()

    def __call__(self, item: FeedItem) -> bool:
        if self._limit == 0:
            return True
        self._counts[item.channel] += 1
        return self._counts[item.channel] <= self._limit


class MaxItems:
    """Keeps the first ``n`` items overall. Passing zero results in no limit."""

    def __init__(self, n: int):
        self._limit = n
        self._count = 0

    def __call__(self, item: FeedItem) -> bool:
        if self._limit == 0:
            return True
        self._count += 1
        return self._count <= self._limit


class Filters:
    """Ordered conjunction of filters.

    Evaluation stops at the first rejection, so stateful filters later in the
    chain only ever see items that survived the earlier ones.
    """

    def __init__(self, *filters: Filter):
        self._filters = list(filters)

    def apply(self, item: FeedItem) -> bool:
        return all(f(item) for f in self._filters)

    @classmethod
    def of(cls, filters: "Filters | Iterable[Filter] | None") -> "Filters":
        if isinstance(filters, Filters):
            return filters
        return cls(*(filters or ()))

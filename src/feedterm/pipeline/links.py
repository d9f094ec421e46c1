"""Per-feed link canonicalization and paywall rewriting."""

from collections.abc import Sequence
from urllib.parse import urlsplit, urlunsplit

import structlog

from feedterm.config.settings import settings
from feedterm.models.feed import RawItem

logger = structlog.get_logger()


def strip_query(link: str) -> str:
    """Drop the query string from a link; it is usually just tracking.

    Raises:
        ValueError: When the link is not a parseable URL.
    """
    parts = urlsplit(link)
    return urlunsplit(parts._replace(query=""))


class LinkFormatter:
    """Formats the canonical link of every item in one feed.

    Whether the feed is paywalled is decided once, from the feed URL; the
    formatter holds no state across items.
    """

    def __init__(
        self,
        feed_url: str,
        paywalls: Sequence[str] | None = None,
        mirror: str | None = None,
    ):
        """Initialize the formatter.

        Args:
            feed_url: URL the feed was fetched from.
            paywalls: Feed URL prefixes of paywalled sources. Defaults to
                ``settings.paywalls``.
            mirror: Archive mirror prefix. Defaults to ``settings.archive_mirror``.
        """
        prefixes = settings.paywalls if paywalls is None else paywalls
        self._mirror = mirror or settings.archive_mirror
        self.has_paywall = any(feed_url.startswith(prefix) for prefix in prefixes)

    def format(self, item: RawItem) -> str:
        """Return the item's canonical link.

        Falls back to the GUID when the item has no link. Paywalled feeds get
        their links routed through the archive mirror.
        """
        link = item.link or item.guid
        if not link:
            return ""

        try:
            link = strip_query(link)
        except ValueError as e:
            logger.warning("Unparseable item link", link=link, error=str(e))
            return link

        if self.has_paywall:
            return f"{self._mirror}{link}"
        return link

    __call__ = format

"""Sources package."""

from feedterm.sources.base import FeedSource
from feedterm.sources.http import HttpFeedSource

__all__ = [
    "FeedSource",
    "HttpFeedSource",
]

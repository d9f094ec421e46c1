"""Parsers package."""

from feedterm.parsers.base import FeedParser
from feedterm.parsers.rss_parser import RssParser

__all__ = [
    "FeedParser",
    "RssParser",
]

"""Models package."""

from feedterm.models.feed import RawFeed, RawItem
from feedterm.models.item import Colour, FeedItem

__all__ = [
    "Colour",
    "FeedItem",
    "RawFeed",
    "RawItem",
]

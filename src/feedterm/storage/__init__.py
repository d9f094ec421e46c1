"""Storage package."""

from feedterm.storage.base import FeedStorage
from feedterm.storage.xml_files import XmlFeedStorage, merge, to_xml

__all__ = [
    "FeedStorage",
    "XmlFeedStorage",
    "merge",
    "to_xml",
]

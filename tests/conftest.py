"""Test configuration and fixtures."""

from datetime import datetime, timezone

import pytest

from feedterm.models.item import FeedItem
from feedterm.parsers.rss_parser import RssParser

FEED_URL = "https://example.com/feed.xml"
OTHER_FEED_URL = "https://other.example.org/rss"


@pytest.fixture
def sample_rss_content():
    """Sample RSS 2.0 document: one item with comments, one GMT-dated, one
    with an unparseable date and one with no date at all."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Example News</title>
    <link>https://example.com/</link>
    <description>Stories from example.com</description>
    <language>en</language>
    <item>
      <title>First story</title>
      <link>https://example.com/first?utm_source=rss</link>
      <pubDate>Mon, 02 Jan 2006 15:04:05 +0000</pubDate>
      <guid isPermaLink="false">example-first</guid>
      <comments>https://news.example.com/item?id=1</comments>
      <description>The first one.</description>
    </item>
    <item>
      <title>Second story</title>
      <link>https://example.com/second</link>
      <pubDate>Tue, 03 Jan 2006 10:00:00 GMT</pubDate>
      <guid isPermaLink="false">example-second</guid>
    </item>
    <item>
      <title>Broken date</title>
      <link>https://example.com/broken</link>
      <pubDate>sometime last week</pubDate>
    </item>
    <item>
      <title>Undated story</title>
      <link>https://example.com/undated</link>
    </item>
  </channel>
</rss>"""


@pytest.fixture
def other_rss_content():
    """A second feed, sharing one link with the sample feed."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Other Blog</title>
    <link>https://other.example.org/</link>
    <description>Another source</description>
    <item>
      <title>Other post</title>
      <link>https://other.example.org/post</link>
      <pubDate>Tue, 03 Jan 2006 09:00:00 +0000</pubDate>
    </item>
    <item>
      <title>Repost of the first story</title>
      <link>https://example.com/first</link>
      <pubDate>Tue, 03 Jan 2006 11:00:00 +0000</pubDate>
    </item>
  </channel>
</rss>"""


@pytest.fixture
def sample_feed(sample_rss_content):
    """The sample document, decoded."""
    return RssParser().parse(sample_rss_content, FEED_URL)


@pytest.fixture
def other_feed(other_rss_content):
    return RssParser().parse(other_rss_content, OTHER_FEED_URL)


@pytest.fixture
def now():
    """Fixed clock for age-based tests."""
    return datetime(2006, 1, 3, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_item():
    """Build a FeedItem with sensible defaults."""

    def _make(title="Title", publish_time=None, links=None, feed="Feed", channel=None):
        return FeedItem(
            title=title,
            publish_time=publish_time,
            links=links if links is not None else [f"https://example.com/{title}"],
            feed=feed,
            channel=channel if channel is not None else feed,
        )

    return _make

"""Tests for unpacking raw feeds into FeedItems."""

from datetime import datetime, timedelta, timezone

from feedterm.models.feed import RawFeed, RawItem
from feedterm.pipeline.filters import Deduplicate, Filters, MaxItems
from feedterm.pipeline.unpack import unpack_feed


def test_unpack_normalizes_items(sample_feed):
    items = unpack_feed(sample_feed)

    # The item with an unparseable date is dropped
    assert [i.title for i in items] == ["First story", "Second story", "Undated story"]

    first = items[0]
    assert first.links == ["https://example.com/first", "https://news.example.com/item?id=1"]
    assert first.publish_time == datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc)
    assert first.feed == "Example News"
    assert first.channel == "Example News"


def test_unpack_defaults_missing_date_to_now(sample_feed):
    before = datetime.now(timezone.utc)

    undated = unpack_feed(sample_feed)[-1]

    assert undated.publish_time is not None
    assert before - timedelta(seconds=1) <= undated.publish_time <= datetime.now(timezone.utc)


def test_unpack_applies_filters_in_order(sample_feed):
    items = unpack_feed(sample_feed, Filters(MaxItems(1)))

    assert [i.title for i in items] == ["First story"]


def test_unpack_accepts_plain_filter_list(sample_feed):
    items = unpack_feed(sample_feed, [MaxItems(2)])

    assert len(items) == 2


def test_unpack_only_adds_comments_link_when_present(sample_feed):
    second = unpack_feed(sample_feed)[1]

    assert second.links == ["https://example.com/second"]


def test_unpack_rewrites_paywalled_links():
    feed = RawFeed(
        url="https://www.ft.com/rss/home",
        title="FT",
        items=(RawItem(title="Paywalled", link="https://www.ft.com/content/1?ftcamp=x"),),
    )

    (item,) = unpack_feed(feed)

    assert item.links == ["https://archive.is/https://www.ft.com/content/1"]


def test_unpack_shares_filter_state_across_calls(sample_feed):
    chain = Filters(Deduplicate())

    assert len(unpack_feed(sample_feed, chain)) == 3
    assert unpack_feed(sample_feed, chain) == []

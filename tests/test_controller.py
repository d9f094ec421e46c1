"""Tests for the interactive browser state machine."""

import asyncio

from feedterm.exceptions import ExtractionError
from feedterm.models.item import Colour
from feedterm.pipeline.display import grouped, reverse_chronological
from feedterm.pipeline.filters import Deduplicate, Filters
from feedterm.ui.controller import (
    Action,
    BrowserController,
    Focus,
    Key,
    ListEntry,
    consume_feeds,
)


class StubEngine:
    def __init__(self, text="Article text", error=None):
        self.text = text
        self.error = error
        self.requested = []

    async def extract(self, url):
        self.requested.append(url)
        if self.error:
            raise ExtractionError(url, self.error)
        return self.text


def loaded_controller(items, page_size=10):
    controller = BrowserController(page_size=page_size)
    controller.post_batch(items)
    controller.drain_updates()
    return controller


def test_post_batch_waits_for_drain(make_item):
    controller = BrowserController()

    controller.post_batch([make_item(title="a")])

    assert controller.entries == []
    assert controller.drain_updates() is True
    assert [e.primary for e in controller.entries] == ["a"]
    assert controller.drain_updates() is False


def test_new_batches_append_and_keep_cursor(make_item):
    controller = loaded_controller([make_item(title=t) for t in "abc"])
    controller.handle_key(Key.DOWN)

    controller.post_batch([make_item(title="d")])
    controller.drain_updates()

    assert [e.primary for e in controller.entries] == ["a", "b", "c", "d"]
    assert controller.cursor == 1
    assert controller.current_entry.primary == "b"


def test_cursor_does_not_wrap(make_item):
    controller = loaded_controller([make_item(title=t) for t in "ab"])

    assert controller.handle_key(Key.UP) is Action.NONE
    assert controller.handle_key(Key.DOWN) is Action.REDRAW
    assert controller.handle_key(Key.DOWN) is Action.NONE
    assert controller.cursor == 1


def test_paging_clamps_to_the_ends(make_item):
    controller = loaded_controller([make_item(title=str(n)) for n in range(25)], page_size=10)

    controller.handle_key(Key.PAGE_DOWN)
    assert controller.cursor == 10
    controller.handle_key(Key.PAGE_DOWN)
    controller.handle_key(Key.PAGE_DOWN)
    assert controller.cursor == 24
    controller.handle_key(Key.PAGE_UP)
    assert controller.cursor == 14


def test_navigation_on_empty_list_is_a_no_op():
    controller = BrowserController()

    assert controller.handle_key(Key.DOWN) is Action.NONE
    assert controller.handle_key(Key.SELECT) is Action.NONE
    assert controller.current_entry is None


def test_select_ignores_separators_and_title_cards(now, make_item):
    controller = loaded_controller(grouped([make_item(title="a", feed="A", publish_time=now)]))

    assert controller.handle_key(Key.SELECT) is Action.NONE
    controller.handle_key(Key.DOWN)
    assert controller.current_entry.colour is Colour.GREEN
    assert controller.handle_key(Key.SELECT) is Action.NONE
    controller.handle_key(Key.DOWN)
    assert controller.handle_key(Key.SELECT) is Action.EXTRACT


def test_list_entry_from_item(now, make_item):
    entry = ListEntry.from_item(make_item(title="Hello", publish_time=now))

    assert entry.primary == "2006/01/03:  Hello"
    assert entry.secondary == "https://example.com/Hello"


def test_focus_moves_between_panes(make_item):
    controller = loaded_controller([make_item()])

    controller.handle_key(Key.RIGHT)
    assert controller.focus is Focus.DETAIL
    controller.handle_key(Key.LEFT)
    assert controller.focus is Focus.LIST
    controller.handle_key(Key.RIGHT)
    controller.handle_key(Key.DISMISS)
    assert controller.focus is Focus.LIST


def test_quit_from_either_pane(make_item):
    controller = loaded_controller([make_item()])

    assert controller.handle_key(Key.QUIT) is Action.QUIT
    controller.handle_key(Key.RIGHT)
    assert controller.handle_key(Key.QUIT) is Action.QUIT


def test_detail_pane_scrolls_within_text(make_item):
    controller = loaded_controller([make_item()], page_size=10)
    controller.set_detail("one\ntwo\nthree")
    controller.handle_key(Key.RIGHT)

    assert controller.handle_key(Key.DOWN) is Action.REDRAW
    assert controller.detail_offset == 1
    controller.handle_key(Key.PAGE_DOWN)
    assert controller.detail_offset == 2
    controller.handle_key(Key.PAGE_UP)
    assert controller.detail_offset == 0
    # Scrolling does not move the list cursor
    assert controller.cursor == 0


def test_extract_waits_for_engine(make_item):
    controller = loaded_controller([make_item(title="story")])
    engine = StubEngine(text="Body\n\tline")

    async def run():
        loop = asyncio.get_running_loop()
        ready = loop.create_future()
        loop.call_later(0.01, ready.set_result, engine)
        controller.attach_engine(ready)
        return await controller.extract_selected()

    assert asyncio.run(run()) is True
    assert engine.requested == ["https://example.com/story"]
    assert controller.focus is Focus.DETAIL
    assert controller.detail_lines == ["https://example.com/story", "", "Body", "\tline"]


def test_extraction_failure_is_shown_and_keeps_list_focus(make_item):
    controller = loaded_controller([make_item(title="story")])

    async def run():
        ready = asyncio.get_running_loop().create_future()
        ready.set_result(StubEngine(error="page timed out"))
        controller.attach_engine(ready)
        return await controller.extract_selected()

    assert asyncio.run(run()) is False
    assert controller.focus is Focus.LIST
    assert controller.detail_lines[0] == "https://example.com/story"
    assert "page timed out" in "\n".join(controller.detail_lines)


def test_extract_without_engine_reports_error(make_item):
    controller = loaded_controller([make_item(title="story")])

    assert asyncio.run(controller.extract_selected()) is False
    assert controller.focus is Focus.LIST
    assert controller.detail_lines


def test_consume_feeds_posts_one_batch_per_feed(sample_feed, other_feed):
    controller = BrowserController()

    async def stream():
        for feed in (sample_feed, None, other_feed):
            yield feed

    posted = asyncio.run(
        consume_feeds(stream(), controller, reverse_chronological, Filters(Deduplicate()))
    )
    controller.drain_updates()

    assert posted == 2
    links = [e.secondary for e in controller.entries]
    assert links[:3] == [
        "https://example.com/undated",
        "https://example.com/second",
        "https://example.com/first",
    ]
    assert links[3:] == ["https://other.example.org/post"]

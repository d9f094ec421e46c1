"""Tests for reader-mode article extraction, against a fake browser."""

import asyncio

import pytest

from feedterm.exceptions import ExtractionError
from feedterm.reader.extractor import READER_CONTENT_SELECTOR, ArticleExtractor


class FakeElement:
    def __init__(self, text="", children=None):
        self._text = text
        self._children = children or {}

    async def text_content(self):
        return self._text

    async def query_selector(self, selector):
        found = self._children.get(selector, [])
        return found[0] if found else None

    async def query_selector_all(self, selector):
        return self._children.get(selector, [])


class FakePage(FakeElement):
    def __init__(self, children):
        super().__init__(children=children)
        self.visited = []
        self.closed = False

    async def goto(self, url):
        self.visited.append(url)

    async def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, page):
        self.page = page

    async def new_page(self):
        return self.page


def make_extractor(page):
    extractor = ArticleExtractor(wrap_width=20, settle_seconds=0)
    extractor._browser = FakeBrowser(page)
    return extractor


def test_extract_formats_title_and_paragraphs():
    content = FakeElement(
        children={
            "h3": [FakeElement("  A headline ")],
            "p": [
                FakeElement("The first paragraph is long enough to wrap around."),
                FakeElement("Short."),
            ],
        }
    )
    page = FakePage({READER_CONTENT_SELECTOR: [content]})

    text = asyncio.run(make_extractor(page).extract("https://example.com/a"))

    assert page.visited == ["about:reader?url=https://example.com/a"]
    assert page.closed
    assert text == (
        "A headline\n"
        "\tThe first paragraph is\n"
        "\tlong enough to wrap\n"
        "\taround.\n"
        "\n"
        "\tShort.\n"
        "\n"
    )


def test_extract_without_reader_content_is_empty():
    page = FakePage({})

    assert asyncio.run(make_extractor(page).extract("https://example.com/a")) == ""
    assert page.closed


def test_extract_before_start_fails():
    with pytest.raises(ExtractionError):
        asyncio.run(ArticleExtractor().extract("https://example.com/a"))


def test_close_is_idempotent():
    extractor = ArticleExtractor()

    asyncio.run(extractor.close())
    asyncio.run(extractor.close())

"""Tests for article paragraph wrapping."""

from feedterm.reader.wrap import wrap_lines


def test_short_paragraph_is_one_line():
    assert wrap_lines("Just a few words.", 72) == ["Just a few words."]


def test_breaks_at_next_space_after_limit():
    assert wrap_lines("aaaa bbbb cccc", 6) == ["aaaa bbbb", "cccc"]


def test_breaks_exactly_at_limit_when_it_is_a_space():
    assert wrap_lines("aaaa bb", 4) == ["aaaa", "bb"]


def test_long_word_without_spaces_is_cut_at_limit():
    assert wrap_lines("abcdefghij", 4) == ["abcd", "efgh", "ij"]


def test_words_are_never_split_mid_line():
    text = "The quick brown fox jumps over the lazy dog " * 5

    for line in wrap_lines(text, 20):
        assert line == line.strip()
        assert set(line.split()) <= set(text.split())


def test_empty_paragraph_gives_no_lines():
    assert wrap_lines("", 72) == []
    assert wrap_lines("   ", 72) == []

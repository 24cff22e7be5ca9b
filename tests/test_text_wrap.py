"""Unit tests for cell text wrapping."""

import pytest

from clinicdocs.layout.text_wrap import CONTINUATION_MARKER, wrap


class TestWrap:
    """Test wrap()."""

    def test_short_text_single_line(self):
        assert wrap("Spay surgery", 30) == ["Spay surgery"]

    def test_empty_and_none(self):
        """Empty input still produces one (empty) line."""
        assert wrap("", 20) == [""]
        assert wrap(None, 20) == [""]

    def test_greedy_packing(self):
        lines = wrap("one two three four five six", 9)
        assert lines == ["one two", "three", "four five", "six"]

    def test_lines_respect_budget(self):
        text = "Dental scaling and polishing under general anesthesia with extractions"
        for budget in (10, 20, 30):
            assert all(len(line) <= budget for line in wrap(text, budget))

    def test_words_preserved_in_order(self):
        text = "Annual wellness exam including bloodwork and urinalysis"
        assert " ".join(wrap(text, 15)).split() == text.split()

    def test_word_exactly_budget(self):
        assert wrap("abcdefghij", 10) == ["abcdefghij"]

    def test_long_word_is_split_with_marker(self):
        lines = wrap("abcdefghijklmnopqrstuvwxyz", 10)
        assert lines == ["abcdefghi-", "jklmnopqr-", "stuvwxyz"]
        assert all(len(line) <= 10 for line in lines)

    def test_long_word_tail_shares_line(self):
        """The last chunk of a split word can take following words."""
        lines = wrap("abcdefghijkl mn", 10)
        assert lines == ["abcdefghi-", "jkl mn"]

    def test_marker_only_on_non_final_chunks(self):
        lines = wrap("x" * 25, 6)
        assert all(line.endswith(CONTINUATION_MARKER) for line in lines[:-1])
        assert not lines[-1].endswith(CONTINUATION_MARKER)
        assert "".join(line.rstrip(CONTINUATION_MARKER) for line in lines) == "x" * 25

    def test_explicit_newlines_kept(self):
        assert wrap("first\nsecond", 20) == ["first", "second"]
        assert wrap("first\r\n\r\nthird", 20) == ["first", "", "third"]

    def test_whitespace_only(self):
        assert wrap("   ", 10) == [""]

    @pytest.mark.parametrize("budget", [0, 1, -5])
    def test_invalid_budget(self, budget):
        with pytest.raises(ValueError):
            wrap("text", budget)

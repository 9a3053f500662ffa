"""
Tests for text utility functions.
"""

import pytest

from pdfsearch.utils.text_utils import (
    find_ignore_case,
    contains_ignore_case,
    truncate_text,
    unique_lines
)


class TestFindIgnoreCase:
    """Tests for find_ignore_case function."""

    @pytest.mark.parametrize("needle", ["invoice", "INVOICE", "InVoice"])
    def test_case_variants(self, needle):
        assert find_ignore_case("Total Invoice due", needle) == 6

    def test_not_found(self):
        assert find_ignore_case("abc", "z") == -1

    def test_empty_needle(self):
        assert find_ignore_case("abc", "") == -1

    def test_start_offset(self):
        assert find_ignore_case("ab ab", "AB", start=1) == 3

    def test_index_refers_to_original_text(self):
        """Test that the index stays valid when lower() changes the length."""
        text = "İİ Facture"

        index = find_ignore_case(text, "facture")

        assert text[index:index + 7] == "Facture"


class TestContainsIgnoreCase:
    """Tests for contains_ignore_case function."""

    def test_contains(self):
        assert contains_ignore_case("Hello World", "WORLD")

    @pytest.mark.parametrize("text,needle", [("", "a"), ("a", ""), (None, "a")])
    def test_empty_inputs(self, text, needle):
        assert not contains_ignore_case(text, needle)


class TestTruncateText:
    """Tests for truncate_text function."""

    def test_short_text_unchanged(self):
        """Test that short text is not truncated."""
        assert truncate_text("Short text", 100) == "Short text"

    def test_long_text_truncated(self):
        """Test that long text is truncated with suffix."""
        text = "This is a very long text that should be truncated"

        result = truncate_text(text, 20)

        assert len(result) <= 20
        assert result.endswith("...")

    def test_fixed_prefix(self):
        result = truncate_text("abcdefghijklmnop", 10, break_on_word=False)

        assert result == "abcdefg..."

    def test_custom_suffix(self):
        result = truncate_text("abcdefghijklmnop", 10, suffix="[+]", break_on_word=False)

        assert result == "abcdefg[+]"

    def test_breaks_on_word(self):
        result = truncate_text("alpha beta gamma delta", 17)

        assert result == "alpha beta..."

    def test_suffix_longer_than_limit(self):
        assert truncate_text("abcdef", 2) == ".."


class TestUniqueLines:
    """Tests for unique_lines function."""

    def test_keeps_first_seen_order(self):
        assert unique_lines(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]

    def test_empty(self):
        assert unique_lines([]) == []

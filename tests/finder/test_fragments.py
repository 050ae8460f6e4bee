# tests/finder/test_fragments.py
"""Tests for fragment dictionary construction."""

import pytest

from op_finder.finder.fragments import (
    all_substrings,
    build_fragments,
    delimited_prefixes,
)


class TestAllSubstrings:
    """Tests for all_substrings."""

    @pytest.mark.parametrize("text", ["a", "ab", "gauss", "abcdefgh"])
    def test_count_without_repeats(self, text):
        """Distinct characters give n(n+1)/2 substrings."""
        n = len(text)
        assert len(all_substrings(text)) == n * (n + 1) // 2

    def test_includes_whole_text(self):
        """The text itself is a fragment."""
        assert "gauss" in all_substrings("gauss")

    def test_empty(self):
        """Empty text has no substrings."""
        assert all_substrings("") == set()


class TestDelimitedPrefixes:
    """Tests for delimited_prefixes."""

    def test_prefixes_keep_delimiter(self):
        """Each prefix ends with the delimiter."""
        assert delimited_prefixes("a.b.c", ".") == ["a.", "a.b."]

    def test_no_delimiter(self):
        """No delimiter, no prefixes."""
        assert delimited_prefixes("abc", ".") == []


class TestBuildFragments:
    """Tests for build_fragments."""

    def test_without_delimiters_is_every_substring(self):
        """Without delimiters the dictionary is every substring of the lower-cased key."""
        fragments = build_fragments("GaUss")
        assert fragments == all_substrings("gauss")

    def test_repeated_letters_count_once(self):
        """Duplicate substrings collapse in the set."""
        assert build_fragments("aaa") == {"a", "aa", "aaa"}

    def test_delimited_key(self):
        """Path components match as whole tokens, the tail on any substring."""
        fragments = build_fragments("a.b.c", ["."])
        assert fragments == {"a.", "a.b.", "c"}

    def test_owner_type(self):
        """Leading package names are only matched as complete prefixes."""
        fragments = build_fragments("net.imagej.ops.filter.gauss.DefaultGaussRAI", ["."])
        assert "net." in fragments
        assert "net.imagej.ops.filter.gauss." in fragments
        assert "gaussrai" in fragments
        assert "defaultgaussrai" in fragments
        # package segments are not broken into substrings
        assert "imagej" not in fragments
        assert "filter" not in fragments

    def test_delimiter_absent_from_key(self):
        """A configured delimiter that never occurs changes nothing."""
        assert build_fragments("gauss", ["."]) == all_substrings("gauss")

    def test_trailing_delimiter(self):
        """A key ending in a delimiter has no tail fragments."""
        assert build_fragments("math.", ["."]) == {"math."}

    def test_multiple_delimiters_use_rightmost(self):
        """The tail starts after the right-most delimiter of any kind."""
        fragments = build_fragments("a.b$cd", [".", "$"])
        assert {"a.", "a.b$"} <= fragments
        assert {"c", "d", "cd"} <= fragments
        assert "b" not in fragments

    def test_empty_key(self):
        """An empty key yields an empty dictionary."""
        assert build_fragments("") == set()
        assert build_fragments("", ["."]) == set()

# tests/finder/test_automaton.py
"""Tests for the Aho-Corasick automaton and overlap removal."""

from op_finder.finder.automaton import Automaton, Match, build_automaton, remove_overlaps
from op_finder.finder.fragments import build_fragments


def keywords(matches):
    return [m.keyword for m in matches]


class TestMatch:
    """Tests for the Match value type."""

    def test_length(self):
        assert len(Match(2, 5, "uss")) == 3

    def test_overlap(self):
        """Half-open intervals: touching matches do not overlap."""
        assert Match(0, 3, "abc").overlaps(Match(2, 4, "cd"))
        assert not Match(0, 2, "ab").overlaps(Match(2, 4, "cd"))


class TestRemoveOverlaps:
    """Tests for remove_overlaps."""

    def test_longest_wins(self):
        """A longer match evicts the shorter ones it overlaps."""
        matches = [Match(0, 1, "g"), Match(0, 5, "gauss"), Match(3, 5, "ss")]
        assert remove_overlaps(matches) == [Match(0, 5, "gauss")]

    def test_leftmost_wins_ties(self):
        """Equal lengths: the leftmost is kept."""
        matches = [Match(1, 3, "bc"), Match(0, 2, "ab")]
        assert remove_overlaps(matches) == [Match(0, 2, "ab")]

    def test_result_in_text_order(self):
        """Non-overlapping survivors come back sorted by position."""
        matches = [Match(4, 5, "e"), Match(0, 3, "abc")]
        assert remove_overlaps(matches) == [Match(0, 3, "abc"), Match(4, 5, "e")]

    def test_empty(self):
        assert remove_overlaps([]) == []


class TestAutomaton:
    """Tests for Automaton construction and parsing."""

    def test_finds_all_keywords(self):
        """iter_matches reports every occurrence, including overlapping ones."""
        automaton = Automaton(["he", "she", "his", "hers"])
        found = {(m.start, m.keyword) for m in automaton.iter_matches("ushers")}
        assert found == {(1, "she"), (2, "he"), (2, "hers")}

    def test_parse_removes_overlaps(self):
        """parse keeps the longest match."""
        automaton = Automaton(["he", "she", "his", "hers"])
        assert keywords(automaton.parse("ushers")) == ["hers"]

    def test_failure_links(self):
        """Matching continues across a failed branch."""
        automaton = Automaton(["abcd", "bc"])
        assert keywords(automaton.parse("abce")) == ["bc"]

    def test_fragment_dictionary(self):
        """A fragment dictionary finds the longest substring of the query."""
        automaton = build_automaton(build_fragments("gauss"))
        assert keywords(automaton.parse("ga")) == ["ga"]
        assert keywords(automaton.parse("xgaussx")) == ["gauss"]

    def test_disjoint_matches(self):
        """Separate hits in the query are all emitted."""
        automaton = build_automaton(build_fragments("gauss"))
        assert keywords(automaton.parse("gaxss")) == ["ga", "ss"]

    def test_empty_dictionary_matches_nothing(self):
        """An automaton without keywords is valid and never matches."""
        automaton = build_automaton(set())
        assert len(automaton) == 0
        assert automaton.parse("anything") == []

    def test_empty_text(self):
        automaton = Automaton(["a"])
        assert automaton.parse("") == []

    def test_duplicate_keywords(self):
        """Keywords are counted once."""
        assert len(Automaton(["ab", "ab", "a"])) == 2

    def test_identity_hash(self):
        """Automatons with the same keywords are distinct mapping keys."""
        first, second = Automaton(["a"]), Automaton(["a"])
        assert len({first: 1, second: 2}) == 2

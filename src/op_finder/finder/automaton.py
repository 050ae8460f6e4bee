# op_finder/finder/automaton.py
"""Aho-Corasick substring automaton with overlap removal.

One automaton is built per index entry from that entry's fragment
dictionary. Parsing a query emits every dictionary hit, then resolves
overlaps so the longest hits win: candidates are ranked by length (longest
first, leftmost first on ties) and a candidate is dropped when it overlaps
one that was already kept.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass


_ROOT = 0


@dataclass(frozen=True, order=True)
class Match:
    """A dictionary hit in the parsed text, ``text[start:end] == keyword``."""

    start: int
    end: int
    keyword: str

    def __len__(self) -> int:
        return self.end - self.start

    def overlaps(self, other: Match) -> bool:
        return self.start < other.end and other.start < self.end


def remove_overlaps(matches: Iterable[Match]) -> list[Match]:
    """Keep the longest non-overlapping matches, returned in text order."""
    kept: list[Match] = []
    for match in sorted(matches, key=lambda m: (-len(m), m.start)):
        if not any(match.overlaps(other) for other in kept):
            kept.append(match)
    kept.sort()
    return kept


class Automaton:
    """Immutable Aho-Corasick automaton over a fixed keyword set.

    Instances compare and hash by identity so they can key an index mapping.
    """

    __slots__ = ("_goto", "_fail", "_output", "_size")

    def __init__(self, keywords: Iterable[str] = ()) -> None:
        self._goto: list[dict[str, int]] = [{}]
        self._fail: list[int] = [_ROOT]
        # keywords recognised on entering a state (own + via failure links)
        self._output: list[tuple[str, ...]] = [()]
        self._size = 0

        for keyword in keywords:
            self._insert(keyword)
        self._link()

    # ------------------------------------------------------------------ #
    #  Construction                                                        #
    # ------------------------------------------------------------------ #

    def _insert(self, keyword: str) -> None:
        if not keyword:
            return
        state = _ROOT
        for char in keyword:
            nxt = self._goto[state].get(char)
            if nxt is None:
                nxt = len(self._goto)
                self._goto.append({})
                self._fail.append(_ROOT)
                self._output.append(())
                self._goto[state][char] = nxt
            state = nxt
        if not self._output[state]:
            self._output[state] = (keyword,)
            self._size += 1

    def _link(self) -> None:
        """Compute failure links breadth-first and merge output sets."""
        queue: deque[int] = deque(self._goto[_ROOT].values())
        while queue:
            state = queue.popleft()
            for char, nxt in self._goto[state].items():
                queue.append(nxt)
                fallback = self._fail[state]
                while fallback != _ROOT and char not in self._goto[fallback]:
                    fallback = self._fail[fallback]
                target = self._goto[fallback].get(char, _ROOT)
                self._fail[nxt] = target if target != nxt else _ROOT
                self._output[nxt] = self._output[nxt] + self._output[self._fail[nxt]]

    # ------------------------------------------------------------------ #
    #  Matching                                                            #
    # ------------------------------------------------------------------ #

    def iter_matches(self, text: str) -> Iterator[Match]:
        """Yield every (possibly overlapping) keyword occurrence in *text*."""
        state = _ROOT
        for position, char in enumerate(text):
            while state != _ROOT and char not in self._goto[state]:
                state = self._fail[state]
            state = self._goto[state].get(char, _ROOT)
            for keyword in self._output[state]:
                end = position + 1
                yield Match(start=end - len(keyword), end=end, keyword=keyword)

    def parse(self, text: str) -> list[Match]:
        """Matches in *text* with overlaps removed (longest wins)."""
        if not self._size or not text:
            return []
        return remove_overlaps(self.iter_matches(text))

    def __len__(self) -> int:
        """Number of distinct keywords in the dictionary."""
        return self._size

    def __repr__(self) -> str:
        return f"Automaton(keywords={self._size}, states={len(self._goto)})"


def build_automaton(fragments: Iterable[str]) -> Automaton:
    """Build an automaton for *fragments*; an empty set matches nothing."""
    return Automaton(fragments)

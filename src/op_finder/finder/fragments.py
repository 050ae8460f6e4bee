# op_finder/finder/fragments.py
"""Substring dictionaries for filter matching.

A key such as ``net.imagej.ops.filter.gauss.GaussRAISingleSigma`` is broken
down so that path-like leading components match as whole tokens while the
terminal component matches on any substring:

* every prefix ending at a delimiter, delimiter included
  (``net.``, ``net.imagej.``, ...)
* every contiguous substring of the text after the last delimiter
"""

from __future__ import annotations

from collections.abc import Iterable


def all_substrings(text: str) -> set[str]:
    """Every contiguous substring of *text* with length >= 1."""
    length = len(text)
    return {
        text[start:end]
        for start in range(length)
        for end in range(start + 1, length + 1)
    }


def delimited_prefixes(text: str, delimiter: str) -> list[str]:
    """Prefixes of *text* ending at each occurrence of *delimiter*."""
    prefixes = []
    index = text.find(delimiter)
    while index >= 0:
        prefixes.append(text[: index + 1])
        index = text.find(delimiter, index + 1)
    return prefixes


def build_fragments(key: str, delimiters: Iterable[str] = ()) -> set[str]:
    """Build the lower-cased fragment dictionary for *key*.

    Args:
        key: Raw matchable text (owner type, simplified signature, ...)
        delimiters: Single characters separating path components

    Returns:
        The fragment set; empty for an empty key.
    """
    if not key:
        return set()

    text = key.lower()
    fragments: set[str] = set()
    last_delimiter = -1

    for delimiter in delimiters:
        fragments.update(delimited_prefixes(text, delimiter))
        last_delimiter = max(last_delimiter, text.rfind(delimiter))

    fragments.update(all_substrings(text[last_delimiter + 1 :]))
    return fragments

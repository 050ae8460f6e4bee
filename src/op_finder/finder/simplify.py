# op_finder/finder/simplify.py
"""Simplified signatures and user-view eligibility.

Signatures such as ``(ArrayImg out) = filter.gauss(RandomAccessibleInterval in,
double[] sigmas, OutOfBoundsFactory outOfBounds?)`` are boiled down to
``filter.gauss(Image in, Number[] sigmas)`` for the user view.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping

# "Type name?" marks an optional parameter
_OPTIONAL_PARAM = re.compile(r"[a-zA-Z0-9]+(\[\])? [a-zA-Z0-9]+\?")
_REPEATED_SEPARATORS = re.compile(r", (, )+")
_TRAILING_SEPARATORS = re.compile(r"(, )+(\))")
_LEADING_SEPARATORS = re.compile(r"(\()(, )+")


def _alias_patterns(type_aliases: Mapping[str, str]) -> list[tuple[re.Pattern[str], str]]:
    return [
        (re.compile(rf"\b(?:{pattern})\b"), label)
        for pattern, label in type_aliases.items()
    ]


def simplify_signature(signature: str, type_aliases: Mapping[str, str]) -> str:
    """Reduce *signature* to its user-facing form.

    Steps: fold aliased types into their labels, drop optional parameters,
    tidy up the separators they leave behind and strip the return variable
    in front of the op name.
    """
    text = signature
    for pattern, label in _alias_patterns(type_aliases):
        text = pattern.sub(label, text)

    text = _OPTIONAL_PARAM.sub("", text)
    text = _REPEATED_SEPARATORS.sub(", ", text)
    text = _TRAILING_SEPARATORS.sub(r"\2", text)
    text = _LEADING_SEPARATORS.sub(r"\1", text)

    # "(Image out) = filter.gauss(...)" -> "filter.gauss(...)"
    assignment = text.find(" = ")
    if assignment >= 0:
        text = text[assignment + 3 :]

    paren = text.find("(")
    if paren < 0:
        return text.strip()

    # "Image out filter.gauss(...)" -> "filter.gauss(...)"
    split_point = text.rfind(" ", 0, paren)
    return text[split_point + 1 :]


class SimpleEligibility:
    """Decides which ops belong in the user view.

    An op qualifies when at least one of its input types is assignable to a
    configured simple-eligible type, and no earlier op produced the same
    simplified signature. Assignability is answered by the registry source.
    """

    def __init__(
        self,
        simple_types: Iterable[str],
        is_assignable: Callable[[str, str], bool],
    ) -> None:
        self._simple_types = tuple(simple_types)
        self._is_assignable = is_assignable
        self._seen: set[str] = set()

    def accept(self, simple_name: str, input_types: Iterable[str]) -> bool:
        """Return True (and remember the name) if the op qualifies."""
        if simple_name in self._seen:
            return False

        for type_name in input_types:
            for accepted in self._simple_types:
                if self._is_assignable(type_name, accepted):
                    self._seen.add(simple_name)
                    return True
        return False

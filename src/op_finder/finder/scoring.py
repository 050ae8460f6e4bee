# op_finder/finder/scoring.py
"""Fuzzy filter engine: score every indexed entry against a query.

Each automaton parses the lower-cased query; every emitted fragment scores
``2 * len(fragment) - 1``. One long hit therefore always beats any number
of shorter hits of the same total length, which favours specific matches
over noisy single-letter ones.

Only the ``keep`` best distinct scores survive a run (ties included), and
results come out best score first, entry order within a score.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING

from op_finder.config.defaults import DEFAULT_KEEP, DEFAULT_PROGRESS_STEP
from op_finder.finder.automaton import Automaton, Match
from op_finder.finder.cancel import CancelToken
from op_finder.finder.models import (
    EntryDescriptor,
    FilterOutcome,
    FilterStatus,
    ScoredEntry,
)

if TYPE_CHECKING:
    from op_finder.finder.index import AutomatonIndex

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


def score_matches(matches: Iterable[Match]) -> int:
    """Sum of ``2 * length - 1`` over the emitted fragments."""
    return sum(2 * len(match) - 1 for match in matches)


class ScoreBuckets:
    """Descriptors grouped under the ``keep`` highest distinct scores seen.

    A new distinct score is admitted while fewer than ``keep`` scores are
    held, or when it beats the worst held score; admitting it then evicts the
    worst score together with every descriptor filed under it.
    """

    def __init__(self, keep: int = DEFAULT_KEEP) -> None:
        if keep < 1:
            raise ValueError(f"keep must be positive: {keep}")
        self.keep = keep
        self._buckets: dict[int, list[EntryDescriptor]] = {}

    def offer(self, score: int, descriptor: EntryDescriptor) -> bool:
        """File *descriptor* under *score* if that score is kept."""
        bucket = self._buckets.get(score)
        if bucket is not None:
            bucket.append(descriptor)
            return True

        if len(self._buckets) >= self.keep:
            worst = min(self._buckets)
            if score <= worst:
                return False
            del self._buckets[worst]

        self._buckets[score] = [descriptor]
        return True

    @property
    def scores(self) -> list[int]:
        """Kept scores, best first."""
        return sorted(self._buckets, reverse=True)

    def ranked(self) -> list[ScoredEntry]:
        """Entries best score first; entry order within one score."""
        return [
            ScoredEntry(descriptor=descriptor, score=score)
            for score in self.scores
            for descriptor in sorted(self._buckets[score])
        ]

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())


class FuzzyFilterEngine:
    """Scores a query against an automaton index.

    The engine is stateless between runs and safe to call from worker
    threads; progress and cancellation are plumbed through per call.
    """

    def __init__(
        self,
        keep: int = DEFAULT_KEEP,
        progress_step: int = DEFAULT_PROGRESS_STEP,
    ) -> None:
        if keep < 1:
            raise ValueError(f"keep must be positive: {keep}")
        if not 0 < progress_step <= 100:
            raise ValueError(f"progress_step must be within 1..100: {progress_step}")
        self.keep = keep
        self.progress_step = progress_step

    @staticmethod
    def score(text: str, automaton: Automaton) -> int:
        """Score already lower-cased *text* against one automaton."""
        return score_matches(automaton.parse(text))

    def filter(
        self,
        query: str,
        index: AutomatonIndex | Mapping[Automaton, EntryDescriptor],
        progress: ProgressCallback | None = None,
        cancel: CancelToken | None = None,
    ) -> FilterOutcome:
        """Run one filter pass.

        Progress is reported each time another ``progress_step`` percent of
        the automatons has been processed; the cancellation token is polled
        at the same points. A cancelled run resets progress to 0 and returns
        a cancelled outcome instead of results.

        Args:
            query: Raw query text (the empty query is the caller's business)
            index: Automaton -> descriptor mapping to score
            progress: Optional callback receiving percentages
            cancel: Optional token polled at each progress boundary

        Returns:
            FilterOutcome, completed or cancelled
        """
        text = query.lower()
        total = len(index)
        buckets = ScoreBuckets(self.keep)
        next_percent = self.progress_step
        reported = 0

        for count, (automaton, descriptor) in enumerate(index.items(), start=1):
            while next_percent <= 100 and count * 100 >= next_percent * total:
                if cancel is not None and cancel.poll():
                    logger.debug(f"Filter '{query}' cancelled at {reported}%")
                    self._report(progress, 0)
                    return FilterOutcome.cancelled(query)
                self._report(progress, next_percent)
                reported = next_percent
                next_percent += self.progress_step

            buckets.offer(self.score(text, automaton), descriptor)

        if reported < 100:
            self._report(progress, 100)

        entries = buckets.ranked()
        logger.debug(
            f"Filter '{query}' kept {len(entries)}/{total} entries "
            f"(scores={buckets.scores})"
        )
        return FilterOutcome(query=query, status=FilterStatus.COMPLETED, entries=entries)

    @staticmethod
    def _report(progress: ProgressCallback | None, percent: int) -> None:
        if progress is None:
            return
        try:
            progress(percent)
        except Exception as e:
            logger.warning(f"Progress callback failed at {percent}%: {e}")

"""Op index and fuzzy filtering engine."""

from op_finder.finder.automaton import Automaton, Match, build_automaton, remove_overlaps
from op_finder.finder.cancel import CancelToken
from op_finder.finder.fragments import build_fragments
from op_finder.finder.hierarchy import HierarchyBuilder, prune_empty_nodes, resolve_name
from op_finder.finder.index import AutomatonIndex, OpIndex, build_automaton_index
from op_finder.finder.models import (
    EntryDescriptor,
    FilterOutcome,
    FilterStatus,
    ScoredEntry,
    TreeNode,
)
from op_finder.finder.scoring import FuzzyFilterEngine, ScoreBuckets, score_matches
from op_finder.finder.session import FinderSession
from op_finder.finder.simplify import SimpleEligibility, simplify_signature
from op_finder.finder.tasks import FilterTask, TaskState

__all__ = [
    # Models
    "EntryDescriptor",
    "TreeNode",
    "FilterOutcome",
    "FilterStatus",
    "ScoredEntry",
    # Indexing
    "build_fragments",
    "Automaton",
    "Match",
    "build_automaton",
    "remove_overlaps",
    "AutomatonIndex",
    "build_automaton_index",
    "HierarchyBuilder",
    "prune_empty_nodes",
    "resolve_name",
    "simplify_signature",
    "SimpleEligibility",
    "OpIndex",
    # Filtering
    "FuzzyFilterEngine",
    "ScoreBuckets",
    "score_matches",
    "CancelToken",
    "FilterTask",
    "TaskState",
    "FinderSession",
]

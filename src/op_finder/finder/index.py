# op_finder/finder/index.py
"""The op index: both browsable trees plus their lazily built automatons.

Two independent views are kept for one registry snapshot:

* ``advanced`` - every op, labelled by its full signature and matched on its
  owner type (``net.imagej.ops.filter.gauss.DefaultGaussRAI``), with path
  components matching as whole tokens.
* ``simple`` - ops taking at least one simple-eligible input, labelled and
  matched on the simplified signature.

Trees are built eagerly; each automaton index is built the first time its
view is filtered and is read-only afterwards.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Iterable, Iterator, Mapping, Sequence
from concurrent.futures import Executor

from op_finder.config.enums import ViewMode
from op_finder.config.models import FinderConfig
from op_finder.finder.automaton import Automaton, build_automaton
from op_finder.finder.fragments import build_fragments
from op_finder.finder.hierarchy import HierarchyBuilder, resolve_name
from op_finder.finder.models import EntryDescriptor, FilterOutcome, TreeNode
from op_finder.finder.simplify import SimpleEligibility, simplify_signature
from op_finder.registry.source import RegistrySource

logger = logging.getLogger(__name__)


class AutomatonIndex(Mapping[Automaton, EntryDescriptor]):
    """Read-only mapping from each automaton to the entry it was built for."""

    def __init__(self, pairs: Iterable[tuple[Automaton, EntryDescriptor]] = ()) -> None:
        self._mapping: dict[Automaton, EntryDescriptor] = dict(pairs)

    def __getitem__(self, automaton: Automaton) -> EntryDescriptor:
        return self._mapping[automaton]

    def __iter__(self) -> Iterator[Automaton]:
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def __repr__(self) -> str:
        return f"AutomatonIndex(entries={len(self._mapping)})"


def build_automaton_index(
    descriptors: Iterable[EntryDescriptor], delimiters: Sequence[str] = ()
) -> AutomatonIndex:
    """One automaton per descriptor, built from its match key."""
    return AutomatonIndex(
        (build_automaton(build_fragments(d.match_key, delimiters)), d)
        for d in descriptors
    )


def default_invocation(namespace: str, name: str, no_namespace: str) -> str:
    """Minimal call snippet for entries that do not provide one."""
    qualified = name if namespace == no_namespace else f"{namespace}.{name}"
    return f'ops.run("{qualified}")'


class _View:
    """One tree plus the descriptors behind its leaves."""

    def __init__(self, mode: ViewMode, root: TreeNode, delimiters: Sequence[str]) -> None:
        self.mode = mode
        self.root = root
        self.delimiters = tuple(delimiters)
        self.descriptors: list[EntryDescriptor] = []
        self._index: AutomatonIndex | None = None
        self._lock = threading.Lock()

    @property
    def is_indexed(self) -> bool:
        return self._index is not None

    def automaton_index(self) -> AutomatonIndex:
        index = self._index
        if index is not None:
            return index
        with self._lock:
            if self._index is None:
                self._index = build_automaton_index(self.descriptors, self.delimiters)
                logger.debug(
                    f"Built {self.mode.value} automaton index "
                    f"({len(self._index)} entries)"
                )
            return self._index


class OpIndex:
    """Session-lifetime index over one registry snapshot."""

    def __init__(self, config: FinderConfig | None = None) -> None:
        self.config = config or FinderConfig()
        self._views = {
            ViewMode.SIMPLE: _View(ViewMode.SIMPLE, self.new_root(), ()),
            ViewMode.ADVANCED: _View(
                ViewMode.ADVANCED, self.new_root(), self.config.advanced_delimiters
            ),
        }
        self.skipped = 0

    # ------------------------------------------------------------------ #
    #  Construction                                                        #
    # ------------------------------------------------------------------ #

    @classmethod
    def build(cls, source: RegistrySource, config: FinderConfig | None = None) -> OpIndex:
        """Enumerate *source* once and build both trees.

        Entries whose name and fallback name are both empty are skipped.
        """
        index = cls(config)
        cfg = index.config
        simple_view = index._views[ViewMode.SIMPLE]
        advanced_view = index._views[ViewMode.ADVANCED]
        simple_tree = HierarchyBuilder(simple_view.root, cfg.no_namespace)
        advanced_tree = HierarchyBuilder(advanced_view.root, cfg.no_namespace)
        eligibility = SimpleEligibility(cfg.simple_types, source.is_assignable)

        for entry in source.entries():
            name = resolve_name(entry.name, entry.fallback_name)
            if not name:
                index.skipped += 1
                logger.debug(f"Skipping unnamed registry entry ({entry.owner_type!r})")
                continue

            namespace = resolve_name(entry.namespace, cfg.no_namespace)
            # one node per namespace, then one per op name above its signatures
            path = f"{namespace}.{name}"
            signature = entry.signature.strip() or name
            invocation = entry.invocation or default_invocation(
                namespace, name, cfg.no_namespace
            )

            descriptor = EntryDescriptor(
                display_name=signature,
                invocation=invocation,
                owner_type=entry.owner_type,
                match_key=entry.owner_type,
            )
            advanced_tree.insert(path, descriptor)
            advanced_view.descriptors.append(descriptor)

            simple_name = simplify_signature(signature, cfg.type_aliases)
            if simple_name and eligibility.accept(simple_name, entry.input_types):
                simple_descriptor = EntryDescriptor(
                    display_name=simple_name,
                    invocation=invocation,
                    owner_type=entry.owner_type,
                    match_key=simple_name,
                )
                simple_tree.insert(path, simple_descriptor)
                simple_view.descriptors.append(simple_descriptor)

        advanced_tree.build()
        simple_tree.build()
        logger.info(
            f"Indexed {len(advanced_view.descriptors)} ops "
            f"({len(simple_view.descriptors)} in simple view, {index.skipped} skipped)"
        )
        return index

    @classmethod
    async def build_async(
        cls,
        source: RegistrySource,
        config: FinderConfig | None = None,
        executor: Executor | None = None,
    ) -> OpIndex:
        """Build off the event loop in *executor* (default executor if None)."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(executor, cls.build, source, config)

    # ------------------------------------------------------------------ #
    #  Access                                                              #
    # ------------------------------------------------------------------ #

    def new_root(self) -> TreeNode:
        """A fresh, empty root node."""
        return TreeNode(
            label=self.config.root_label,
            invocation=self.config.root_invocation,
            owner_type=self.config.root_owner_type,
        )

    def tree(self, mode: ViewMode) -> TreeNode:
        """The unfiltered tree of *mode* (shared, treat as read-only)."""
        return self._views[mode].root

    def descriptors(self, mode: ViewMode) -> list[EntryDescriptor]:
        return list(self._views[mode].descriptors)

    def automaton_index(self, mode: ViewMode) -> AutomatonIndex:
        """The automaton index of *mode*, built on first use."""
        return self._views[mode].automaton_index()

    def is_indexed(self, mode: ViewMode) -> bool:
        return self._views[mode].is_indexed

    def result_tree(self, outcome: FilterOutcome) -> TreeNode:
        """Flat tree with the ranked results directly under a fresh root."""
        root = self.new_root()
        for descriptor in outcome.results:
            root.append(TreeNode.from_descriptor(descriptor))
        return root

    def __len__(self) -> int:
        return len(self._views[ViewMode.ADVANCED].descriptors)

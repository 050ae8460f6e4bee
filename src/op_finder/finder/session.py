# op_finder/finder/session.py
"""Foreground controller for interactive filtering.

``FinderSession`` belongs to the event loop it is used from. Filter runs are
pushed to a thread pool; only the most recently submitted query can ever
install its result, everything older is cancelled and its late results are
thrown away.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from concurrent.futures import Executor, ThreadPoolExecutor

from op_finder.config.defaults import NAMESPACE
from op_finder.config.enums import ViewMode
from op_finder.config.models import FinderConfig
from op_finder.finder.cancel import CancelToken
from op_finder.finder.index import OpIndex
from op_finder.finder.models import FilterOutcome, TreeNode
from op_finder.finder.scoring import FuzzyFilterEngine, ProgressCallback
from op_finder.finder.tasks import FilterTask

logger = logging.getLogger(__name__)

TreeCallback = Callable[[TreeNode], None]


class FinderSession:
    """Owns the active view, the current tree and the running filter task.

    Args:
        index: Prebuilt op index
        simple: Start in the simplified view
        engine: Filter engine (defaults to one built from the index config)
        executor: Worker pool; a private one is created and owned if None
        on_update: Called on the loop whenever a new tree is installed
        on_progress: Called on the loop with filter progress in percent
    """

    def __init__(
        self,
        index: OpIndex,
        *,
        simple: bool = True,
        engine: FuzzyFilterEngine | None = None,
        executor: Executor | None = None,
        on_update: TreeCallback | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self.index = index
        self.mode = ViewMode.from_flag(simple)
        self.engine = engine or FuzzyFilterEngine(
            keep=index.config.keep, progress_step=index.config.progress_step
        )
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=index.config.max_workers, thread_name_prefix=NAMESPACE
        )
        self.on_update = on_update
        self.on_progress = on_progress

        self.query = ""
        self.progress = 0
        self.last_outcome: FilterOutcome | None = None
        self._tree = index.tree(self.mode)
        self._current: FilterTask | None = None
        self._closed = False

    @property
    def config(self) -> FinderConfig:
        return self.index.config

    @property
    def current_tree(self) -> TreeNode:
        """The tree last installed (the unfiltered tree until a filter completes)."""
        return self._tree

    @property
    def current_task(self) -> FilterTask | None:
        return self._current

    @property
    def is_simple(self) -> bool:
        return self.mode.is_simple

    # ------------------------------------------------------------------ #
    #  Filtering                                                           #
    # ------------------------------------------------------------------ #

    def submit(self, query: str) -> FilterTask | None:
        """Filter the active view with *query*.

        Must be called from the event loop. Any running task is cancelled
        first. The empty query installs the unfiltered tree right away and
        returns None.
        """
        if self._closed:
            raise RuntimeError("FinderSession is closed")

        loop = asyncio.get_running_loop()
        self.query = query
        self.last_outcome = None
        self._cancel_current()

        if not query:
            self._install(self.index.tree(self.mode))
            return None

        task = FilterTask(query, self.mode)
        self._current = task
        self._set_progress(0)

        mode = self.mode

        def work(progress: ProgressCallback, token: CancelToken) -> FilterOutcome:
            return self.engine.filter(query, self.index.automaton_index(mode), progress, token)

        def progress(percent: int) -> None:
            loop.call_soon_threadsafe(self._task_progress, task, percent)

        task.start(loop, self._executor, work, progress, on_done=self._task_done)
        return task

    async def search(self, query: str) -> FilterOutcome | None:
        """Submit *query* and wait for its outcome (None for the empty query)."""
        task = self.submit(query)
        if task is None:
            return None
        return await task.wait()

    def set_mode(self, simple: bool) -> FilterTask | None:
        """Switch view and re-apply the current query to the new view."""
        mode = ViewMode.from_flag(simple)
        if mode is self.mode:
            return None
        logger.debug(f"Switching view {self.mode.value} -> {mode.value}")
        self.mode = mode
        return self.submit(self.query)

    async def wait(self) -> FilterOutcome | None:
        """Wait for the current task, if any."""
        if self._current is None:
            return None
        return await self._current.wait()

    def cancel(self) -> bool:
        """Cancel the running task; the current tree is left as it is."""
        return self._cancel_current()

    def close(self) -> None:
        """Cancel any work and release the owned worker pool."""
        if self._closed:
            return
        self._cancel_current()
        self._closed = True
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)

    async def __aenter__(self) -> FinderSession:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    #  Loop-side callbacks                                                 #
    # ------------------------------------------------------------------ #

    def _cancel_current(self) -> bool:
        task, self._current = self._current, None
        if task is None or not task.cancel():
            return False
        self._set_progress(0)
        return True

    def _task_progress(self, task: FilterTask, percent: int) -> None:
        if task is not self._current or task.token.poll():
            return
        self._set_progress(percent)

    def _task_done(self, task: FilterTask) -> None:
        outcome = task.outcome
        if task is not self._current or task.token.poll() or outcome is None:
            logger.debug(f"Discarding result of superseded task '{task.query}'")
            return
        if outcome.is_cancelled:
            self._set_progress(0)
            return

        self.last_outcome = outcome
        self._install(self.index.result_tree(outcome))

    def _install(self, tree: TreeNode) -> None:
        self._tree = tree
        if self.on_update is not None:
            self.on_update(tree)

    def _set_progress(self, percent: int) -> None:
        self.progress = percent
        if self.on_progress is not None:
            self.on_progress(percent)

# op_finder/finder/tasks.py
"""One filter run executed on a worker thread.

A ``FilterTask`` moves ``idle -> running -> completed | cancelled``; the two
terminal states are final. The computation itself runs in an executor, while
state changes and the completion callback happen on the event loop that
started the task.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from concurrent.futures import Executor
from enum import Enum

from op_finder.config.enums import ViewMode
from op_finder.finder.cancel import CancelToken
from op_finder.finder.models import FilterOutcome
from op_finder.finder.scoring import ProgressCallback

logger = logging.getLogger(__name__)

# (progress, cancel token) -> outcome; runs on the worker thread
FilterWork = Callable[[ProgressCallback, CancelToken], FilterOutcome]


class TaskState(str, Enum):
    """Lifecycle of a filter task."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (TaskState.COMPLETED, TaskState.CANCELLED)


class FilterTask:
    """A cancellable, single-use filter run."""

    def __init__(self, query: str, mode: ViewMode) -> None:
        self.query = query
        self.mode = mode
        self.token = CancelToken()
        self.state = TaskState.IDLE
        self.outcome: FilterOutcome | None = None
        self._future: asyncio.Future[FilterOutcome] | None = None
        self._done = asyncio.Event()

    def start(
        self,
        loop: asyncio.AbstractEventLoop,
        executor: Executor | None,
        work: FilterWork,
        progress: ProgressCallback,
        on_done: Callable[[FilterTask], None] | None = None,
    ) -> None:
        """Run *work* in *executor*; *on_done* fires on *loop* when it ends.

        *progress* is called on the worker thread, it is up to the caller to
        hand the value over to the loop.
        """
        if self.state is not TaskState.IDLE:
            raise RuntimeError(f"Task for '{self.query}' already started ({self.state.value})")

        self.state = TaskState.RUNNING
        self._future = loop.run_in_executor(executor, self._run, work, progress)
        self._future.add_done_callback(lambda _fut: self._finish(on_done))
        logger.debug(f"Started filter task '{self.query}' ({self.mode.value})")

    def _run(self, work: FilterWork, progress: ProgressCallback) -> FilterOutcome:
        try:
            return work(progress, self.token)
        except Exception:
            logger.exception(f"Filter task '{self.query}' failed")
            return FilterOutcome.cancelled(self.query)

    def _finish(self, on_done: Callable[[FilterTask], None] | None) -> None:
        assert self._future is not None
        if self._future.cancelled():
            self.outcome = FilterOutcome.cancelled(self.query)
        else:
            self.outcome = self._future.result()

        if self.state is TaskState.RUNNING:
            self.state = (
                TaskState.CANCELLED if self.outcome.is_cancelled else TaskState.COMPLETED
            )
        self._future = None

        try:
            if on_done is not None:
                on_done(self)
        finally:
            self._done.set()

    def cancel(self) -> bool:
        """Request cancellation; False if the task already ended."""
        if self.state.is_terminal:
            return False
        self.token.stop()
        self.state = TaskState.CANCELLED
        logger.debug(f"Cancelled filter task '{self.query}'")
        return True

    @property
    def done(self) -> bool:
        return self._done.is_set()

    async def wait(self) -> FilterOutcome | None:
        """Wait until the run has ended and its callback has fired."""
        if self.state is TaskState.IDLE:
            return None
        await self._done.wait()
        return self.outcome

    def __repr__(self) -> str:
        return f"FilterTask(query={self.query!r}, mode={self.mode.value}, state={self.state.value})"

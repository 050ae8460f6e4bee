# op_finder/finder/cancel.py
"""Cooperative cancellation flag shared between the foreground and workers."""

from __future__ import annotations

import threading


class CancelToken:
    """Thread-safe stop flag polled by long-running work."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def stop(self) -> None:
        """Ask the work guarded by this token to stop."""
        self._event.set()

    def poll(self) -> bool:
        """True once :meth:`stop` has been called."""
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancelToken(stopped={self.poll()})"

"""UI scheduling contexts: a drained queue (main-queue analog) and an inline runner."""

import queue
from collections.abc import Callable


class QueueScheduler:
    """Thread-safe. Callbacks run only when the UI owner calls drain()."""

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[Callable[[], None]] = queue.SimpleQueue()

    def run_on_ui_context(self, fn: Callable[[], None]) -> None:
        self._queue.put(fn)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def drain(self) -> int:
        """Run queued callbacks, including ones they enqueue. Returns how many ran."""
        ran = 0
        while True:
            try:
                fn = self._queue.get_nowait()
            except queue.Empty:
                return ran
            fn()
            ran += 1


class ImmediateScheduler:
    """Runs callbacks inline. Only for callers already on the UI context."""

    def run_on_ui_context(self, fn: Callable[[], None]) -> None:
        fn()

"""UI-thread dispatcher for completions coming from fetch worker threads.

Worker threads call ``dispatch(job)``, which only enqueues. The Tk main loop
drains the queue on an ``after`` timer, so every controller state mutation
triggered by a completion runs on the UI thread.
"""

from __future__ import annotations

import logging
import queue
from typing import Callable, Optional

ScheduleFn = Callable[[int, Callable[[], None]], str]
CancelFn = Callable[[str], None]
Job = Callable[[], None]


class TkDispatcher:
    """Thread-safe job queue pumped by a UI scheduler (for example Tk)."""

    def __init__(self, schedule: ScheduleFn, cancel: CancelFn, *, interval_ms: int = 30) -> None:
        """Store schedule/cancel functions.

        Args:
            schedule: Function compatible with ``after(delay_ms, callback)``.
            cancel: Function compatible with ``after_cancel(token)``.
            interval_ms: Delay between queue drains.
        """
        self._log = logging.getLogger(__name__)
        self._schedule = schedule
        self._cancel = cancel
        self._interval_ms = max(1, int(interval_ms))
        self._jobs: "queue.Queue[Job]" = queue.Queue()
        self._token: Optional[str] = None

    def dispatch(self, job: Job) -> None:
        """Enqueue ``job`` for the UI thread; safe to call from any thread."""
        self._jobs.put(job)

    def start(self) -> None:
        if self._token is None:
            self._token = self._schedule(self._interval_ms, self._tick)

    def stop(self) -> None:
        token, self._token = self._token, None
        if token is not None:
            self._cancel(token)

    @property
    def running(self) -> bool:
        return self._token is not None

    def drain(self) -> int:
        """Run every queued job on the calling thread; returns how many ran."""
        count = 0
        while True:
            try:
                job = self._jobs.get_nowait()
            except queue.Empty:
                return count
            count += 1
            try:
                job()
            except Exception:
                self._log.exception("Dispatched job failed")

    def _tick(self) -> None:
        self._token = None
        self.drain()
        self.start()


__all__ = ["TkDispatcher"]

"""
Thread-safe status sink shared between the conversion worker and observers.

The worker is the only writer. Observers poll :meth:`StatusSink.snapshot` and
:meth:`StatusSink.is_converting` from any thread, or register a callback with
:meth:`StatusSink.subscribe`. The lock only guards the swap of the snapshot and
the in-progress flag; callbacks run outside of it.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from loguru import logger

from pdf2key.core.models import ConversionStatus

StatusCallback = Callable[[ConversionStatus], None]


class StatusSink:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._status = ConversionStatus()
        self._converting = False
        self._subscribers: list[StatusCallback] = []

    def snapshot(self) -> ConversionStatus:
        with self._lock:
            return self._status

    def is_converting(self) -> bool:
        with self._lock:
            return self._converting

    def subscribe(self, callback: StatusCallback) -> None:
        with self._lock:
            self._subscribers.append(callback)

    def try_begin(self) -> bool:
        """Claim the sink for a new job; False when one is already running."""
        with self._lock:
            if self._converting:
                return False
            self._converting = True
            self._status = ConversionStatus(
                message="Initializing...", state="in_progress"
            )
            status = self._status
        self._notify(status)
        return True

    def update(self, message: str, progress: float, phase: str) -> None:
        """Publish an in-progress message for the current phase."""
        with self._lock:
            # Progress never goes backwards within a job
            progress = max(progress, self._status.progress)
            self._status = ConversionStatus(
                message=message,
                progress=min(progress, 1.0),
                state="in_progress",
                phase=phase,  # type: ignore[arg-type]
            )
            status = self._status
        self._notify(status)

    def succeed(self, message: str = "Done!") -> None:
        self._finish(
            message=message, progress=1.0, state="succeeded", phase="succeeded"
        )

    def fail(self, error: str) -> None:
        with self._lock:
            progress = min(self._status.progress, 0.99)
        self._finish(
            message=error,
            progress=progress,
            state="failed",
            phase="failed",
            error=error,
        )

    def reset(self) -> None:
        """Return to idle, e.g. when the user picks another document."""
        with self._lock:
            if self._converting:
                return
            self._status = ConversionStatus()
            status = self._status
        self._notify(status)

    def _finish(self, **fields: Any) -> None:
        # Clear the in-progress flag first so the terminal status is the last write
        with self._lock:
            self._converting = False
        with self._lock:
            self._status = ConversionStatus(**fields)
            status = self._status
        self._notify(status)

    def _notify(self, status: ConversionStatus) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(status)
            except Exception as exc:
                logger.warning(f"[Status] Subscriber raised {exc!r}; ignoring")

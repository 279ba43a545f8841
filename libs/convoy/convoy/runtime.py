"""Cancellation and time primitives shared by lifecycle operations."""

import threading
import time
from datetime import datetime, timezone
from typing import Protocol


class Context:
    """Cancellation token passed through a lifecycle operation.

    A context is cancelled at most once; waits performed through it return
    early as soon as it is cancelled.
    """

    def __init__(self):
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        """Cancel the operation this context belongs to."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def wait(self, seconds: float) -> bool:
        """Block for up to ``seconds``.

        Returns:
            True if the context was cancelled during the wait
        """
        return self._cancelled.wait(seconds)


class Clock(Protocol):
    """Source of time and sleeping for lifecycle operations."""

    def now(self) -> datetime:
        ...

    def monotonic(self) -> float:
        ...

    def sleep(self, seconds: float, ctx: Context | None = None) -> bool:
        """Sleep, returning True if ``ctx`` was cancelled meanwhile."""
        ...


class SystemClock:
    """Wall-clock implementation backed by the OS."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float, ctx: Context | None = None) -> bool:
        if ctx is None:
            time.sleep(seconds)
            return False
        return ctx.wait(seconds)

"""Log retrieval for managed services."""

from collections import deque
from collections.abc import Iterator
from pathlib import Path

from convoy.errors import LogNotFound
from convoy.runtime import Clock, Context, SystemClock


def tail_lines(path: Path, lines: int = 50) -> list[str]:
    """Return the last ``lines`` lines of ``path``.

    Raises:
        LogNotFound: If the file does not exist
    """
    if not path.exists():
        raise LogNotFound(f"Log file not found: {path}")

    if lines <= 0:
        return []

    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return [line.rstrip("\n") for line in deque(f, maxlen=lines)]


def follow(
    path: Path,
    ctx: Context,
    clock: Clock | None = None,
    poll_interval: float = 0.5,
) -> Iterator[str]:
    """Yield lines appended to ``path`` until ``ctx`` is cancelled.

    Starts at the current end of the file. If the file shrinks (rotation or
    truncation) reading restarts from the beginning.

    Raises:
        LogNotFound: If the file does not exist when following starts
    """
    clock = clock or SystemClock()

    if not path.exists():
        raise LogNotFound(f"Log file not found: {path}")

    with open(path, "r", encoding="utf-8", errors="replace") as f:
        f.seek(0, 2)
        partial = ""
        while not ctx.cancelled:
            chunk = f.readline()
            if chunk:
                partial += chunk
                if partial.endswith("\n"):
                    yield partial.rstrip("\n")
                    partial = ""
                continue

            if path.exists() and path.stat().st_size < f.tell():
                f.seek(0)

            if clock.sleep(poll_interval, ctx):
                break

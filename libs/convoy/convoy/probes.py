"""Readiness probes used to infer the health of processes we do not own."""

import socket
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path

import requests

from convoy.process_manager import run_command

PORT_TIMEOUT = 2.0
HTTP_TIMEOUT = 5.0
LOG_MAX_AGE = timedelta(minutes=5)


@dataclass
class HttpProbeResult:
    """Outcome of an HTTP readiness probe.

    Attributes:
        ok: Whether the endpoint answered 200
        status: HTTP status code, None when the request failed
        error: Transport error message when the request failed
    """

    ok: bool
    status: int | None = None
    error: str = ""


def is_port_listening(port: int, host: str = "localhost", timeout: float = PORT_TIMEOUT) -> bool:
    """Return True if a TCP connection to ``host:port`` succeeds."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


def first_closed_port(ports, host: str = "localhost", timeout: float = PORT_TIMEOUT) -> int | None:
    """Return the first port in ``ports`` that is not listening, or None."""
    for port in ports:
        if not is_port_listening(port, host=host, timeout=timeout):
            return port
    return None


def probe_http(url: str, timeout: float = HTTP_TIMEOUT) -> HttpProbeResult:
    """GET ``url`` and report whether it answered 200."""
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        return HttpProbeResult(ok=False, error=str(e))

    with response:
        return HttpProbeResult(ok=response.status_code == 200, status=response.status_code)


def log_modified_at(path: Path) -> datetime | None:
    """Return the log file's modification time, or None if it does not exist.

    Raises:
        OSError: If the path cannot be inspected for any other reason
    """
    try:
        mtime = path.stat().st_mtime
    except FileNotFoundError:
        return None
    return datetime.fromtimestamp(mtime, tz=timezone.utc)


def is_log_stale(modified: datetime | None, now: datetime, max_age: timedelta = LOG_MAX_AGE) -> bool:
    """A missing log is not stale; an existing one must be younger than ``max_age``."""
    if modified is None:
        return False
    return now - modified > max_age


def find_pid(pattern: str) -> int:
    """Look up a process by command line; 0 when nothing matches.

    The newest match is taken: a session wrapper (``screen``, ``bash -c``)
    whose command line embeds the pattern is always older than the process
    it launched.
    """
    result = run_command("pgrep", "-n", "-f", pattern)
    if not result.success:
        return 0

    line = result.stdout.strip()
    return int(line) if line.isdigit() else 0

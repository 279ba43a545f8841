"""Common lifecycle for services run inside detached named sessions."""

from abc import abstractmethod
from collections.abc import Iterator
from pathlib import Path

from convoy import logs, probes
from convoy.errors import (
    AlreadyRunning,
    MissingBinary,
    MissingConfig,
    PortClosed,
    SessionMissing,
    StartFailed,
    StopFailed,
)
from convoy.runtime import Context
from convoy.services.base import Service


class SessionService(Service):
    """A service launched from a working directory into a named session.

    Subclasses describe what to run (binary, config, command line, log file)
    and add their own health conditions on top of the session check.
    """

    start_settle = 3.0

    @property
    def session(self) -> str:
        return self.name

    @property
    @abstractmethod
    def work_dir(self) -> Path:
        ...

    @property
    @abstractmethod
    def binary_path(self) -> Path:
        ...

    @property
    @abstractmethod
    def config_path(self) -> Path:
        ...

    @property
    @abstractmethod
    def log_path(self) -> Path:
        ...

    @abstractmethod
    def command(self) -> list[str]:
        """Command line run inside the session, relative to ``work_dir``."""

    def is_running(self) -> bool:
        return self.supervisor.exists(self.session)

    def _start(self, ctx: Context | None) -> None:
        if self.is_running():
            raise AlreadyRunning(self.name)

        if not self.binary_path.exists():
            raise MissingBinary(self.name, str(self.binary_path))

        if not self.config_path.exists():
            raise MissingConfig(self.name, str(self.config_path))

        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StartFailed(self.name, f"cannot create log directory: {e}") from e

        result = self.supervisor.launch(
            self.session,
            command=self.command(),
            cwd=self.work_dir,
            log_path=self.log_path,
        )
        if not result.success:
            raise StartFailed(self.name, result.message)

        self._sleep(self.start_settle, ctx)

        if not self.is_running():
            raise StartFailed(self.name, f"session '{self.session}' not found after launch")

        self._wait_until_ready(ctx)

    def _wait_until_ready(self, ctx: Context | None) -> None:
        """Hook for services that need more than a live session to be usable."""

    def _stop(self, ctx: Context | None) -> None:
        result = self.supervisor.terminate(self.session)
        if not result.success:
            raise StopFailed(self.name, result.message)
        self._sleep(self.stop_grace, ctx)

    def _check_session(self) -> None:
        if not self.is_running():
            raise SessionMissing(self.name, self.session)

    def _check_ports(self) -> None:
        closed = probes.first_closed_port(self.ports)
        if closed is not None:
            raise PortClosed(self.name, closed)

    def get_logs(self, lines: int = 50) -> list[str]:
        """Return the last ``lines`` lines of the service log."""
        return logs.tail_lines(self.log_path, lines)

    def follow_logs(self, ctx: Context) -> Iterator[str]:
        """Stream appended log lines until ``ctx`` is cancelled."""
        return logs.follow(self.log_path, ctx, clock=self.clock)

"""Capability contract shared by every managed service."""

import threading
from abc import ABC, abstractmethod

from convoy import probes
from convoy.errors import OperationCancelled, ServiceError
from convoy.models.config import ServiceConfig
from convoy.models.status import ServiceStatus
from convoy.process_manager import Supervisor
from convoy.runtime import Clock, Context, SystemClock
from convoy_logging import get_logger


class Service(ABC):
    """A long-running process managed, but not owned, by Convoy.

    Adapters keep no record of the remote process; every query probes the
    OS again. Lifecycle mutations on one adapter are serialised by a
    re-entrant lock so that concurrent callers cannot interleave a start
    with a stop of the same service.
    """

    name: str = ""

    # Seconds to wait after launching, after terminating, and between the
    # stop and start halves of a restart.
    start_settle: float = 2.0
    stop_grace: float = 2.0
    restart_settle: float = 2.0

    def __init__(
        self,
        config: ServiceConfig,
        supervisor: Supervisor,
        clock: Clock | None = None,
    ):
        self.config = config
        self.supervisor = supervisor
        self.clock = clock or SystemClock()
        self.logger = get_logger(f"services.{self.name}")
        self._lock = threading.RLock()

    def get_name(self) -> str:
        return self.name

    @property
    @abstractmethod
    def ports(self) -> list[int]:
        """Ports the service is expected to listen on."""

    @property
    @abstractmethod
    def pid_pattern(self) -> str:
        """Command-line pattern used to look up the service's PID."""

    @abstractmethod
    def is_running(self) -> bool:
        """Liveness probe: is the underlying process or session present?"""

    @abstractmethod
    def health_check(self, ctx: Context | None = None) -> None:
        """Raise the first unmet health condition; return None when healthy."""

    @abstractmethod
    def _start(self, ctx: Context | None) -> None:
        ...

    @abstractmethod
    def _stop(self, ctx: Context | None) -> None:
        ...

    def start(self, ctx: Context | None = None) -> None:
        """Launch the service and wait for it to settle.

        Raises:
            AlreadyRunning: If the service is already detected running
            MissingBinary: If the executable is absent
            MissingConfig: If the configuration file is absent
            StartFailed: If the launch itself failed
            OperationCancelled: If ``ctx`` was cancelled while waiting
        """
        with self._lock:
            self._check_cancelled(ctx)
            self.logger.info("Starting service", service=self.name)
            self._start(ctx)
            self.logger.info("Service started", service=self.name)

    def stop(self, ctx: Context | None = None) -> None:
        """Terminate the service. Stopping a stopped service is a no-op.

        Raises:
            StopFailed: If termination was requested and failed
            OperationCancelled: If ``ctx`` was cancelled while waiting
        """
        with self._lock:
            self._check_cancelled(ctx)
            if not self.is_running():
                self.logger.debug("Service already stopped", service=self.name)
                return
            self.logger.info("Stopping service", service=self.name)
            self._stop(ctx)
            self.logger.info("Service stopped", service=self.name)

    def restart(self, ctx: Context | None = None) -> None:
        """Stop, settle, start. Errors from either half propagate unchanged."""
        with self._lock:
            self.stop(ctx)
            self._sleep(self.restart_settle, ctx)
            self.start(ctx)

    def get_status(self, ctx: Context | None = None) -> ServiceStatus:
        """Probe the service and summarise the result.

        Never raises: health failures and OS errors met while probing are
        reported in ``errors`` with ``healthy=False``.
        """
        try:
            self.health_check(ctx)
        except (ServiceError, OSError) as e:
            return ServiceStatus(
                name=self.name,
                running=self.is_running(),
                healthy=False,
                ports=self.ports,
                errors=[str(e)],
            )

        return ServiceStatus(
            name=self.name,
            running=True,
            healthy=True,
            pid=probes.find_pid(self.pid_pattern),
            ports=self.ports,
            last_seen=self.clock.now(),
        )

    def _sleep(self, seconds: float, ctx: Context | None) -> None:
        """Wait ``seconds``, aborting promptly if ``ctx`` is cancelled."""
        if self.clock.sleep(seconds, ctx):
            raise OperationCancelled(self.name)

    def _check_cancelled(self, ctx: Context | None) -> None:
        if ctx is not None and ctx.cancelled:
            raise OperationCancelled(self.name)

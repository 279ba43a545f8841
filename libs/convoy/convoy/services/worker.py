"""Browser-automation worker adapter."""

from pathlib import Path

from convoy import probes
from convoy.errors import HTTPUnhealthy, ReadinessTimeout
from convoy.models.config import ServiceConfig
from convoy.process_manager import Supervisor, create_supervisor
from convoy.runtime import Clock, Context
from convoy.services.session import SessionService

READINESS_TIMEOUT = 30.0
READINESS_INTERVAL = 1.0
READINESS_REQUEST_TIMEOUT = 2.0


class WorkerService(SessionService):
    """Runs the automation worker in a detached session.

    Healthy means: the session exists, the API port accepts TCP
    connections, and the health endpoint answers 200. ``start`` does not
    return until the health endpoint is up or the readiness timeout passes.
    """

    name = "worker"

    def __init__(
        self,
        config: ServiceConfig,
        supervisor: Supervisor | None = None,
        clock: Clock | None = None,
        readiness_timeout: float = READINESS_TIMEOUT,
        readiness_interval: float = READINESS_INTERVAL,
    ):
        super().__init__(
            config,
            supervisor or create_supervisor(config.worker_backend, use_sudo=config.use_sudo),
            clock,
        )
        self.readiness_timeout = readiness_timeout
        self.readiness_interval = readiness_interval

    @property
    def session(self) -> str:
        return self.config.worker_session

    @property
    def ports(self) -> list[int]:
        return [self.config.worker_api_port]

    @property
    def pid_pattern(self) -> str:
        return self.config.worker_binary

    @property
    def work_dir(self) -> Path:
        return Path(self.config.worker_dir)

    @property
    def binary_path(self) -> Path:
        return self.config.worker_binary_path

    @property
    def config_path(self) -> Path:
        return self.config.worker_config_path

    @property
    def log_path(self) -> Path:
        return self.config.worker_log_path

    def command(self) -> list[str]:
        return [self.config.worker_interpreter, self.config.worker_binary]

    def health_check(self, ctx: Context | None = None) -> None:
        self._check_session()
        self._check_ports()

        result = probes.probe_http(self.config.worker_health_url)
        if not result.ok:
            raise HTTPUnhealthy(self.name, result.status, result.error)

    def _wait_until_ready(self, ctx: Context | None) -> None:
        """Poll the health endpoint until it answers 200.

        Raises:
            ReadinessTimeout: If the endpoint is not up within the timeout
            OperationCancelled: If ``ctx`` is cancelled while polling
        """
        deadline = self.clock.monotonic() + self.readiness_timeout
        url = self.config.worker_health_url

        while self.clock.monotonic() < deadline:
            self._check_cancelled(ctx)

            result = probes.probe_http(url, timeout=READINESS_REQUEST_TIMEOUT)
            if result.ok:
                self.logger.debug("Health endpoint ready", service=self.name, url=url)
                return

            self._sleep(self.readiness_interval, ctx)

        raise ReadinessTimeout(self.name, self.readiness_timeout)

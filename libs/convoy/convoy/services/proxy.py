"""Reverse-proxy adapter."""

from pathlib import Path

from convoy import probes
from convoy.errors import LogUnreadable, StaleLog
from convoy.models.config import ServiceConfig
from convoy.process_manager import Supervisor, create_supervisor
from convoy.runtime import Clock, Context
from convoy.services.session import SessionService


class ProxyService(SessionService):
    """Runs the reverse proxy in a detached session.

    Healthy means: the session exists, every proxy port accepts TCP
    connections, and the log file (when present) was written within the
    last five minutes.
    """

    name = "proxy"

    def __init__(
        self,
        config: ServiceConfig,
        supervisor: Supervisor | None = None,
        clock: Clock | None = None,
    ):
        super().__init__(
            config,
            supervisor or create_supervisor(config.proxy_backend, use_sudo=config.use_sudo),
            clock,
        )

    @property
    def session(self) -> str:
        return self.config.proxy_session

    @property
    def ports(self) -> list[int]:
        return list(self.config.proxy_ports)

    @property
    def pid_pattern(self) -> str:
        return self.config.proxy_binary

    @property
    def work_dir(self) -> Path:
        return Path(self.config.proxy_dir)

    @property
    def binary_path(self) -> Path:
        return self.config.proxy_binary_path

    @property
    def config_path(self) -> Path:
        return self.config.proxy_config_path

    @property
    def log_path(self) -> Path:
        return self.config.proxy_log_path

    def command(self) -> list[str]:
        return [f"./{self.config.proxy_binary}", "-config", self.config.proxy_config]

    def health_check(self, ctx: Context | None = None) -> None:
        self._check_session()
        self._check_ports()

        try:
            modified = probes.log_modified_at(self.log_path)
        except OSError as e:
            raise LogUnreadable(self.name, str(self.log_path), e.strerror or str(e)) from e
        if probes.is_log_stale(modified, self.clock.now()):
            raise StaleLog(self.name, modified)

"""Redis data-store adapter."""

import shutil
from pathlib import Path

from convoy.errors import (
    AlreadyRunning,
    MissingBinary,
    MissingConfig,
    PingFailed,
    ServiceInactive,
    StartFailed,
    StopFailed,
)
from convoy.models.config import ServiceConfig
from convoy.process_manager import Supervisor, create_supervisor, run_command
from convoy.runtime import Clock, Context
from convoy.services.base import Service


class RedisService(Service):
    """Manages Redis through the host service manager.

    Liveness is the service manager's view of the unit; health additionally
    requires ``redis-cli ping`` to answer ``PONG``.
    """

    name = "redis"
    restart_settle = 1.0

    def __init__(
        self,
        config: ServiceConfig,
        supervisor: Supervisor | None = None,
        clock: Clock | None = None,
    ):
        super().__init__(
            config,
            supervisor or create_supervisor(config.redis_backend, use_sudo=config.use_sudo),
            clock,
        )

    @property
    def ports(self) -> list[int]:
        return [self.config.redis_port]

    @property
    def pid_pattern(self) -> str:
        return Path(self.config.redis_binary).name

    def is_running(self) -> bool:
        return self.supervisor.exists(self.config.redis_unit)

    def binary_available(self) -> bool:
        binary = self.config.redis_binary
        if Path(binary).is_absolute():
            return Path(binary).exists()
        return shutil.which(binary) is not None

    def _start(self, ctx: Context | None) -> None:
        if self.is_running():
            raise AlreadyRunning(self.name)

        if not self.binary_available():
            raise MissingBinary(self.name, self.config.redis_binary)

        if self.config.redis_config and not Path(self.config.redis_config).exists():
            raise MissingConfig(self.name, self.config.redis_config)

        result = self.supervisor.launch(self.config.redis_unit)
        if not result.success:
            raise StartFailed(self.name, result.message)

        enabled = self.supervisor.enable(self.config.redis_unit)
        if not enabled.success:
            self.logger.warning("Could not enable unit at boot", service=self.name, error=enabled.message)

        self._sleep(self.start_settle, ctx)

    def _stop(self, ctx: Context | None) -> None:
        result = self.supervisor.terminate(self.config.redis_unit)
        if not result.success:
            raise StopFailed(self.name, result.message)
        self._sleep(self.stop_grace, ctx)

    def health_check(self, ctx: Context | None = None) -> None:
        state = self.supervisor.state(self.config.redis_unit)
        if state != "active":
            raise ServiceInactive(self.name, state)

        response = self.ping()
        if response != "PONG":
            raise PingFailed(self.name, response)

    def ping(self) -> str:
        """Run ``redis-cli ping`` and return its trimmed output.

        The password travels in ``REDISCLI_AUTH`` so it never shows up in the
        process list.
        """
        args = [self.config.redis_cli, "-h", self.config.redis_host, "-p", str(self.config.redis_port), "ping"]
        env = {"REDISCLI_AUTH": self.config.redis_password} if self.config.redis_password else None

        result = run_command(*args, timeout=5.0, env=env)
        if not result.success:
            return result.message
        return result.stdout.strip()

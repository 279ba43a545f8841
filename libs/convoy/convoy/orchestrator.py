"""Dependency-ordered orchestration of the managed services."""

from convoy.errors import OperationCancelled, ServiceError, ServiceNotFound, StopAllFailed
from convoy.models.config import ServiceConfig
from convoy.models.status import ServiceStatus
from convoy.runtime import Clock, Context, SystemClock
from convoy.services import ProxyService, RedisService, Service, WorkerService
from convoy_logging import get_logger

START_SETTLE = 2.0
RESTART_SETTLE = 2.0


class Orchestrator:
    """Starts, stops and inspects the managed services as a unit.

    Services are started in registration order (data store, proxy, worker)
    and stopped in reverse. Starting is fail-fast and performs no rollback;
    stopping is best-effort and reports every failure.
    """

    def __init__(
        self,
        config: ServiceConfig | None = None,
        services: list[Service] | None = None,
        clock: Clock | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            config: Shared service configuration (defaults used when None)
            services: Adapters in start order; built from ``config`` when None
            clock: Time source for settle delays
        """
        self.config = config or ServiceConfig()
        self.clock = clock or SystemClock()
        self.logger = get_logger("orchestrator")

        if services is None:
            services = [
                RedisService(self.config, clock=self.clock),
                ProxyService(self.config, clock=self.clock),
                WorkerService(self.config, clock=self.clock),
            ]

        self._services: dict[str, Service] = {}
        for service in services:
            name = service.get_name()
            if name in self._services:
                raise ValueError(f"Duplicate service name: {name}")
            self._services[name] = service

    @property
    def services(self) -> list[Service]:
        """Adapters in start order."""
        return list(self._services.values())

    def names(self) -> list[str]:
        return list(self._services)

    def get_service(self, name: str) -> Service:
        """Look up a service by name.

        Raises:
            ServiceNotFound: If no service is registered under ``name``
        """
        try:
            return self._services[name]
        except KeyError:
            raise ServiceNotFound(name) from None

    def start_all(self, ctx: Context | None = None) -> None:
        """Start every service in dependency order, then verify health.

        The first failing start aborts the run; services started before it
        are left running.
        """
        started: list[str] = []
        for service in self.services:
            try:
                service.start(ctx)
            except ServiceError as e:
                self.logger.error("Start aborted", service=service.get_name(), error=str(e))
                if started:
                    self.logger.warning("Services left running after failed start", services=started)
                raise

            started.append(service.get_name())
            self._settle(START_SETTLE, ctx, service.get_name())

        self.verify_all(ctx)
        self.logger.info("All services started", services=started)

    def stop_all(self, ctx: Context | None = None) -> None:
        """Stop every service in reverse dependency order.

        Every stop is attempted even after failures.

        Raises:
            StopAllFailed: Naming each service whose stop failed
        """
        errors: dict[str, Exception] = {}
        for service in reversed(self.services):
            try:
                service.stop(ctx)
            except ServiceError as e:
                self.logger.error("Stop failed", service=service.get_name(), error=str(e))
                errors[service.get_name()] = e

        if errors:
            raise StopAllFailed(errors)

        self.logger.info("All services stopped")

    def restart_all(self, ctx: Context | None = None) -> None:
        """Stop everything, settle, start everything.

        A failed stop is raised as-is and nothing is started.
        """
        self.stop_all(ctx)
        self._settle(RESTART_SETTLE, ctx, "orchestrator")
        self.start_all(ctx)

    def verify_all(self, ctx: Context | None = None) -> None:
        """Health-check every service and raise the first failure.

        Health errors already carry the failing service's name.
        """
        for service in self.services:
            service.health_check(ctx)

    def get_status(self, ctx: Context | None = None) -> dict[str, ServiceStatus]:
        """Return the status of every service, keyed by name. Never raises."""
        return {name: service.get_status(ctx) for name, service in self._services.items()}

    def _settle(self, seconds: float, ctx: Context | None, label: str) -> None:
        if self.clock.sleep(seconds, ctx):
            raise OperationCancelled(label)

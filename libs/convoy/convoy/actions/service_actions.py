"""Service management actions."""

from pathlib import Path

from convoy.errors import LogNotFound, ServiceError, StopAllFailed
from convoy.models.actions import ActionResult
from convoy.models.status import ServiceStatus
from convoy.orchestrator import Orchestrator
from convoy.runtime import Context
from convoy.services.session import SessionService


class ServiceActions:
    """Encapsulates service management business logic for the CLI.

    Each action runs through the orchestrator and is reported as an
    ActionResult instead of an exception, so the CLI only has to render
    outcomes.
    """

    def __init__(self, orchestrator: Orchestrator, ctx: Context | None = None):
        """Initialize service actions.

        Args:
            orchestrator: Orchestrator owning the managed services
            ctx: Context shared by every action, cancelled on interrupt
        """
        self.orchestrator = orchestrator
        self.ctx = ctx or Context()

    def start(self, name: str | None = None) -> ActionResult:
        """Start one service, or all of them in dependency order."""
        try:
            if name is None:
                self.orchestrator.start_all(self.ctx)
                return ActionResult(success=True, message="All services started")

            self.orchestrator.get_service(name).start(self.ctx)
            return ActionResult(success=True, message=f"{name} started")
        except ServiceError as e:
            return ActionResult(
                success=False,
                message=f"Failed to start: {e}",
                data={"service": e.service},
            )

    def stop(self, name: str | None = None) -> ActionResult:
        """Stop one service, or all of them in reverse dependency order."""
        try:
            if name is None:
                self.orchestrator.stop_all(self.ctx)
                return ActionResult(success=True, message="All services stopped")

            self.orchestrator.get_service(name).stop(self.ctx)
            return ActionResult(success=True, message=f"{name} stopped")
        except StopAllFailed as e:
            return ActionResult(
                success=False,
                message=str(e),
                data={"failed": list(e.errors)},
            )
        except ServiceError as e:
            return ActionResult(
                success=False,
                message=f"Failed to stop: {e}",
                data={"service": e.service},
            )

    def restart(self, name: str | None = None) -> ActionResult:
        """Restart one service, or all of them."""
        try:
            if name is None:
                self.orchestrator.restart_all(self.ctx)
                return ActionResult(success=True, message="All services restarted")

            self.orchestrator.get_service(name).restart(self.ctx)
            return ActionResult(success=True, message=f"{name} restarted")
        except StopAllFailed as e:
            return ActionResult(
                success=False,
                message=f"Restart aborted, {e}",
                data={"failed": list(e.errors)},
            )
        except ServiceError as e:
            return ActionResult(
                success=False,
                message=f"Failed to restart: {e}",
                data={"service": e.service},
            )

    def health(self) -> ActionResult:
        """Run every health check; fails on the first unhealthy service."""
        try:
            self.orchestrator.verify_all(self.ctx)
        except ServiceError as e:
            return ActionResult(
                success=False,
                message=str(e),
                data={"service": e.service},
            )
        return ActionResult(success=True, message="All services are healthy")

    def status(self) -> dict[str, ServiceStatus]:
        """Return the status of every service."""
        return self.orchestrator.get_status(self.ctx)

    def log_path(self, name: str) -> Path | None:
        """Return the log file of a session-backed service, None otherwise."""
        service = self.orchestrator.get_service(name)
        if isinstance(service, SessionService):
            return service.log_path
        return None

    def logs(self, name: str, lines: int = 50) -> ActionResult:
        """Return the last lines of a service's log."""
        try:
            service = self.orchestrator.get_service(name)
        except ServiceError as e:
            return ActionResult(success=False, message=str(e))

        if not isinstance(service, SessionService):
            return ActionResult(
                success=False,
                message=f"{name} logs are kept by the service manager (try: journalctl -u {self.orchestrator.config.redis_unit})",
            )

        try:
            output = service.get_logs(lines)
        except LogNotFound as e:
            return ActionResult(success=False, message=str(e))

        return ActionResult(
            success=True,
            message=f"Last {len(output)} lines of {service.log_path}",
            data={"lines": output},
        )

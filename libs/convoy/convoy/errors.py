"""Error taxonomy for service lifecycle operations.

Every error carries the name of the service it concerns so that callers
aggregating results across services can attribute failures without extra
bookkeeping.
"""

from datetime import datetime


class ServiceError(Exception):
    """Base error for all service lifecycle failures.

    Attributes:
        service: Name of the service the error concerns
        detail: Human-readable cause
    """

    def __init__(self, service: str, detail: str):
        self.service = service
        self.detail = detail
        super().__init__(f"{service}: {detail}")


class AlreadyRunning(ServiceError):
    def __init__(self, service: str):
        super().__init__(service, "already running")


class MissingBinary(ServiceError):
    def __init__(self, service: str, path: str):
        self.path = path
        super().__init__(service, f"binary not found: {path}")


class MissingConfig(ServiceError):
    def __init__(self, service: str, path: str):
        self.path = path
        super().__init__(service, f"config not found: {path}")


class StartFailed(ServiceError):
    def __init__(self, service: str, cause: str):
        self.cause = cause
        super().__init__(service, f"failed to start: {cause}")


class StopFailed(ServiceError):
    def __init__(self, service: str, cause: str):
        self.cause = cause
        super().__init__(service, f"failed to stop: {cause}")


class OperationCancelled(ServiceError):
    def __init__(self, service: str):
        super().__init__(service, "operation cancelled")


class ServiceNotFound(ServiceError):
    def __init__(self, name: str):
        super().__init__(name, "service not found")


class HealthCheckFailed(ServiceError):
    """Base class for failed health conditions."""


class SessionMissing(HealthCheckFailed):
    def __init__(self, service: str, session: str):
        self.session = session
        super().__init__(service, f"session '{session}' not found")


class PortClosed(HealthCheckFailed):
    def __init__(self, service: str, port: int):
        self.port = port
        super().__init__(service, f"port {port} not listening")


class StaleLog(HealthCheckFailed):
    def __init__(self, service: str, modified: datetime):
        self.modified = modified
        super().__init__(
            service,
            f"log file not being updated (last modified: {modified.isoformat(timespec='seconds')})",
        )


class LogUnreadable(HealthCheckFailed):
    def __init__(self, service: str, path: str, cause: str):
        self.path = path
        self.cause = cause
        super().__init__(service, f"log file unreadable: {path} ({cause})")


class HTTPUnhealthy(HealthCheckFailed):
    def __init__(self, service: str, status: int | None, cause: str = ""):
        self.status = status
        if status is None:
            detail = f"health endpoint unreachable: {cause}" if cause else "health endpoint unreachable"
        else:
            detail = f"health endpoint returned status {status}"
        super().__init__(service, detail)


class ReadinessTimeout(HealthCheckFailed):
    def __init__(self, service: str, timeout: float):
        self.timeout = timeout
        super().__init__(service, f"not ready after {timeout:g}s")


class ServiceInactive(HealthCheckFailed):
    def __init__(self, service: str, state: str):
        self.state = state
        super().__init__(service, f"service manager reports '{state}'")


class PingFailed(HealthCheckFailed):
    def __init__(self, service: str, response: str):
        self.response = response
        super().__init__(service, f"unexpected ping response: {response!r}")


class StopAllFailed(Exception):
    """Raised after a best-effort stop when one or more services failed.

    Attributes:
        errors: Mapping of service name to the error it raised, in stop order
    """

    def __init__(self, errors: dict[str, Exception]):
        self.errors = errors
        summary = "; ".join(str(err) for err in errors.values())
        super().__init__(f"errors stopping services: {summary}")


class LogNotFound(FileNotFoundError):
    """The requested log file does not exist."""

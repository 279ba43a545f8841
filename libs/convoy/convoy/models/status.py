from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class ServiceStatus:
    """Point-in-time status of a managed service.

    Attributes:
        name: Service name
        running: Whether the process is detected running
        healthy: Whether every health condition holds
        pid: Process ID if known (0 when the lookup failed)
        ports: Ports the service is expected to listen on
        errors: Health failures observed while probing
        last_seen: When the service was last observed healthy
    """

    name: str
    running: bool = False
    healthy: bool = False
    pid: int | None = None
    ports: list[int] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    last_seen: datetime | None = None

    def __post_init__(self):
        if self.healthy and not self.running:
            raise ValueError(f"{self.name}: a service cannot be healthy without running")

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation."""
        return {
            "name": self.name,
            "running": self.running,
            "healthy": self.healthy,
            "pid": self.pid,
            "ports": list(self.ports),
            "errors": list(self.errors),
            "last_seen": self.last_seen.isoformat() if self.last_seen else None,
        }

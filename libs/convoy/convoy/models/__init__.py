"""Data models shared across Convoy."""

from convoy.models.actions import ActionResult
from convoy.models.config import ConvoyConfig, LoggingConfig, ServiceConfig
from convoy.models.status import ServiceStatus
from convoy.models.supervisor import SupervisorResult

__all__ = [
    "ActionResult",
    "ConvoyConfig",
    "LoggingConfig",
    "ServiceConfig",
    "ServiceStatus",
    "SupervisorResult",
]

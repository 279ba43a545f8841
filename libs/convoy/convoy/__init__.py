"""Convoy: single-host supervisor for a data store, a proxy and an automation worker."""

from convoy.errors import ServiceError, StopAllFailed
from convoy.models import ServiceConfig, ServiceStatus
from convoy.orchestrator import Orchestrator
from convoy.runtime import Context, SystemClock
from convoy.services import ProxyService, RedisService, Service, WorkerService

__all__ = [
    "Context",
    "Orchestrator",
    "ProxyService",
    "RedisService",
    "Service",
    "ServiceConfig",
    "ServiceError",
    "ServiceStatus",
    "StopAllFailed",
    "SystemClock",
    "WorkerService",
]

"""Managed service adapters."""

from convoy.services.base import Service
from convoy.services.proxy import ProxyService
from convoy.services.redis import RedisService
from convoy.services.session import SessionService
from convoy.services.worker import WorkerService

__all__ = [
    "ProxyService",
    "RedisService",
    "Service",
    "SessionService",
    "WorkerService",
]

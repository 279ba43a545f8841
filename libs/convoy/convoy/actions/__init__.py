"""Actions module encapsulating business logic for CLI operations."""

from convoy.actions.service_actions import ServiceActions

__all__ = [
    "ServiceActions",
]

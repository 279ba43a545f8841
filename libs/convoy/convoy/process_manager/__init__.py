"""Process supervisor backends."""

from convoy.process_manager.base import Supervisor, run_command
from convoy.process_manager.docker import DockerSupervisor
from convoy.process_manager.screen import ScreenSupervisor
from convoy.process_manager.systemd import SystemdSupervisor

SUPERVISOR_KINDS = ("systemd", "screen", "docker")


def create_supervisor(kind: str, use_sudo: bool = True) -> Supervisor:
    """Build the supervisor backend registered under ``kind``.

    Raises:
        ValueError: If ``kind`` is not a known backend
    """
    if kind == "systemd":
        return SystemdSupervisor(use_sudo=use_sudo)
    if kind == "screen":
        return ScreenSupervisor()
    if kind == "docker":
        return DockerSupervisor(use_sudo=use_sudo)
    raise ValueError(f"Unknown supervisor kind: {kind!r} (expected one of {', '.join(SUPERVISOR_KINDS)})")


__all__ = [
    "SUPERVISOR_KINDS",
    "DockerSupervisor",
    "ScreenSupervisor",
    "Supervisor",
    "SystemdSupervisor",
    "create_supervisor",
    "run_command",
]

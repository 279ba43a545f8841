"""Docker-backed process supervisor."""

from pathlib import Path

from convoy.models.supervisor import SupervisorResult
from convoy.process_manager.base import run_command


class DockerSupervisor:
    """Manages pre-created containers by name through the docker CLI."""

    kind = "docker"

    def __init__(self, use_sudo: bool = False):
        self.use_sudo = use_sudo

    def launch(
        self,
        name: str,
        command: list[str] | None = None,
        cwd: Path | None = None,
        log_path: Path | None = None,
    ) -> SupervisorResult:
        """Start the existing container ``name``; its command is fixed at creation."""
        return self._docker("start", name)

    def terminate(self, name: str) -> SupervisorResult:
        return self._docker("stop", name)

    def enable(self, name: str) -> SupervisorResult:
        return self._docker("update", "--restart", "unless-stopped", name)

    def state(self, name: str) -> str:
        result = self._docker("inspect", "-f", "{{.State.Status}}", name)
        if not result.success:
            return "missing"
        return result.message or "unknown"

    def exists(self, name: str) -> bool:
        return self.state(name) == "running"

    def _docker(self, *args: str) -> SupervisorResult:
        cmd = ["docker", *args]
        if self.use_sudo:
            cmd.insert(0, "sudo")
        return run_command(*cmd)

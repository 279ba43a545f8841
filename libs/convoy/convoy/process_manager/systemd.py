"""systemd-backed process supervisor."""

from pathlib import Path

from convoy.models.supervisor import SupervisorResult
from convoy.process_manager.base import run_command


class SystemdSupervisor:
    """Manages services as systemd units through ``systemctl``.

    Mutating calls are prefixed with ``sudo`` unless disabled; queries run
    unprivileged.
    """

    kind = "systemd"

    def __init__(self, use_sudo: bool = True):
        self.use_sudo = use_sudo

    def launch(
        self,
        name: str,
        command: list[str] | None = None,
        cwd: Path | None = None,
        log_path: Path | None = None,
    ) -> SupervisorResult:
        """Start the unit. The command line comes from the unit file."""
        return self._systemctl("start", name, privileged=True)

    def terminate(self, name: str) -> SupervisorResult:
        return self._systemctl("stop", name, privileged=True)

    def enable(self, name: str) -> SupervisorResult:
        """Enable the unit at boot."""
        return self._systemctl("enable", name, privileged=True)

    def state(self, name: str) -> str:
        """Return the unit's active state (``active``, ``inactive``, ``failed``...).

        ``systemctl is-active`` exits non-zero for anything but ``active``
        while still printing the state, so stdout is read regardless.
        """
        result = self._systemctl("is-active", name)
        if result.exit_code == 127:
            return "unknown"
        return result.stdout.strip() or "unknown"

    def exists(self, name: str) -> bool:
        return self.state(name) == "active"

    def _systemctl(self, *args: str, privileged: bool = False) -> SupervisorResult:
        cmd = ["systemctl", *args]
        if privileged and self.use_sudo:
            cmd.insert(0, "sudo")
        return run_command(*cmd)

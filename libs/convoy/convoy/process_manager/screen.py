"""GNU screen-backed process supervisor."""

import shlex
from pathlib import Path

from convoy.models.supervisor import SupervisorResult
from convoy.process_manager.base import run_command


class ScreenSupervisor:
    """Runs processes inside detached, named ``screen`` sessions.

    The launched process lives outside the caller's process tree; its
    combined output is appended to a log file through ``tee``.
    """

    kind = "screen"

    def launch(
        self,
        name: str,
        command: list[str] | None = None,
        cwd: Path | None = None,
        log_path: Path | None = None,
    ) -> SupervisorResult:
        """Start ``command`` in a new detached session called ``name``.

        Args:
            name: Session name
            command: Program and arguments to run
            cwd: Working directory for the command
            log_path: File receiving the command's output

        Returns:
            SupervisorResult indicating success or failure
        """
        if not command:
            return SupervisorResult(
                success=False,
                message="No command given",
                exit_code=1,
            )

        return run_command("screen", "-dmS", name, "bash", "-c", self.build_shell_command(command, cwd, log_path))

    def terminate(self, name: str) -> SupervisorResult:
        return run_command("screen", "-S", name, "-X", "quit")

    def enable(self, name: str) -> SupervisorResult:
        return SupervisorResult(
            success=True,
            message="screen sessions are not restored at boot",
        )

    def state(self, name: str) -> str:
        return "active" if self.exists(name) else "inactive"

    def exists(self, name: str) -> bool:
        """Check whether a session with exactly this name is listed."""
        return name in self.list_sessions()

    def list_sessions(self) -> list[str]:
        """Return the names of all sessions reported by ``screen -list``.

        ``screen -list`` exits non-zero both when there are no sessions and,
        on some versions, when there are; only stdout is trusted.
        """
        result = run_command("screen", "-list")
        if result.exit_code == 127:
            return []

        sessions = []
        for line in result.stdout.splitlines():
            if not line[:1].isspace():
                continue
            fields = line.split()
            if not fields:
                continue
            pid, sep, session = fields[0].partition(".")
            if sep and pid.isdigit():
                sessions.append(session)
        return sessions

    @staticmethod
    def build_shell_command(
        command: list[str],
        cwd: Path | None = None,
        log_path: Path | None = None,
    ) -> str:
        shell = shlex.join(command)
        if cwd is not None:
            shell = f"cd {shlex.quote(str(cwd))} && {shell}"
        if log_path is not None:
            shell = f"{shell} 2>&1 | tee -a {shlex.quote(str(log_path))}"
        return shell

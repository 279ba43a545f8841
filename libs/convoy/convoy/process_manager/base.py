"""Process supervisor capability and the command runner shared by backends."""

import os
import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

from convoy.models.supervisor import SupervisorResult

DEFAULT_COMMAND_TIMEOUT = 30.0


@runtime_checkable
class Supervisor(Protocol):
    """Controls named long-running processes the caller does not own.

    Backends differ in how a name maps onto an OS object: a systemd unit,
    a detached terminal session, or a container.
    """

    kind: str

    def launch(
        self,
        name: str,
        command: list[str] | None = None,
        cwd: Path | None = None,
        log_path: Path | None = None,
    ) -> SupervisorResult:
        ...

    def terminate(self, name: str) -> SupervisorResult:
        ...

    def enable(self, name: str) -> SupervisorResult:
        ...

    def state(self, name: str) -> str:
        ...

    def exists(self, name: str) -> bool:
        ...


def run_command(
    *args: str,
    timeout: float = DEFAULT_COMMAND_TIMEOUT,
    env: dict[str, str] | None = None,
) -> SupervisorResult:
    """Run a command and capture its outcome.

    Args:
        *args: Program and arguments
        timeout: Seconds before the command is killed
        env: Extra environment variables, layered over the current environment

    Returns:
        SupervisorResult with command output
    """
    try:
        result = subprocess.run(
            list(args),
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
            env={**os.environ, **env} if env else None,
        )

        success = result.returncode == 0
        message = result.stdout if success else result.stderr or result.stdout

        return SupervisorResult(
            success=success,
            message=message.strip(),
            exit_code=result.returncode,
            stderr=result.stderr.strip(),
            stdout=result.stdout,
        )
    except FileNotFoundError:
        return SupervisorResult(
            success=False,
            message=f"{args[0]} command not found",
            exit_code=127,
        )
    except OSError as e:
        return SupervisorResult(
            success=False,
            message=f"{args[0]} could not be executed: {e.strerror or e}",
            exit_code=126,
            stderr=str(e),
        )
    except subprocess.SubprocessError as e:
        return SupervisorResult(
            success=False,
            message=f"Command failed: {e}",
            exit_code=1,
            stderr=str(e),
        )

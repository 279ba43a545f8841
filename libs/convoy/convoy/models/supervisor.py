from dataclasses import dataclass


@dataclass
class SupervisorResult:
    """Result from a process supervisor command.

    Attributes:
        success: Whether the operation succeeded
        message: Human-readable message about the result
        exit_code: Exit code from the underlying command
        stderr: Any error output
        stdout: Raw standard output, kept even when the command failed
    """

    success: bool
    message: str
    exit_code: int = 0
    stderr: str = ""
    stdout: str = ""

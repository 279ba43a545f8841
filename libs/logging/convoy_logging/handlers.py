"""Log handlers for Convoy."""

import logging
import logging.handlers
import sys
from pathlib import Path


def create_file_handler(
    log_file: Path,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    formatter: logging.Formatter | None = None
) -> logging.Handler:
    """Create a size-rotated handler for ``log_file``.

    The file is opened on the first emitted record, so a logger that never
    logs leaves no empty file behind.

    Args:
        log_file: Path to log file; parent directories are created
        max_bytes: Rotate once the file reaches this size
        backup_count: Rotated files kept as ``<name>.1`` .. ``<name>.N``
        formatter: Log formatter to use
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8',
        delay=True
    )

    if formatter:
        handler.setFormatter(formatter)

    return handler


def create_console_handler(
    formatter: logging.Formatter | None = None,
    stream=None
) -> logging.Handler:
    """Create a console handler writing to stderr by default."""
    handler = logging.StreamHandler(stream or sys.stderr)

    if formatter:
        handler.setFormatter(formatter)

    return handler


def create_syslog_handler(
    address: str | tuple = '/dev/log',
    facility: int = logging.handlers.SysLogHandler.LOG_DAEMON,
    formatter: logging.Formatter | None = None
) -> logging.Handler | None:
    """Create a syslog handler.

    Args:
        address: Syslog address (path or (host, port) tuple)
        facility: Syslog facility
        formatter: Log formatter to use

    Returns:
        Configured syslog handler or None if syslog not available
    """
    syslog_paths = ['/dev/log', '/var/run/syslog', ('localhost', 514)]

    if isinstance(address, str) and not Path(address).exists():
        for path in syslog_paths:
            if isinstance(path, tuple) or Path(path).exists():
                address = path
                break

    try:
        handler = logging.handlers.SysLogHandler(
            address=address,
            facility=facility
        )
    except OSError:
        return None

    if formatter:
        handler.setFormatter(formatter)

    return handler

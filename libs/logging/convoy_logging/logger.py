"""Convoy centralized logger."""

import logging
from pathlib import Path
from typing import Any

from convoy_logging.formatters import LogfmtFormatter
from convoy_logging.handlers import (
    create_console_handler,
    create_file_handler,
    create_syslog_handler,
)


class ConvoyLogger:
    """Centralized logger for Convoy components."""

    def __init__(
        self,
        name: str,
        log_dir: Path | None = None,
        level: str = "INFO",
        max_file_size: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        enable_syslog: bool = False,
        enable_console: bool = True
    ):
        """Initialize Convoy logger.

        Args:
            name: Logger name (will be prefixed with 'convoy.')
            log_dir: Directory for log files; no file handler when None
            level: Log level (DEBUG, INFO, WARNING, ERROR)
            max_file_size: Maximum log file size before rotation
            backup_count: Number of backup files to keep
            enable_syslog: Whether to enable syslog handler
            enable_console: Whether to enable console handler
        """
        self.name = f'convoy.{name}'
        self.logger = logging.getLogger(self.name)
        self.logger.propagate = False
        self.formatter = LogfmtFormatter()
        self.configure(
            log_dir=log_dir,
            level=level,
            max_file_size=max_file_size,
            backup_count=backup_count,
            enable_syslog=enable_syslog,
            enable_console=enable_console,
        )

    def configure(
        self,
        log_dir: Path | None = None,
        level: str = "INFO",
        max_file_size: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        enable_syslog: bool = False,
        enable_console: bool = True
    ):
        """(Re)build the handler set for this logger."""
        self.log_dir = log_dir
        self.logger.setLevel(getattr(logging, level.upper()))

        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        if log_dir is not None:
            self._setup_file_handler(max_file_size, backup_count)

        if enable_console:
            self._setup_console_handler()

        if enable_syslog:
            self._setup_syslog_handler()

    def _setup_file_handler(self, max_bytes: int, backup_count: int):
        """Setup rotating file handler."""
        log_file = self.log_dir / f'{self.name}.log'
        handler = create_file_handler(
            log_file,
            max_bytes=max_bytes,
            backup_count=backup_count,
            formatter=self.formatter
        )
        self.logger.addHandler(handler)

    def _setup_console_handler(self):
        """Setup console handler."""
        handler = create_console_handler(formatter=self.formatter)
        self.logger.addHandler(handler)

    def _setup_syslog_handler(self):
        """Setup syslog handler if available."""
        handler = create_syslog_handler(formatter=self.formatter)
        if handler:
            self.logger.addHandler(handler)

    def _log(self, level: int, msg: str, **kwargs):
        """Log a message with extra context.

        Args:
            level: Log level
            msg: Log message
            **kwargs: Extra context to include in log
        """
        self.logger.log(level, msg, extra=kwargs, stacklevel=3)

    def debug(self, msg: str, **kwargs):
        """Log debug message."""
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs):
        """Log info message."""
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        """Log warning message."""
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs):
        """Log error message."""
        self._log(logging.ERROR, msg, **kwargs)

    def critical(self, msg: str, **kwargs):
        """Log critical message."""
        self._log(logging.CRITICAL, msg, **kwargs)

    def exception(self, msg: str, **kwargs):
        """Log exception with traceback."""
        self.logger.exception(msg, extra=kwargs, stacklevel=2)


# Global logger cache
_loggers: dict[str, ConvoyLogger] = {}

# Defaults applied to loggers created without explicit settings. Library code
# gets console-only WARNING loggers until configure_from_config() runs.
_defaults: dict[str, Any] = {
    "log_dir": None,
    "level": "WARNING",
    "max_file_size": 10 * 1024 * 1024,
    "backup_count": 5,
    "enable_syslog": False,
    "enable_console": True,
}


def get_logger(
    name: str,
    log_dir: Path | None = None,
    level: str | None = None,
    **kwargs
) -> ConvoyLogger:
    """Get or create a Convoy logger.

    Args:
        name: Logger name
        log_dir: Log directory
        level: Log level
        **kwargs: Additional logger arguments

    Returns:
        Convoy logger instance
    """
    if name not in _loggers:
        settings = dict(_defaults)
        settings.update(kwargs)
        if log_dir is not None:
            settings["log_dir"] = log_dir
        if level is not None:
            settings["level"] = level
        _loggers[name] = ConvoyLogger(name, **settings)
    return _loggers[name]


def configure_from_config(config: Any):
    """Configure logging from a Convoy config object.

    Accepts either an object with a ``logging`` attribute or the logging
    section itself. Existing loggers are rebuilt with the new settings.

    Args:
        config: Config object with logging settings
    """
    log_config = getattr(config, 'logging', config)

    if getattr(log_config, 'log_dir', None):
        _defaults["log_dir"] = Path(log_config.log_dir).expanduser()
    for key in ("level", "max_file_size", "backup_count", "enable_syslog", "enable_console"):
        if hasattr(log_config, key):
            _defaults[key] = getattr(log_config, key)

    for logger in _loggers.values():
        logger.configure(**_defaults)

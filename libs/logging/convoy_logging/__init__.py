"""Convoy centralized logging with logfmt format."""

from convoy_logging.logger import ConvoyLogger, get_logger, configure_from_config
from convoy_logging.formatters import LogfmtFormatter
from convoy_logging.handlers import (
    create_file_handler,
    create_console_handler,
    create_syslog_handler
)

__all__ = [
    "ConvoyLogger",
    "get_logger",
    "configure_from_config",
    "LogfmtFormatter",
    "create_file_handler",
    "create_console_handler",
    "create_syslog_handler",
]

"""
Logging module for the catalog sync pipeline
"""

from .logger import get_logger, setup_logging, StructuredLogger
from .formatters import StructuredFormatter, JSONFormatter, ConsoleFormatter
from .handlers import FileHandler, ConsoleHandler
from .config import LoggingConfig

__all__ = [
    "get_logger",
    "setup_logging",
    "StructuredLogger",
    "StructuredFormatter",
    "JSONFormatter",
    "ConsoleFormatter",
    "FileHandler",
    "ConsoleHandler",
    "LoggingConfig",
]

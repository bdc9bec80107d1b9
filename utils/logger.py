# utils/logger.py
# This file is part of Formula Converter - Formula 1.0 to 2.0 rewriting
#
# Logging utility for formula conversion with configurable levels

import logging
import sys
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    """Log levels for formula conversion."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class FormulaLogger:
    """Centralized logger for formula conversion with structured output."""

    def __init__(self, name: str = "formula_converter", level: LogLevel = LogLevel.INFO):
        """Initialize the converter logger.

        Args:
            name: Logger name (typically module name)
            level: Default logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.value)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        # Diagnostics go to stderr so converted formulas on stdout stay clean
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level.value)
        console_handler.setFormatter(FormulaFormatter())

        self.logger.addHandler(console_handler)
        self.logger.propagate = False

    def set_level(self, level: LogLevel):
        """Change the logging level."""
        self.logger.setLevel(level.value)
        for handler in self.logger.handlers:
            handler.setLevel(level.value)

    @property
    def level(self) -> int:
        return self.logger.level

    # Core logging methods
    def debug(self, message: str, **kwargs):
        """Log debug message (detailed internal state)."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message (general progress)."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message (unexpected but recoverable)."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message (serious problems)."""
        self.logger.error(message, **kwargs)

    # Specialized methods for conversion events
    def conversion_start(self, formula: str, mapped_props: int = 0):
        """Log the start of a top-level conversion."""
        self.debug(f"=== Converting formula ({mapped_props} mapped properties) ===")
        self.debug(f"Input: {formula}")

    def change_recorded(self, identifier: str, context: Optional[str] = None):
        """Log a change appended to the change log."""
        context_str = f" ({context})" if context else ""
        self.debug(f"    ✏️  change '{identifier}'{context_str}")

    def error_recorded(self, identifier: str, context: Optional[str] = None):
        """Log an error appended to the error log."""
        context_str = f": {context}" if context else ""
        self.debug(f"    ⚠️  error '{identifier}'{context_str}")

    def conversion_summary(self, formula: str, changes: int, errors: int, props: int):
        """Log the outcome of a conversion."""
        self.debug(
            f"Output: {formula} (changes={changes}, errors={errors}, props={props})"
        )

    def validation_result(self, success: bool, message: str = ""):
        """Log validation results."""
        if success:
            self.debug(f"✅ {message}" if message else "✅ Validation successful")
        else:
            self.error(f"❌ {message}" if message else "❌ Validation failed")


class FormulaFormatter(logging.Formatter):
    """Custom formatter for converter logging with clean output."""

    def format(self, record):
        # For INFO level, show message only (clean output)
        if record.levelno == logging.INFO:
            return record.getMessage()

        # For DEBUG level, show with level indicator
        if record.levelno == logging.DEBUG:
            return f"[DEBUG] {record.getMessage()}"

        return f"[{record.levelname}] {record.getMessage()}"


# Global logger instance
_global_logger: Optional[FormulaLogger] = None


def get_logger(name: str = "formula_converter") -> FormulaLogger:
    """Get or create the global converter logger instance.

    Args:
        name: Logger name (default: "formula_converter")

    Returns:
        FormulaLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = FormulaLogger(name)
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global log level.

    Args:
        level: New log level
    """
    logger = get_logger()
    logger.set_level(level)


def configure_logging(verbose: bool = False, debug: bool = False):
    """Configure logging based on command line flags.

    Args:
        verbose: Enable verbose (INFO) output
        debug: Enable debug output (overrides verbose)
    """
    if debug:
        set_log_level(LogLevel.DEBUG)
    elif verbose:
        set_log_level(LogLevel.INFO)
    else:
        set_log_level(LogLevel.WARNING)

"""
Structured logging system for stockmatch.

Provides centralized logging with console and file outputs, context
fields, and counters for the duplicate-check and intake workflow.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks intake metrics (checks, duplicates, merges, creates).
    """

    def __init__(
        self,
        name: str = "stockmatch",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()

        self.metrics = {
            "checks_run": 0,
            "duplicates_found": 0,
            "materials_created": 0,
            "materials_merged": 0,
            "validation_errors": 0,
            "duplicates_by_category": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"stockmatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_check(self, category: Any, duplicates: int):
        """Record one duplicate check and how many matches it produced."""
        self.metrics["checks_run"] += 1
        if duplicates:
            self.metrics["duplicates_found"] += duplicates
            key = category if isinstance(category, str) and category else "unknown"
            by_category = self.metrics["duplicates_by_category"]
            by_category[key] = by_category.get(key, 0) + duplicates

    def record_created(self):
        self.metrics["materials_created"] += 1

    def record_merged(self):
        self.metrics["materials_merged"] += 1

    def record_validation_error(self):
        self.metrics["validation_errors"] += 1

    def get_metrics(self) -> dict:
        """Return current metrics, with the duplicate rate filled in."""
        metrics_copy = dict(self.metrics)
        metrics_copy["duplicates_by_category"] = dict(self.metrics["duplicates_by_category"])
        checks = metrics_copy["checks_run"]
        metrics_copy["merge_rate"] = 0.0
        resolved = metrics_copy["materials_created"] + metrics_copy["materials_merged"]
        if resolved > 0:
            metrics_copy["merge_rate"] = round(metrics_copy["materials_merged"] / resolved, 3)
        metrics_copy["duplicates_per_check"] = 0.0
        if checks > 0:
            metrics_copy["duplicates_per_check"] = round(metrics_copy["duplicates_found"] / checks, 3)
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Intake Session Metrics ===")
        self.info(f"Duplicate checks: {metrics['checks_run']}")
        self.info(f"Duplicates found: {metrics['duplicates_found']}")
        self.info(
            f"Created: {metrics['materials_created']} | Merged: {metrics['materials_merged']} "
            f"({metrics['merge_rate'] * 100:.1f}% merged)"
        )
        if metrics["validation_errors"]:
            self.info(f"Validation errors: {metrics['validation_errors']}")

        if metrics["duplicates_by_category"]:
            self.info("Duplicates by category:")
            for category, count in metrics["duplicates_by_category"].items():
                self.info(f"  {category}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "stockmatch",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None

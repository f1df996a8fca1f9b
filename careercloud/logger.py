"""
Structured logging for CareerCloud.

Provides centralized logging with console and file outputs, keyword
context on every call, and counters for monitoring data-access health.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks repository operations, rejected batches and store errors.
    """

    def __init__(
        self,
        name: str = "careercloud",
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
            "operations": 0,
            "operations_by_entity": {},
            "validation_failures": 0,
            "violations_by_code": {},
            "store_errors": 0,
            "errors_by_type": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
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

            log_file = log_dir / f"careercloud_{datetime.now().strftime('%Y%m%d')}.log"
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

    def record_operation(self, entity: str, operation: str):
        """Count one repository call, e.g. ("ApplicantSkill", "add")."""
        self.metrics["operations"] += 1
        per_entity = self.metrics["operations_by_entity"].setdefault(entity, {})
        per_entity[operation] = per_entity.get(operation, 0) + 1

    def record_validation_failure(self, entity: str, codes: list):
        """Record a rejected batch and the rule codes it violated."""
        self.metrics["validation_failures"] += 1
        for code in codes:
            key = str(code)
            self.metrics["violations_by_code"][key] = self.metrics["violations_by_code"].get(key, 0) + 1

    def record_store_error(self, entity: str, error_type: str):
        """Record a store failure propagated from a repository."""
        self.metrics["store_errors"] += 1
        if error_type not in self.metrics["errors_by_type"]:
            self.metrics["errors_by_type"][error_type] = 0
        self.metrics["errors_by_type"][error_type] += 1

    def get_metrics(self) -> dict:
        """Return a copy of current metrics."""
        return json.loads(json.dumps(self.metrics))

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Data Access Metrics ===")
        self.info(f"Operations: {metrics['operations']}")
        for entity, ops in sorted(metrics["operations_by_entity"].items()):
            counts = ", ".join(f"{op}={n}" for op, n in sorted(ops.items()))
            self.info(f"  {entity}: {counts}")

        self.info(f"Rejected batches: {metrics['validation_failures']}")
        if metrics["violations_by_code"]:
            self.info("Violations by code:")
            for code, count in sorted(metrics["violations_by_code"].items(), key=lambda kv: int(kv[0])):
                self.info(f"  {code}: {count}")

        if metrics["errors_by_type"]:
            self.info("Store errors:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "careercloud",
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

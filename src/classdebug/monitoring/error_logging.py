# src/classdebug/monitoring/error_logging.py
"""
Error Logging Framework for classdebug.

Reports fatal and per-member failures as single severe log records tagged
with the component that raised them, and keeps an in-memory history so a
run can be summarised (and asserted on in tests).
"""

import logging
import traceback
from typing import Dict, Any, Optional
from datetime import datetime, timezone
from enum import Enum


class ErrorComponent(Enum):
    """Component identifiers for error tracking."""
    RESOLVER = "resolver"
    ENUMERATOR = "enumerator"


class ErrorLogger:
    """
    Structured error logging with component tagging.

    Usage:
        errors = ErrorLogger(component=ErrorComponent.RESOLVER)
        try:
            cls = resolver.resolve(class_name)
        except ClassNotFoundError as exc:
            errors.log_error(str(exc), exception=exc, severity="error")
            return None
    """

    def __init__(self, component: ErrorComponent, base_logger: Optional[logging.Logger] = None):
        """
        Initialize error logger for a specific component.

        Args:
            component: ErrorComponent enum identifying the component
            base_logger: Optional logging.Logger to use (creates default if None)
        """
        self.component = component
        if base_logger is None:
            base_logger = logging.getLogger(f"classdebug.error.{component.value}")
            base_logger.setLevel(logging.INFO)
        self.logger = base_logger

        self.error_count = 0
        self.error_history: list[Dict[str, Any]] = []

    def log_error(
        self,
        error_msg: str,
        exception: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
        severity: str = "warning",
    ) -> None:
        """
        Log an error as one record, with the exception detail attached.

        Args:
            error_msg: Description of the error
            exception: Optional exception object
            context: Optional context dict
            severity: 'debug', 'info', 'warning', 'error', 'critical'
        """
        self.error_count += 1

        error_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "component": self.component.value,
            "message": error_msg,
            "exception_type": type(exception).__name__ if exception else None,
            "exception_message": str(exception) if exception else None,
            "traceback": "".join(traceback.format_exception(exception)) if exception else None,
            "context": context or {},
            "severity": severity,
        }

        self.error_history.append(error_record)

        log_func = getattr(self.logger, severity, self.logger.warning)
        log_msg = f"[{self.component.value.upper()}] {error_msg}"
        if context:
            context_str = ", ".join(f"{k}={v}" for k, v in context.items())
            log_msg += f" | Context: {context_str}"
        log_func(log_msg, exc_info=exception)

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary statistics of errors logged by this component."""
        return {
            "component": self.component.value,
            "total_errors": self.error_count,
            "recent_errors": self.error_history[-10:] if self.error_history else [],
        }


def create_component_logger(
    component: ErrorComponent, base_logger: Optional[logging.Logger] = None
) -> ErrorLogger:
    """Create a component-specific error logger."""
    return ErrorLogger(component=component, base_logger=base_logger)

"""
Standardized error handling utilities for the response visualizer.
Provides consistent "degrade, never fail" patterns and logging across all modules.
"""

import logging
from typing import Optional, Callable, Any
from functools import wraps

logger = logging.getLogger('response_visualizer.error_handler')


class ErrorSeverity:
    """Error severity levels for consistent logging and handling."""
    CRITICAL = "critical"  # Nothing usable could be produced
    HIGH = "error"        # A whole step was skipped
    MEDIUM = "warning"    # One candidate block was skipped
    LOW = "info"          # Expected, e.g. a code block that is not JSON
    DEBUG = "debug"


class VisualizationError(Exception):
    """Base exception for visualization pipeline errors."""
    pass


class ChartNormalizationError(VisualizationError):
    """Raised when chart data cannot be turned into a plotting configuration."""
    pass


class ConfigurationError(VisualizationError):
    """Custom exception for configuration-related errors."""
    pass


def log_error_with_context(
    error: Exception,
    context: str,
    severity: str = ErrorSeverity.MEDIUM,
    additional_info: Optional[dict] = None
) -> None:
    """
    Log an error with consistent formatting and context information.

    Args:
        error: The exception that occurred
        context: Description of where/when the error occurred
        severity: Error severity level
        additional_info: Additional context information to log
    """
    error_msg = f"{context}: {str(error)}"

    if additional_info:
        error_msg += f" | Context: {additional_info}"

    log_func = getattr(logger, severity, logger.error)

    if severity in (ErrorSeverity.CRITICAL, ErrorSeverity.HIGH):
        log_func(error_msg, exc_info=True)
    else:
        log_func(error_msg)


def fail_safe(fallback: Callable[..., Any], severity: str = ErrorSeverity.HIGH) -> Callable:
    """
    Decorator that converts any exception into a fallback result.

    The fallback is called with the same arguments as the wrapped function,
    so it can rebuild an "unchanged" result from the inputs.

    Usage: @fail_safe(lambda source, clean_text: (clean_text, []))
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                log_error_with_context(e, f"Unexpected error in {func.__name__}", severity)
                return fallback(*args, **kwargs)
        return wrapper
    return decorator


def safe_execute(
    func: Callable,
    *args,
    context: str = "Operation",
    default_return: Any = None,
    severity: str = ErrorSeverity.MEDIUM,
    **kwargs
) -> Any:
    """
    Safely execute a function with standardized error handling.

    Args:
        func: Function to execute
        *args: Positional arguments for the function
        context: Description of the operation for logging
        default_return: Value to return if an error occurs
        severity: Error severity level
        **kwargs: Keyword arguments for the function

    Returns:
        Function result or default_return if an error occurs
    """
    try:
        return func(*args, **kwargs)
    except Exception as e:
        log_error_with_context(e, context, severity)
        return default_return


class ErrorContext:
    """Context manager for error handling with automatic logging."""

    def __init__(self, context: str, severity: str = ErrorSeverity.MEDIUM,
                 reraise: bool = True):
        self.context = context
        self.severity = severity
        self.reraise = reraise
        self.error = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_val:
            self.error = exc_val
            log_error_with_context(exc_val, self.context, self.severity)
            if not self.reraise:
                return True  # Suppress the exception
        return False

    @property
    def failed(self) -> bool:
        return self.error is not None

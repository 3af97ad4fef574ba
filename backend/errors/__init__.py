"""
timeoutbench Error Handling Module

Provides standardized error codes, exceptions, and failure normalization
for consistent error handling across the harness.

Usage:
    from errors import (
        # Error codes
        ErrorCode,

        # Exceptions
        TimeoutBenchError,
        TimeoutFailure,
        TransportFailure,
        ConfigError,

        # Normalization
        describe_exception,
        exception_message,
        log_error,
    )

Example:
    from errors import TimeoutFailure, describe_exception

    try:
        await request
    except asyncio.CancelledError as exc:
        raise TimeoutFailure(url, timeout_ms, reason=str(exc)) from exc

    code, message = describe_exception(err)
"""

from .codes import ErrorCode
from .exceptions import (
    TimeoutBenchError,
    TimeoutFailure,
    TransportFailure,
    ConfigError,
)
from .normalize import (
    describe_exception,
    exception_message,
    log_error,
)

__all__ = [
    # Error codes
    "ErrorCode",
    # Exceptions
    "TimeoutBenchError",
    "TimeoutFailure",
    "TransportFailure",
    "ConfigError",
    # Normalization
    "describe_exception",
    "exception_message",
    "log_error",
]

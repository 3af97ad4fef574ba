"""
Failure normalization for timeoutbench.

Turns whatever an invocation raised into an (ErrorCode, message) pair so
callers never have to care which failure convention the request used.
"""

import logging
from typing import Optional, Tuple

from .codes import ErrorCode
from .exceptions import TimeoutBenchError


def exception_message(error: BaseException) -> str:
    """Best-effort message for an exception, empty string if none.

    Example:
        >>> exception_message(ValueError("bad"))
        'bad'
        >>> exception_message(RuntimeError())
        ''
    """
    try:
        return str(error)
    except Exception:
        # __str__ itself blew up, nothing usable to report
        return ""


def describe_exception(error: BaseException) -> Tuple[ErrorCode, str]:
    """Classify an exception and extract its message.

    Returns:
        (code, message) where code is the exception's own code for
        timeoutbench errors, TRANSPORT_FAILED for any other failure that
        carries a message, and UNKNOWN_FAILURE (with an empty message)
        otherwise.
    """
    message = exception_message(error)
    if isinstance(error, TimeoutBenchError):
        return error.code, message
    if message:
        return ErrorCode.TRANSPORT_FAILED, message
    return ErrorCode.UNKNOWN_FAILURE, ""


def log_error(
    logger: logging.Logger, error: BaseException, context: Optional[str] = None, include_traceback: bool = False
) -> None:
    """Log an error with consistent formatting.

    Example:
        >>> log_error(logger, err, context="race")
        # Logs: "[race] TIMEOUT_ABORTED: Fetch(...) timed out in 500ms: ..."
    """
    code, message = describe_exception(error)
    message = f"{code.value}: {message or type(error).__name__}"

    if context:
        message = f"[{context}] {message}"

    logger.error(message, exc_info=error if include_traceback else None)

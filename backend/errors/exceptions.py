"""
Custom exception hierarchy for timeoutbench.

All exceptions inherit from TimeoutBenchError and include:
- code: ErrorCode for categorization
- message: Human-readable error message
- details: Optional additional context
- context: Additional key-value pairs for debugging
"""

from typing import Any, Optional
from .codes import ErrorCode


class TimeoutBenchError(Exception):
    """Base exception for all timeoutbench errors.

    Attributes:
        code: The ErrorCode categorizing this error
        message: Human-readable error message
        details: Optional additional context for the user
        context: Additional debugging information
    """

    code: ErrorCode = ErrorCode.UNKNOWN_FAILURE

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        code: Optional[ErrorCode] = None,
        **context: Any,
    ):
        self.message = message
        self.details = details
        self.context = context if context else None

        if code is not None:
            self.code = code

        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message

    def to_dict(self) -> dict:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
            "context": self.context,
        }


class TimeoutFailure(TimeoutBenchError):
    """A request deliberately given up on because its timeout elapsed.

    Only the cooperative-cancel and race timeout paths raise this. The
    message always names the url and the timeout so it can be told apart
    from an organic transport failure.
    """

    code = ErrorCode.TIMEOUT_ABORTED

    def __init__(
        self,
        url: str,
        timeout_ms: int,
        reason: str = "",
        strategy: Optional[str] = None,
        **context: Any,
    ):
        self.url = url
        self.timeout_ms = timeout_ms
        self.reason = reason

        ctx = {**context, "url": url, "timeout_ms": timeout_ms}
        if strategy:
            ctx["strategy"] = strategy
        super().__init__(f"Fetch({url}) timed out in {timeout_ms}ms: {reason}", **ctx)


class TransportFailure(TimeoutBenchError):
    """Network or connection failure unrelated to the timeout mechanism."""

    code = ErrorCode.TRANSPORT_FAILED

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        **context: Any,
    ):
        ctx = {**context}
        if url:
            ctx["url"] = url
        if status_code:
            ctx["status_code"] = status_code
        super().__init__(message, details, **ctx)


class ConfigError(TimeoutBenchError):
    """Invalid run configuration."""

    code = ErrorCode.CONFIG_INVALID

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        parameter: Optional[str] = None,
        received: Optional[Any] = None,
        **context: Any,
    ):
        ctx = {**context}
        if parameter:
            ctx["parameter"] = parameter
        if received is not None:
            ctx["received"] = received
        super().__init__(message, details, **ctx)

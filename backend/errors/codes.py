"""
Error codes for timeoutbench.

Provides a small taxonomy of failure codes organized by category.
Use these codes consistently wherever a failure is described.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for timeoutbench.

    Categories:
    - TIMEOUT_*: Failures produced deliberately by a timeout path
    - TRANSPORT_*: Network/connection failures unrelated to the timeout
    - UNKNOWN_*: Failures carrying no usable message
    - CONFIG_*: Invalid run configuration
    """

    # Timeout errors (our own deadline fired)
    TIMEOUT_ABORTED = "TIMEOUT_ABORTED"

    # Transport errors (organic request failures)
    TRANSPORT_FAILED = "TRANSPORT_FAILED"

    # Unknown errors (no extractable message)
    UNKNOWN_FAILURE = "UNKNOWN_FAILURE"

    # Configuration errors
    CONFIG_INVALID = "CONFIG_INVALID"

"""
Timeout Harness Configuration
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from errors import ConfigError

DEFAULT_DELAY_S = 1.0
DEFAULT_TIMEOUT_MS = 500
DEFAULT_GRACE_MS = 200
DEFAULT_ITERATIONS = 10
MAX_VERBOSITY = 3

# Endpoint that answers a GET only after the given number of seconds
DELAY_URL_TEMPLATE = "https://httpbin.org/delay/{seconds}"


def delay_url(seconds: float) -> str:
    """URL of an endpoint that takes at least ``seconds`` to respond."""
    return DELAY_URL_TEMPLATE.format(seconds=seconds)


@dataclass(frozen=True)
class RunConfig:
    """Settings for one harness run. Built once, never mutated."""

    target_url: str = field(default_factory=lambda: delay_url(DEFAULT_DELAY_S))
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    grace_ms: int = DEFAULT_GRACE_MS
    iterations: int = DEFAULT_ITERATIONS
    verbosity: int = 0

    # Minimum server-side delay, only used to describe expectations.
    # None when the endpoint's delay is unknown (custom URL).
    server_delay_s: Optional[float] = DEFAULT_DELAY_S

    # Extra keyword arguments for the GET (headers, params, ...)
    request_options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.timeout_ms <= 0:
            raise ConfigError(
                "Timeout must be positive", parameter="timeout_ms", received=self.timeout_ms
            )
        if self.grace_ms < 0:
            raise ConfigError(
                "Grace period must not be negative", parameter="grace_ms", received=self.grace_ms
            )
        if self.server_delay_s is not None and self.server_delay_s < 0:
            raise ConfigError(
                "Server delay must not be negative", parameter="server_delay_s", received=self.server_delay_s
            )
        if not self.target_url:
            raise ConfigError("Target URL is required", parameter="target_url")
        # A negative count runs nothing; anything past -vvv behaves like -vvv
        object.__setattr__(self, "iterations", max(0, self.iterations))
        object.__setattr__(self, "verbosity", max(0, min(self.verbosity, MAX_VERBOSITY)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target_url": self.target_url,
            "timeout_ms": self.timeout_ms,
            "grace_ms": self.grace_ms,
            "iterations": self.iterations,
            "verbosity": self.verbosity,
            "server_delay_s": self.server_delay_s,
            "request_options": dict(self.request_options),
        }

"""
Outcome types — the normalized result of one timed invocation.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union

from errors import ErrorCode, describe_exception


class FailureKind(str, Enum):
    """How an invocation failed."""

    TIMEOUT = "timeout"  # our own deadline fired
    TRANSPORT = "transport"  # organic request failure
    UNKNOWN = "unknown"  # nothing usable to report


_KIND_BY_CODE = {
    ErrorCode.TIMEOUT_ABORTED: FailureKind.TIMEOUT,
    ErrorCode.TRANSPORT_FAILED: FailureKind.TRANSPORT,
    ErrorCode.UNKNOWN_FAILURE: FailureKind.UNKNOWN,
}


@dataclass(frozen=True)
class Success:
    """The invocation completed."""

    succeeded = True


@dataclass(frozen=True)
class Failure:
    """The invocation raised; message is empty when nothing could be extracted."""

    message: str = ""
    kind: FailureKind = FailureKind.UNKNOWN

    succeeded = False

    @classmethod
    def from_exception(cls, error: BaseException) -> "Failure":
        code, message = describe_exception(error)
        return cls(message=message, kind=_KIND_BY_CODE.get(code, FailureKind.TRANSPORT))


Outcome = Union[Success, Failure]


@dataclass(frozen=True)
class TimedResult:
    """Wall-clock duration of one invocation and how it settled."""

    elapsed_ms: int
    outcome: Outcome

    @property
    def succeeded(self) -> bool:
        return self.outcome.succeeded

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "elapsed_ms": self.elapsed_ms,
            "succeeded": self.succeeded,
        }
        if isinstance(self.outcome, Failure):
            data["kind"] = self.outcome.kind.value
            data["message"] = self.outcome.message
        return data

"""
Classifier — decides whether an elapsed time means a timeout guarantee broke.

The threshold comparison is always computed. Whether it is reported depends
on the strategy: a bounded strategy running past timeout + grace is always
reported, while the unbounded baseline is expected to run long and is only
shown at elevated verbosity with a note saying so.
"""
from dataclasses import dataclass
from typing import List, Union

from timeoutbench.strategies import Strategy, StrategyKind, is_bounded

# Verbosity at which anomalies get explanations and the baseline is shown
EXPLAIN_VERBOSITY = 1


@dataclass(frozen=True)
class Verdict:
    """Classification of one elapsed time against timeout + grace."""

    strategy: str
    bounded: bool
    elapsed_ms: int
    timeout_ms: int
    grace_ms: int
    too_slow: bool

    @property
    def threshold_ms(self) -> int:
        return self.timeout_ms + self.grace_ms

    def should_report(self, verbosity: int) -> bool:
        if not self.too_slow:
            return False
        return self.bounded or verbosity >= EXPLAIN_VERBOSITY

    def lines(self, verbosity: int) -> List[str]:
        """Diagnostic lines for this verdict at the given verbosity."""
        if not self.should_report(verbosity):
            return []

        out = [
            f"    Took too long: {self.elapsed_ms}ms > "
            f"timeout:{self.timeout_ms}ms + gracePeriod:{self.grace_ms}ms"
        ]
        if verbosity >= EXPLAIN_VERBOSITY:
            if self.bounded:
                out.append(
                    f"    The fetch should have thrown the exception in about "
                    f"timeout:{self.timeout_ms}ms (plus gracePeriod:{self.grace_ms}ms)"
                )
            else:
                out.append(f"    This was expected because {self.strategy} does not enforce a timeout")
        return out


def _strategy_name(strategy: Union[str, StrategyKind, Strategy]) -> str:
    if isinstance(strategy, Strategy):
        return strategy.name
    if isinstance(strategy, StrategyKind):
        return strategy.value
    return strategy


def classify(
    elapsed_ms: int, timeout_ms: int, grace_ms: int, strategy: Union[str, StrategyKind, Strategy]
) -> Verdict:
    """Compare an elapsed time against timeout + grace.

    Args:
        elapsed_ms: Measured duration.
        timeout_ms: Nominal timeout.
        grace_ms: Allowance for scheduling jitter.
        strategy: Strategy instance or name. Decides the reporting policy
            and names the strategy in explanations.
    """
    return Verdict(
        strategy=_strategy_name(strategy),
        bounded=is_bounded(strategy),
        elapsed_ms=elapsed_ms,
        timeout_ms=timeout_ms,
        grace_ms=grace_ms,
        too_slow=elapsed_ms > timeout_ms + grace_ms,
    )

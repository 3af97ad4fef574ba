"""Timeout strategies — the closed set, in run order."""
from enum import Enum
from typing import Dict, Optional, Tuple, Type, Union

from timeoutbench.strategies.base import ABORT_REASON, Strategy
from timeoutbench.strategies.cooperative import AbortToken, CooperativeCancelStrategy
from timeoutbench.strategies.race import RaceStrategy, abandoned_requests
from timeoutbench.strategies.unbounded import UnboundedStrategy
from timeoutbench.transport import Fetch


class StrategyKind(str, Enum):
    """Every strategy, in the order the harness runs them."""

    UNBOUNDED = "unbounded"
    COOPERATIVE_CANCEL = "cooperative_cancel"
    RACE = "race"


_STRATEGY_CLASSES: Dict[StrategyKind, Type[Strategy]] = {
    StrategyKind.UNBOUNDED: UnboundedStrategy,
    StrategyKind.COOPERATIVE_CANCEL: CooperativeCancelStrategy,
    StrategyKind.RACE: RaceStrategy,
}


def get_strategy(kind: StrategyKind, fetch: Optional[Fetch] = None) -> Strategy:
    """Create one strategy instance.

    Args:
        kind: Which strategy.
        fetch: Request function; defaults to a real HttpFetcher.
    """
    return _STRATEGY_CLASSES[StrategyKind(kind)](fetch)


def is_bounded(strategy: Union[str, StrategyKind, Strategy]) -> bool:
    """Whether a strategy promises to respect its timeout.

    Accepts a strategy instance or a strategy name. Names outside the
    registry are treated as bounded.
    """
    if isinstance(strategy, Strategy):
        return strategy.bounded
    try:
        kind = StrategyKind(strategy)
    except ValueError:
        return True
    return _STRATEGY_CLASSES[kind].bounded


def build_strategies(fetch: Optional[Fetch] = None) -> Tuple[Strategy, ...]:
    """All strategies in declaration order, sharing one request function."""
    return tuple(get_strategy(kind, fetch) for kind in StrategyKind)


__all__ = [
    "ABORT_REASON",
    "AbortToken",
    "CooperativeCancelStrategy",
    "RaceStrategy",
    "Strategy",
    "StrategyKind",
    "UnboundedStrategy",
    "abandoned_requests",
    "build_strategies",
    "get_strategy",
    "is_bounded",
]

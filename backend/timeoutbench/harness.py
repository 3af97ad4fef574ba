"""
Harness — runs every strategy N times and streams diagnostics.

Verbosity tiers:
  0: section headers only ("- <strategy> x N times"), plus anomalies
     from bounded strategies
  1: run header and anomaly explanations (baseline anomalies included)
  2: upfront description of every strategy and the expected timings
  3: one line per invocation with its outcome and elapsed time
"""
import logging
import sys
from typing import Optional, Sequence, TextIO

from logging_config import log_invocation
from timeoutbench.classifier import classify
from timeoutbench.config import RunConfig
from timeoutbench.outcome import FailureKind, TimedResult
from timeoutbench.strategies import Strategy, build_strategies

logger = logging.getLogger(__name__)


class Harness:
    """Sequential driver over a fixed, ordered set of strategies."""

    def __init__(
        self,
        config: RunConfig,
        strategies: Optional[Sequence[Strategy]] = None,
        out: Optional[TextIO] = None,
    ):
        self.config = config
        self.strategies = tuple(strategies) if strategies is not None else build_strategies()
        self.out = out or sys.stdout

    def _print(self, line: str = "") -> None:
        print(line, file=self.out)

    def print_preamble(self) -> None:
        cfg = self.config
        if cfg.verbosity < 1:
            return

        self._print(f"Running fetch with {cfg.iterations} iterations")
        if cfg.verbosity > 1:
            self._print(" for each of the following methods:")
            for strategy in self.strategies:
                self._print(f"  - {strategy.name}: {strategy.description}")
            if cfg.server_delay_s is not None:
                self._print(
                    f"  The requests we are making are known to take at least {cfg.server_delay_s}s to complete"
                )
            self._print(
                f"  We expect the fetch to throw an exception if it takes longer than {cfg.timeout_ms}ms"
            )
        self._print()

    def report_iteration(self, strategy: Strategy, result: TimedResult) -> None:
        cfg = self.config
        if cfg.verbosity > 2:
            if result.succeeded:
                self._print(f"    fetch completed successfully in {result.elapsed_ms}ms")
            else:
                outcome = result.outcome
                self._print(f"    fetch threw an exception after {result.elapsed_ms}ms")
                self._print(f"      message: {outcome.message}")
                if outcome.kind is FailureKind.TIMEOUT:
                    took = "" if cfg.server_delay_s is None else f"(>{cfg.server_delay_s})s which is "
                    self._print(
                        f"    This was expected because the request took {took}"
                        f"longer than our specified fetch timeout ({cfg.timeout_ms}ms)"
                    )

        verdict = classify(result.elapsed_ms, cfg.timeout_ms, cfg.grace_ms, strategy)
        for line in verdict.lines(cfg.verbosity):
            self._print(line)

    async def run_strategy(self, strategy: Strategy) -> None:
        cfg = self.config
        self._print(f"- {strategy.name} x {cfg.iterations} times")
        for i in range(cfg.iterations):
            if cfg.verbosity > 2:
                self._print(f"  - {strategy.name} iteration {i + 1}")
            result = await strategy.measure(cfg.target_url, dict(cfg.request_options), cfg.timeout_ms)
            log_invocation(logger, strategy.name, result)
            self.report_iteration(strategy, result)

    async def run(self) -> None:
        """Run every strategy in order. Never stops on a failed invocation."""
        logger.debug("Starting run: %s", self.config.to_dict())
        self.print_preamble()
        for strategy in self.strategies:
            await self.run_strategy(strategy)

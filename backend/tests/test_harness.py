"""
Tests for the Harness: ordering, verbosity tiers, and failure handling.
"""

import asyncio
import io

import httpx

from timeoutbench.config import RunConfig
from timeoutbench.harness import Harness
from timeoutbench.strategies import Strategy, build_strategies

URL = "https://delay.test/delay/0.2"


def _run(config, strategies):
    out = io.StringIO()
    asyncio.run(Harness(config, strategies, out=out).run())
    return out.getvalue().splitlines()


def _config(verbosity=0, iterations=1, **kwargs):
    # Server (0.2s) is slower than the timeout but within a wide grace for
    # the bounded strategies; only the unbounded baseline runs long.
    params = dict(
        target_url=URL,
        timeout_ms=50,
        grace_ms=100,
        iterations=iterations,
        verbosity=verbosity,
        server_delay_s=0.2,
    )
    params.update(kwargs)
    return RunConfig(**params)


class StubbornStrategy(Strategy):
    """Claims to be bounded but ignores the timeout."""

    name = "stubborn"
    description = "ignores its timeout"

    async def invoke(self, url, options, timeout_ms):
        await asyncio.sleep(0.2)


class TestOrdering:
    """Strategies run in declaration order, iterations sequentially."""

    def test_section_headers_in_order(self, fake_fetch):
        lines = _run(_config(iterations=2), build_strategies(fake_fetch(delay_s=0.2)))
        assert lines == [
            "- unbounded x 2 times",
            "- cooperative_cancel x 2 times",
            "- race x 2 times",
        ]

    def test_every_iteration_runs(self, fake_fetch):
        fetch = fake_fetch(delay_s=0.0)
        _run(_config(iterations=3), build_strategies(fetch))
        assert fetch.calls == 9

    def test_invocations_never_overlap(self, fake_fetch):
        fetch = fake_fetch(delay_s=0.01)
        _run(_config(iterations=3, timeout_ms=200), build_strategies(fetch))
        assert fetch.max_in_flight == 1

    def test_zero_iterations(self, fake_fetch):
        fetch = fake_fetch()
        lines = _run(_config(iterations=0), build_strategies(fetch))
        assert lines == ["- unbounded x 0 times", "- cooperative_cancel x 0 times", "- race x 0 times"]
        assert fetch.calls == 0


class TestVerbosityTiers:
    """Each tier adds output on top of the one below."""

    def test_tier0_hides_baseline_anomaly(self, fake_fetch):
        lines = _run(_config(verbosity=0), build_strategies(fake_fetch(delay_s=0.2)))
        assert not any("Took too long" in line for line in lines)

    def test_tier1_explains_baseline_anomaly(self, fake_fetch):
        lines = _run(_config(verbosity=1), build_strategies(fake_fetch(delay_s=0.2)))
        assert lines[0] == "Running fetch with 1 iterations"
        assert lines[1] == ""
        assert lines[2] == "- unbounded x 1 times"
        assert lines[3].startswith("    Took too long: ")
        assert lines[4] == "    This was expected because unbounded does not enforce a timeout"
        assert lines[5] == "- cooperative_cancel x 1 times"

    def test_tier2_describes_strategies(self, fake_fetch):
        lines = _run(_config(verbosity=2, iterations=0), build_strategies(fake_fetch()))
        assert lines[1] == " for each of the following methods:"
        assert lines[2].startswith("  - unbounded: ")
        assert lines[3].startswith("  - cooperative_cancel: ")
        assert lines[4].startswith("  - race: ")
        assert "at least 0.2s" in lines[5]
        assert "longer than 50ms" in lines[6]

    def test_tier3_reports_every_invocation(self, fake_fetch):
        lines = _run(_config(verbosity=3), build_strategies(fake_fetch(delay_s=0.2)))
        assert "  - unbounded iteration 1" in lines
        assert any(line.startswith("    fetch completed successfully in ") for line in lines)
        failures = [line for line in lines if line.startswith("    fetch threw an exception after ")]
        assert len(failures) == 2
        messages = [line for line in lines if line.startswith("      message: ")]
        assert all(f"Fetch({URL}) timed out in 50ms" in m for m in messages)
        assert sum("This was expected because the request took" in line for line in lines) == 2

    def test_custom_url_does_not_quote_a_delay(self, fake_fetch):
        lines = _run(_config(verbosity=3, server_delay_s=None), build_strategies(fake_fetch(delay_s=0.2)))
        assert not any("at least" in line for line in lines)
        expected = [line for line in lines if "This was expected because the request took" in line]
        assert expected == [
            "    This was expected because the request took longer than our specified fetch timeout (50ms)"
        ] * 2

    def test_tier3_transport_failure_not_called_expected(self, fake_fetch):
        fetch = fake_fetch(error=httpx.ConnectError("refused"))
        lines = _run(_config(verbosity=3), build_strategies(fetch))
        assert lines.count("      message: refused") == 3
        assert not any("This was expected because the request took" in line for line in lines)


class TestAnomalies:
    """Bounded strategies that overrun are always reported."""

    def test_reported_at_tier0(self):
        lines = _run(_config(verbosity=0), [StubbornStrategy()])
        assert lines[0] == "- stubborn x 1 times"
        assert lines[1].startswith("    Took too long: ")
        assert lines[1].endswith("> timeout:50ms + gracePeriod:100ms")
        assert len(lines) == 2

    def test_explained_at_tier1(self):
        lines = _run(_config(verbosity=1), [StubbornStrategy()])
        assert lines[-1] == (
            "    The fetch should have thrown the exception in about "
            "timeout:50ms (plus gracePeriod:100ms)"
        )


class TestFailures:
    """A failed invocation never stops the run."""

    def test_failures_do_not_stop_run(self, fake_fetch):
        fetch = fake_fetch(error=httpx.ConnectError("refused"))
        lines = _run(_config(iterations=2), build_strategies(fetch))
        assert len(lines) == 3
        assert fetch.calls == 6

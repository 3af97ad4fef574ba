"""
Tests for the CLI entry point and its injected platform context.
"""

import io

import pytest

import timeoutbench.cli as cli
from timeoutbench.cli import Platform, main


class RecordingHarness:
    """Replaces Harness; records the config it was given."""

    configs = []

    def __init__(self, config, out=None):
        self.config = config
        self.out = out
        RecordingHarness.configs.append(config)

    async def run(self):
        print("ran", file=self.out)


@pytest.fixture
def harness(monkeypatch):
    RecordingHarness.configs = []
    monkeypatch.setattr(cli, "Harness", RecordingHarness)
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)
    return RecordingHarness


def _platform(*argv):
    codes = []
    return Platform(argv=list(argv), exit=codes.append, stdout=io.StringIO()), codes


class TestHelp:
    """-h/--help prints usage and exits 0 before anything runs."""

    @pytest.mark.parametrize("flag", ["-h", "--help"])
    def test_help(self, harness, flag):
        platform, codes = _platform(flag)
        assert main(platform) == 0
        assert codes == [0]
        text = platform.stdout.getvalue()
        assert "--iterations" in text
        assert "-n 20 -vvv" in text
        assert harness.configs == []

    def test_help_wins_over_other_args(self, harness):
        platform, codes = _platform("-n", "5", "-vv", "--help")
        main(platform)
        assert codes == [0]
        assert harness.configs == []

    def test_help_wins_over_unparseable_args(self, harness):
        platform, codes = _platform("-n", "lots", "-h")
        assert main(platform) == 0
        assert codes == [0]
        assert "--iterations" in platform.stdout.getvalue()
        assert harness.configs == []


class TestArguments:
    """Arguments become a RunConfig."""

    def test_defaults(self, harness):
        platform, codes = _platform()
        assert main(platform) == 0
        assert codes == [0]
        cfg = harness.configs[0]
        assert cfg.iterations == 10
        assert cfg.verbosity == 0
        assert cfg.timeout_ms == 500
        assert cfg.grace_ms == 200
        assert cfg.target_url == "https://httpbin.org/delay/1.0"
        assert platform.stdout.getvalue() == "ran\n"

    @pytest.mark.parametrize(
        "argv,expected",
        [(["-v"], 1), (["-vv"], 2), (["-vvv"], 3), (["-v", "-v"], 2), (["-vvvv"], 3)],
    )
    def test_verbosity_counts(self, harness, argv, expected):
        platform, _ = _platform(*argv)
        main(platform)
        assert harness.configs[0].verbosity == expected

    def test_iterations(self, harness):
        for argv in (["-n", "3"], ["--iterations", "3"]):
            platform, _ = _platform(*argv)
            main(platform)
        assert [c.iterations for c in harness.configs] == [3, 3]

    def test_delay_builds_url(self, harness):
        platform, _ = _platform("--delay", "2.0", "--timeout", "750", "--grace", "100")
        main(platform)
        cfg = harness.configs[0]
        assert cfg.target_url == "https://httpbin.org/delay/2.0"
        assert cfg.server_delay_s == 2.0
        assert cfg.timeout_ms == 750
        assert cfg.grace_ms == 100

    def test_url_override(self, harness):
        platform, _ = _platform("--url", "http://localhost:8080/slow")
        main(platform)
        assert harness.configs[0].target_url == "http://localhost:8080/slow"
        assert harness.configs[0].server_delay_s is None

    def test_negative_iterations_run_none(self, harness):
        platform, codes = _platform("-n", "-2")
        assert main(platform) == 0
        assert codes == [0]
        assert harness.configs[0].iterations == 0


class TestErrors:
    """Bad input exits 2 without running anything."""

    def test_non_integer_iterations(self, harness):
        platform, codes = _platform("-n", "lots")
        assert main(platform) == 2
        assert codes == [2]
        assert harness.configs == []

    def test_invalid_config(self, harness):
        platform, codes = _platform("--timeout", "0")
        assert main(platform) == 2
        assert codes == [2]
        assert harness.configs == []

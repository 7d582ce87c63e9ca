"""Unit tests for the command line entry point."""

from unittest.mock import MagicMock, patch

import pytest

from rpsbench.benchmark.exceptions import DependencyMissingError, TargetNotFoundError
from rpsbench.benchmark.models import BenchmarkResult
from rpsbench.cli import build_parser, main


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("rpsbench.cli.LoggingManager") as mock_manager:
        yield mock_manager


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def mock_runner_class():
    with patch("rpsbench.cli.BenchmarkRunner") as runner_class:
        runner_class.return_value.run.return_value = BenchmarkResult(5000, 6.0, 833.3, False)
        yield runner_class


class TestParser:
    """Test argument parsing."""

    def test_short_and_long_flags(self):
        args = build_parser().parse_args(["-d", "10", "--connections", "200", "-t", "8", "-u", "http://localhost:3000"])
        assert args.duration == 10
        assert args.connections == 200
        assert args.threads == 8
        assert args.url == "http://localhost:3000"
        assert args.total_requests is None

    def test_unknown_flag_exits_fatal(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--bogus"])
        assert exc_info.value.code == 1
        assert "Use --help" in capsys.readouterr().err

    def test_help_exits_zero(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--help"])
        assert exc_info.value.code == 0


class TestMain:
    """Test exit codes from main."""

    def test_threshold_failure_exits_zero(self, mock_runner_class):
        assert main([]) == 0
        mock_runner_class.return_value.run.assert_called_once()

    def test_flags_reach_benchmark_config(self, mock_runner_class):
        main(["-c", "7", "-n", "70", "-u", "http://127.0.0.1:9000", "--strategy", "batch"])

        config = mock_runner_class.call_args[0][0]
        assert config.max_connections == 7
        assert config.total_requests == 70
        assert config.primary_port == 9000
        assert config.dispatch_strategy == "batch"

    def test_target_not_found_exits_fatal(self, mock_runner_class, capsys):
        mock_runner_class.return_value.run.side_effect = TargetNotFoundError(
            "Could not find a running target", suggestions=["Start the server"]
        )

        assert main([]) == 1
        err = capsys.readouterr().err
        assert "ERROR: Could not find a running target" in err
        assert "Start the server" in err

    def test_missing_dependency_exits_fatal(self, mock_runner_class):
        mock_runner_class.side_effect = DependencyMissingError("no threads")
        assert main(["--strategy", "pool"]) == 1

    def test_invalid_option_value_exits_fatal(self, mock_runner_class, capsys):
        assert main(["-c", "0"]) == 1
        mock_runner_class.assert_not_called()
        assert "ERROR: Configuration validation error" in capsys.readouterr().err

    def test_log_level_passed_to_logging(self, mock_runner_class, no_logging_setup):
        main(["--log-level", "DEBUG"])
        assert no_logging_setup.setup_logging.call_args[0][0] == "DEBUG"

"""Unit tests for benchmark orchestration."""

import io
from unittest.mock import MagicMock, patch

import pytest
import requests

from rpsbench.benchmark.exceptions import TargetNotFoundError
from rpsbench.benchmark.models import BenchmarkResult, DispatchReport
from rpsbench.benchmark.result_reporter import ResultReporter
from rpsbench.benchmark.runner import BenchmarkRunner


def _runner(benchmark_config, report=None, real_warmup=False):
    strategy = MagicMock()
    strategy.name = "pool"
    runner = BenchmarkRunner(benchmark_config, reporter=ResultReporter(io.StringIO(), io.StringIO()), strategy=strategy)
    runner.request_session_manager = MagicMock()
    runner.target_locator = MagicMock()
    runner.target_locator.locate.return_value = 8282
    if not real_warmup:
        runner.warmup_runner = MagicMock()
    runner.load_dispatcher = MagicMock()
    runner.load_dispatcher.dispatch.return_value = report or DispatchReport(
        attempted=benchmark_config.total_requests, succeeded=benchmark_config.total_requests,
        failed=0, strategy="pool"
    )
    return runner


class TestBenchmarkRunner:
    """Test BenchmarkRunner phase ordering."""

    def test_phases_run_in_order(self, benchmark_config):
        runner = _runner(benchmark_config)
        calls = MagicMock()
        calls.attach_mock(runner.target_locator.locate, "locate")
        calls.attach_mock(runner.warmup_runner.run, "warmup")
        calls.attach_mock(runner.load_dispatcher.dispatch, "dispatch")

        runner.run()

        assert [c[0] for c in calls.mock_calls] == ["locate", "warmup", "dispatch"]

    def test_plan_uses_located_port_and_config(self, benchmark_config):
        runner = _runner(benchmark_config)
        runner.run()

        plan = runner.load_dispatcher.dispatch.call_args[0][0]
        assert plan.target_url == "http://127.0.0.1:8282/"
        assert plan.total_requests == benchmark_config.total_requests
        assert plan.concurrency_limit == benchmark_config.max_connections
        runner.warmup_runner.run.assert_called_once()
        assert runner.warmup_runner.run.call_args[0][1] == "http://127.0.0.1:8282/"

    @patch("rpsbench.benchmark.throughput_calculator.time.perf_counter", side_effect=[100.0, 104.0])
    def test_result_computed_from_dispatch_window(self, mock_counter, benchmark_config):
        result = _runner(benchmark_config).run()

        assert result.elapsed_seconds == 4.0
        assert result.requests_per_second == 1250.0
        assert result.passed is True

    @patch("rpsbench.benchmark.throughput_calculator.time.perf_counter", side_effect=[0.0, 6.0])
    def test_threshold_failure_is_a_result(self, mock_counter, benchmark_config):
        runner = _runner(benchmark_config)
        result = runner.run()

        assert result.passed is False
        assert "FAIL" in runner.reporter.stream.getvalue()

    def test_target_not_found_stops_before_warmup(self, benchmark_config):
        runner = _runner(benchmark_config)
        runner.target_locator.locate.side_effect = TargetNotFoundError("nothing listening")

        with pytest.raises(TargetNotFoundError):
            runner.run()

        runner.warmup_runner.run.assert_not_called()
        runner.load_dispatcher.dispatch.assert_not_called()

    def test_failed_warmup_does_not_block_dispatch(self, benchmark_config):
        runner = _runner(benchmark_config, real_warmup=True)
        session = runner.request_session_manager.create_session.return_value.__enter__.return_value
        session.get.side_effect = requests.ConnectionError("connection refused")

        result = runner.run()

        assert session.get.call_count == benchmark_config.warmup_requests
        runner.load_dispatcher.dispatch.assert_called_once()
        assert isinstance(result, BenchmarkResult)

    def test_selects_strategy_from_config(self, benchmark_config):
        with patch("rpsbench.benchmark.runner.select_strategy") as mock_select:
            BenchmarkRunner(benchmark_config, reporter=ResultReporter(io.StringIO()))
        mock_select.assert_called_once_with(benchmark_config.dispatch_strategy, timeout=benchmark_config.request_timeout)

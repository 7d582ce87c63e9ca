"""Renders benchmark progress and results for the terminal."""
import sys
from typing import Optional, TextIO

from .exceptions import BenchmarkError
from .models import BenchmarkConfig, BenchmarkResult, DispatchPlan

GREEN = "\033[0;32m"
RED = "\033[0;31m"
BLUE = "\033[0;34m"
YELLOW = "\033[0;33m"
RESET = "\033[0m"


class ResultReporter:
    """Writes human-readable output; colour only when the stream is a terminal."""

    def __init__(self, stream: Optional[TextIO] = None, error_stream: Optional[TextIO] = None,
                 use_color: Optional[bool] = None):
        self.stream = stream or sys.stdout
        self.error_stream = error_stream or sys.stderr
        if use_color is None:
            use_color = hasattr(self.stream, "isatty") and self.stream.isatty()
        self.use_color = use_color

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{RESET}" if self.use_color else text

    def _write(self, text: str = "") -> None:
        print(text, file=self.stream)

    def header(self, title: str) -> None:
        self._write()
        self._write(self._paint(title, BLUE))
        self._write(self._paint("=" * len(title), BLUE))
        self._write()

    def configuration(self, config: BenchmarkConfig) -> None:
        self.header("Benchmark Configuration")
        self._write(f"Duration:    {config.duration_seconds} seconds")
        self._write(f"Connections: {config.max_connections}")
        self._write(f"Threads:     {config.thread_count}")
        self._write(f"URL:         {config.target_url}")

    def target_found(self, port: int) -> None:
        self._write(self._paint(f"Found target running on port {port}", GREEN))

    def plan(self, plan: DispatchPlan, strategy_name: str) -> None:
        self.header("Running Benchmark")
        self._write(f"- Total requests: {plan.total_requests}")
        self._write(f"- Concurrent requests: {plan.concurrency_limit}")
        self._write(f"- Target URL: {plan.target_url}")
        self._write(f"- Dispatch strategy: {strategy_name}")
        self._write()

    def result(self, result: BenchmarkResult) -> None:
        self._write("Benchmark complete!")
        self._write("=" * 37)
        if result.measurable:
            self._write(f"Total time: {result.elapsed_seconds:.6f} seconds")
        else:
            self._write(self._paint(
                f"Total time: below clock resolution (clamped to {result.elapsed_seconds:g} seconds)", YELLOW
            ))
        self._write(f"Requests per second: {result.requests_per_second:.2f}")
        if result.report is not None:
            self._write(f"Succeeded: {result.report.succeeded}, failed: {result.report.failed}")

        threshold = f"{result.threshold_rps:g}"
        if not result.measurable:
            self._write(self._paint(
                "? INCONCLUSIVE: Dispatch finished below clock resolution, throughput not measured", YELLOW
            ))
        elif result.passed:
            self._write(self._paint(f"✓ PASS: Server can handle more than {threshold} requests per second", GREEN))
        else:
            self._write(self._paint(f"✗ FAIL: Server handled less than {threshold} requests per second", RED))

    def fatal(self, error: BenchmarkError) -> None:
        print(f"ERROR: {error.message}", file=self.error_stream)
        for suggestion in error.suggestions:
            print(f"  - {suggestion}", file=self.error_stream)

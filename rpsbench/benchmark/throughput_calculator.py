"""Times the dispatch phase and turns it into a throughput verdict."""
import logging
import time
from typing import Optional

from .constants import BenchmarkConstants
from .models import BenchmarkResult, DispatchReport


# Configure logging
logger = logging.getLogger(__name__)


class DispatchTimer:
    """Context manager recording high-resolution start and end timestamps."""

    def __init__(self):
        self.start: Optional[float] = None
        self.end: Optional[float] = None

    def __enter__(self) -> "DispatchTimer":
        self.start = time.perf_counter()
        self.end = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.end = time.perf_counter()

    @property
    def elapsed(self) -> float:
        if self.start is None or self.end is None:
            raise RuntimeError("Timer has not completed a measurement")
        return self.end - self.start


class ThroughputCalculator:
    """Computes requests per second and evaluates it against the threshold."""

    def __init__(self, threshold_rps: float = BenchmarkConstants.THRESHOLD_RPS,
                 min_elapsed: float = BenchmarkConstants.MIN_ELAPSED_SECONDS):
        self.threshold_rps = threshold_rps
        self.min_elapsed = min_elapsed

    def compute(self, total_requests: int, elapsed_seconds: float,
                report: Optional[DispatchReport] = None) -> BenchmarkResult:
        """
        Build the result for a finished dispatch phase.

        Elapsed times at or below clock resolution are clamped to min_elapsed
        and the result is flagged as not measurable and never passes.

        Args:
            total_requests: Requests attempted during the phase.
            elapsed_seconds: Wall-clock duration of the phase.
            report: Optional dispatch report attached for display.

        Returns:
            BenchmarkResult with requests_per_second == total_requests / elapsed_seconds.
        """
        measurable = elapsed_seconds > self.min_elapsed
        if not measurable:
            logger.warning(
                f"Elapsed time {elapsed_seconds!r}s is below clock resolution, clamping to {self.min_elapsed}s"
            )
            elapsed_seconds = self.min_elapsed

        requests_per_second = total_requests / elapsed_seconds
        return BenchmarkResult(
            total_requests=total_requests,
            elapsed_seconds=elapsed_seconds,
            requests_per_second=requests_per_second,
            passed=measurable and requests_per_second >= self.threshold_rps,
            threshold_rps=self.threshold_rps,
            measurable=measurable,
            report=report,
        )

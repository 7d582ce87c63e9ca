"""Benchmark runner to orchestrate discovery, warm-up, dispatch and reporting."""
import logging
from typing import Optional

from .constants import BenchmarkConstants
from .dispatch_strategies import DispatchStrategy, select_strategy
from .load_dispatcher import LoadDispatcher
from .models import BenchmarkConfig, BenchmarkResult, DispatchPlan
from .port_prober import PortProber
from .request_executor import RequestExecutor
from .request_session_manager import RequestSessionManager
from .result_reporter import ResultReporter
from .target_locator import TargetLocator
from .throughput_calculator import DispatchTimer, ThroughputCalculator
from .warmup_runner import WarmupRunner


# Configure logging
logger = logging.getLogger(__name__)


class BenchmarkRunner:
    """Runs the phases strictly in sequence: locate, warm up, dispatch, report."""

    def __init__(self, config: BenchmarkConfig, reporter: Optional[ResultReporter] = None,
                 strategy: Optional[DispatchStrategy] = None):
        self.config = config
        self.reporter = reporter or ResultReporter()
        # Strategy selection can fail with DependencyMissingError before any network activity
        self.strategy = strategy or select_strategy(config.dispatch_strategy, timeout=config.request_timeout)
        self.request_session_manager = RequestSessionManager()
        self.request_executor = RequestExecutor(timeout=config.request_timeout)
        self.target_locator = TargetLocator(
            config, PortProber(config.host, config.probe_timeout), self.request_executor
        )
        self.warmup_runner = WarmupRunner(self.request_executor, config.warmup_requests)
        self.load_dispatcher = LoadDispatcher(self.strategy)
        self.throughput_calculator = ThroughputCalculator(config.threshold_rps, BenchmarkConstants.MIN_ELAPSED_SECONDS)

    def build_plan(self, port: int) -> DispatchPlan:
        return DispatchPlan(
            total_requests=self.config.total_requests,
            concurrency_limit=self.config.max_connections,
            target_url=self.config.url_for_port(port),
        )

    def run(self) -> BenchmarkResult:
        """
        Run the complete benchmarking process.

        Returns:
            The measured result; a throughput below the threshold is still a result.

        Raises:
            TargetNotFoundError: If no candidate port serves the target.
            BenchmarkExecutionError: If the strategy did not attempt every planned request.
        """
        self.reporter.configuration(self.config)

        try:
            with self.request_session_manager.create_session() as session:
                port = self.target_locator.locate(session)
                self.reporter.target_found(port)
                plan = self.build_plan(port)
                self.warmup_runner.run(session, plan.target_url)

            self.reporter.plan(plan, self.strategy.name)
            timer = DispatchTimer()
            with timer:
                report = self.load_dispatcher.dispatch(plan)

            result = self.throughput_calculator.compute(plan.total_requests, timer.elapsed, report)
            logger.info(
                f"{result.total_requests} requests in {result.elapsed_seconds:.6f}s "
                f"= {result.requests_per_second:.2f} req/s (passed={result.passed})"
            )
            self.reporter.result(result)
            return result

        except Exception as e:
            logger.error(f"Benchmark failed: {e}")
            raise

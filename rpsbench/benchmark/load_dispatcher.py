"""Issues the measured request volume through the selected strategy."""
import logging

from .dispatch_strategies import DispatchStrategy
from .exceptions import BenchmarkExecutionError
from .models import DispatchPlan, DispatchReport


# Configure logging
logger = logging.getLogger(__name__)


class LoadDispatcher:
    """Runs a DispatchPlan and checks that every planned request was attempted."""

    def __init__(self, strategy: DispatchStrategy):
        self.strategy = strategy

    def dispatch(self, plan: DispatchPlan) -> DispatchReport:
        logger.info(
            f"Dispatching {plan.total_requests} requests to {plan.target_url} "
            f"with concurrency {plan.concurrency_limit} ({self.strategy.name})"
        )
        report = self.strategy.execute(plan.urls(), plan.concurrency_limit)
        if report.attempted != plan.total_requests:
            raise BenchmarkExecutionError(
                f"Strategy '{self.strategy.name}' attempted {report.attempted} "
                f"of {plan.total_requests} planned requests"
            )
        logger.info(f"Dispatch complete: {report.succeeded} succeeded, {report.failed} failed")
        return report

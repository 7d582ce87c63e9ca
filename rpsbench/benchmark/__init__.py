"""Benchmark package initialization."""
from .models import BenchmarkConfig, ProbeResult, DispatchPlan, RequestOutcome, DispatchReport, BenchmarkResult
from .constants import BenchmarkConstants
from .exceptions import (
    BenchmarkError, BenchmarkExecutionError, DependencyMissingError, TargetNotFoundError, ConfigurationError,
    RequestError
)
from .request_session_manager import RequestSessionManager
from .request_executor import RequestExecutor, AsyncRequestExecutor
from .port_prober import PortProber
from .target_locator import TargetLocator
from .warmup_runner import WarmupRunner
from .dispatch_strategies import DispatchStrategy, PoolDispatchStrategy, BatchDispatchStrategy, select_strategy
from .load_dispatcher import LoadDispatcher
from .throughput_calculator import DispatchTimer, ThroughputCalculator
from .result_reporter import ResultReporter
from .runner import BenchmarkRunner

__all__ = [
    'BenchmarkConfig',
    'ProbeResult',
    'DispatchPlan',
    'RequestOutcome',
    'DispatchReport',
    'BenchmarkResult',
    'BenchmarkConstants',
    'BenchmarkError',
    'BenchmarkExecutionError',
    'DependencyMissingError',
    'TargetNotFoundError',
    'ConfigurationError',
    'RequestError',
    'RequestSessionManager',
    'RequestExecutor',
    'AsyncRequestExecutor',
    'PortProber',
    'TargetLocator',
    'WarmupRunner',
    'DispatchStrategy',
    'PoolDispatchStrategy',
    'BatchDispatchStrategy',
    'select_strategy',
    'LoadDispatcher',
    'DispatchTimer',
    'ThroughputCalculator',
    'ResultReporter',
    'BenchmarkRunner'
]

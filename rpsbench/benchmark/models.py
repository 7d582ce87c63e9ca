"""Data models for the benchmarking system."""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from urllib.parse import urlsplit

from rpsbench.const import (
    DEFAULT_CANDIDATE_PORTS, DEFAULT_CONNECTIONS, DEFAULT_DISPATCH_STRATEGY, DEFAULT_DURATION_SEC,
    DEFAULT_THREADS, DEFAULT_TOTAL_REQUESTS, DEFAULT_URL, DEFAULT_WARMUP_REQUESTS, PROBE_TIMEOUT_SEC,
    REQUEST_TIMEOUT_SEC, ROOT_PATH, SENTINEL_BODY, THROUGHPUT_THRESHOLD_RPS
)

_DEFAULT_SCHEME_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class BenchmarkConfig:
    """Configuration for the benchmark, fixed for the whole run."""
    duration_seconds: int = DEFAULT_DURATION_SEC
    max_connections: int = DEFAULT_CONNECTIONS
    thread_count: int = DEFAULT_THREADS
    target_url: str = DEFAULT_URL
    total_requests: int = DEFAULT_TOTAL_REQUESTS
    warmup_requests: int = DEFAULT_WARMUP_REQUESTS
    threshold_rps: float = THROUGHPUT_THRESHOLD_RPS
    candidate_ports: Tuple[int, ...] = tuple(DEFAULT_CANDIDATE_PORTS)
    sentinel: str = SENTINEL_BODY
    probe_timeout: float = PROBE_TIMEOUT_SEC
    request_timeout: float = REQUEST_TIMEOUT_SEC
    dispatch_strategy: str = DEFAULT_DISPATCH_STRATEGY

    @classmethod
    def from_settings(cls, settings) -> "BenchmarkConfig":
        """Freeze the loaded settings into the value passed to every component."""
        return cls(
            duration_seconds=settings.duration,
            max_connections=settings.connections,
            thread_count=settings.threads,
            target_url=settings.url,
            total_requests=settings.total_requests,
            warmup_requests=settings.warmup_requests,
            threshold_rps=settings.threshold_rps,
            candidate_ports=tuple(settings.candidate_ports),
            sentinel=settings.sentinel,
            probe_timeout=settings.probe_timeout,
            request_timeout=settings.request_timeout,
            dispatch_strategy=settings.dispatch_strategy,
        )

    @property
    def scheme(self) -> str:
        return urlsplit(self.target_url).scheme or "http"

    @property
    def host(self) -> str:
        return urlsplit(self.target_url).hostname or "localhost"

    @property
    def primary_port(self) -> int:
        """Port of the configured URL, falling back to the scheme default."""
        return urlsplit(self.target_url).port or _DEFAULT_SCHEME_PORTS.get(self.scheme, 80)

    def url_for_port(self, port: int) -> str:
        """Root URL of the configured host on the given port."""
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{self.scheme}://{host}:{port}{ROOT_PATH}"


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of checking a single candidate port."""
    port: int
    is_listening: bool
    body_matches: bool = False

    @property
    def is_target(self) -> bool:
        return self.is_listening and self.body_matches


@dataclass(frozen=True)
class DispatchPlan:
    """What the load dispatcher is asked to do."""
    total_requests: int
    concurrency_limit: int
    target_url: str

    def __post_init__(self):
        if self.concurrency_limit < 1:
            raise ValueError(f"concurrency_limit must be >= 1, got {self.concurrency_limit}")
        if self.total_requests < 0:
            raise ValueError(f"total_requests must be >= 0, got {self.total_requests}")

    def urls(self) -> List[str]:
        """One entry per planned request."""
        return [self.target_url] * self.total_requests


@dataclass(frozen=True)
class RequestOutcome:
    """Terminal state of one request."""
    succeeded: bool


@dataclass(frozen=True)
class DispatchReport:
    """Aggregate completion signal returned by a dispatch strategy."""
    attempted: int
    succeeded: int
    failed: int
    strategy: str

    @classmethod
    def from_outcomes(cls, outcomes: List[RequestOutcome], strategy: str) -> "DispatchReport":
        succeeded = sum(1 for outcome in outcomes if outcome.succeeded)
        return cls(attempted=len(outcomes), succeeded=succeeded, failed=len(outcomes) - succeeded, strategy=strategy)


@dataclass(frozen=True)
class BenchmarkResult:
    """Throughput measured over the dispatch phase."""
    total_requests: int
    elapsed_seconds: float
    requests_per_second: float
    passed: bool
    threshold_rps: float = THROUGHPUT_THRESHOLD_RPS
    # False when the raw elapsed time was below clock resolution and got clamped
    measurable: bool = True
    report: Optional[DispatchReport] = field(default=None, compare=False)

"""Constants for the benchmarking system."""
from rpsbench.const import DEFAULT_WARMUP_REQUESTS, MIN_ELAPSED_SEC, REQUEST_TIMEOUT_SEC, THROUGHPUT_THRESHOLD_RPS


class BenchmarkConstants:
    """Centralized constants for benchmark configuration."""
    DEFAULT_TIMEOUT = REQUEST_TIMEOUT_SEC  # seconds
    MAX_RETRIES = 0  # every planned request is attempted exactly once
    WARMUP_REQUESTS = DEFAULT_WARMUP_REQUESTS
    THRESHOLD_RPS = THROUGHPUT_THRESHOLD_RPS
    MIN_ELAPSED_SECONDS = MIN_ELAPSED_SEC

"""Primes the target before measurement."""
import logging

import requests

from .constants import BenchmarkConstants
from .request_executor import RequestExecutor


# Configure logging
logger = logging.getLogger(__name__)


class WarmupRunner:
    """Sends a fixed number of sequential requests and ignores the results."""

    def __init__(self, request_executor: RequestExecutor, requests_count: int = BenchmarkConstants.WARMUP_REQUESTS):
        self.request_executor = request_executor
        self.requests_count = requests_count

    def run(self, session: requests.Session, url: str) -> None:
        logger.info(f"Warming up the server with {self.requests_count} requests...")
        failures = 0
        for _ in range(self.requests_count):
            if not self.request_executor.send_request(session, url).succeeded:
                failures += 1
        if failures:
            logger.debug(f"{failures}/{self.requests_count} warm-up requests failed")

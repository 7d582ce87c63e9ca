"""Manages HTTP clients used by the benchmark."""
import logging
import httpx
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from .constants import BenchmarkConstants


# Configure logging
logger = logging.getLogger(__name__)


class RequestSessionManager:
    """Builds HTTP clients sized for a given concurrency level."""

    @staticmethod
    def create_session(pool_size: int = 1, max_retries: int = BenchmarkConstants.MAX_RETRIES) -> requests.Session:
        """Create a requests session whose connection pool fits pool_size workers.

        Load requests are attempted exactly once, so retries default to zero.
        """
        session = requests.Session()
        retry = Retry(
            total=max_retries,
            backoff_factor=0,
            raise_on_status=False,
        )
        adapter = HTTPAdapter(
            max_retries=retry,
            pool_connections=1,
            pool_maxsize=max(pool_size, 1),
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        logger.debug(f"Created requests session with pool size {pool_size}")
        return session

    @staticmethod
    def create_async_client(pool_size: int = 1) -> httpx.AsyncClient:
        """Create an httpx async client allowing pool_size simultaneous connections."""
        limits = httpx.Limits(
            max_connections=max(pool_size, 1),
            max_keepalive_connections=max(pool_size, 1),
        )
        logger.debug(f"Created async client with connection limit {pool_size}")
        return httpx.AsyncClient(limits=limits)

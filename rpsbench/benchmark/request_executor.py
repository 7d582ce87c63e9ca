"""Handles individual request execution."""
import logging
import httpx
import requests

from .constants import BenchmarkConstants
from .exceptions import RequestError
from .models import RequestOutcome


# Configure logging
logger = logging.getLogger(__name__)


class RequestExecutor:
    """Issues single GET requests through a shared requests session."""

    def __init__(self, timeout: float = BenchmarkConstants.DEFAULT_TIMEOUT):
        self.timeout = timeout

    def fetch(self, session: requests.Session, url: str, raise_for_status: bool = True) -> requests.Response:
        """
        Send one plain GET and read the whole body.

        Args:
            session: Requests session to send through.
            url: Target URL.
            raise_for_status: Treat any non-2xx response as a failure. Redirects are
                never followed, so a 3xx fails the request as well.

        Returns:
            The completed response.

        Raises:
            RequestError: If the request fails at the transport level or, when
                raise_for_status is set, the server answers with an error status.
        """
        try:
            response = session.get(url, timeout=self.timeout, allow_redirects=False)
            if raise_for_status:
                response.raise_for_status()
        except requests.RequestException as e:
            raise RequestError(f"Request to {url} failed") from e
        if raise_for_status and not 200 <= response.status_code < 300:
            raise RequestError(f"Request to {url} answered {response.status_code}")
        return response

    def send_request(self, session: requests.Session, url: str) -> RequestOutcome:
        """Send one request and reduce it to its terminal state. Never raises RequestError."""
        try:
            self.fetch(session, url)
        except RequestError as e:
            logger.debug(f"{e}: {e.__cause__}")
            return RequestOutcome(succeeded=False)
        return RequestOutcome(succeeded=True)


class AsyncRequestExecutor:
    """Issues single GET requests through a shared httpx async client."""

    def __init__(self, timeout: float = BenchmarkConstants.DEFAULT_TIMEOUT):
        self.timeout = timeout

    async def send_request(self, client: httpx.AsyncClient, url: str) -> RequestOutcome:
        """Send one request and reduce it to its terminal state."""
        try:
            response = await client.get(url, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.debug(f"Request to {url} failed: {e}")
            return RequestOutcome(succeeded=False)
        return RequestOutcome(succeeded=True)

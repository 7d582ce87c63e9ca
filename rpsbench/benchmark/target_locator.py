"""Finds which candidate port is serving the expected service."""
import logging
from typing import Iterable, Optional

import requests

from rpsbench.const import SERVER_START_HINT
from .exceptions import RequestError, TargetNotFoundError
from .models import BenchmarkConfig, ProbeResult
from .port_prober import PortProber
from .request_executor import RequestExecutor


# Configure logging
logger = logging.getLogger(__name__)


class TargetLocator:
    """Locates the target among a primary port and an ordered scan list."""

    def __init__(self, config: BenchmarkConfig, prober: PortProber, request_executor: RequestExecutor):
        self.config = config
        self.prober = prober
        self.request_executor = request_executor

    def body_matches(self, session: requests.Session, port: int, sentinel: str) -> bool:
        """Exact byte comparison of the root body against the sentinel. Failures count as a mismatch."""
        url = self.config.url_for_port(port)
        try:
            response = self.request_executor.fetch(session, url, raise_for_status=False)
        except RequestError as e:
            logger.debug(f"Content check on port {port} failed: {e.__cause__}")
            return False
        return response.content == sentinel.encode("utf-8")

    def probe(self, session: requests.Session, port: int, sentinel: str) -> ProbeResult:
        """Probe one candidate; the content check only runs when something listens."""
        result = self.prober.probe(port)
        if not result.is_listening:
            return result
        return ProbeResult(port=port, is_listening=True, body_matches=self.body_matches(session, port, sentinel))

    def locate(self, session: requests.Session, primary_port: Optional[int] = None,
               candidate_ports: Optional[Iterable[int]] = None, sentinel: Optional[str] = None) -> int:
        """
        Return the port of the target service.

        The primary port is accepted as soon as it listens, without a content
        check. Otherwise candidates are scanned in order and the first one that
        both listens and answers with the sentinel body wins.

        Raises:
            TargetNotFoundError: If the scan list is exhausted.
        """
        primary_port = self.config.primary_port if primary_port is None else primary_port
        candidates = list(self.config.candidate_ports if candidate_ports is None else candidate_ports)
        sentinel = self.config.sentinel if sentinel is None else sentinel

        logger.info(f"Checking for a running target on {self.config.host}:{primary_port}")
        if self.prober.is_listening(primary_port):
            logger.info(f"Target listening on primary port {primary_port}")
            return primary_port

        logger.warning(f"Target not found on port {primary_port}. Scanning {len(candidates)} candidate ports...")
        for port in candidates:
            result = self.probe(session, port, sentinel)
            if result.is_target:
                logger.info(f"Found target running on port {port}")
                return port
            if result.is_listening:
                logger.info(f"Port {port} is listening but does not serve the expected body")

        raise TargetNotFoundError(
            f"Could not find a running target on {self.config.host} "
            f"(primary port {primary_port}, candidates {candidates})",
            ports=[primary_port] + candidates,
            suggestions=[
                f"{SERVER_START_HINT} ({sentinel!r})",
                "Pass --url http://host:port if it listens elsewhere",
            ],
        )

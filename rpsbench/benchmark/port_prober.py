"""Checks whether a TCP port has a listener."""
import logging
import socket

from .models import ProbeResult


# Configure logging
logger = logging.getLogger(__name__)


class PortProber:
    """TCP connect probe, the equivalent of ``nc -z host port``."""

    def __init__(self, host: str, timeout: float):
        self.host = host
        self.timeout = timeout

    def is_listening(self, port: int) -> bool:
        try:
            with socket.create_connection((self.host, port), timeout=self.timeout):
                pass
        except OSError as e:
            logger.debug(f"Nothing listening on {self.host}:{port} ({e})")
            return False
        logger.debug(f"Listener found on {self.host}:{port}")
        return True

    def probe(self, port: int) -> ProbeResult:
        return ProbeResult(port=port, is_listening=self.is_listening(port))

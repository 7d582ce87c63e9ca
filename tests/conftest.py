"""Shared test configuration and fixtures for all tests."""

import asyncio
import socket
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional
from unittest.mock import MagicMock

import pytest

from rpsbench.benchmark.models import BenchmarkConfig, RequestOutcome
from .test_const import TEST_CANDIDATE_PORTS, TEST_SENTINEL, TEST_TIMEOUT, TEST_URL


@pytest.fixture
def benchmark_config():
    """Benchmark configuration pointing at the loopback address."""
    return BenchmarkConfig(
        target_url=TEST_URL,
        candidate_ports=TEST_CANDIDATE_PORTS,
        sentinel=TEST_SENTINEL,
        probe_timeout=TEST_TIMEOUT,
        request_timeout=TEST_TIMEOUT,
    )


@pytest.fixture
def mock_session():
    """Mock requests session fixture answering 200."""
    session = MagicMock()
    session.get.return_value.status_code = 200
    return session


@pytest.fixture
def mock_request_executor():
    """Mock request executor whose requests all succeed."""
    executor = MagicMock()
    executor.send_request.return_value = RequestOutcome(succeeded=True)
    return executor


@pytest.fixture
def closed_port():
    """A loopback port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]
    return port


@pytest.fixture
def listening_socket():
    """A loopback port with a bare TCP listener."""
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    s.listen(16)
    yield s.getsockname()[1]
    s.close()


def _make_handler(body: str, status: int, location: Optional[str] = None):
    class _Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            with self.server.hits_lock:
                self.server.hits += 1
            if location is not None and self.path == "/":
                self.send_response(302)
                self.send_header("Location", location)
                self.send_header("Content-Length", "0")
                self.end_headers()
                return
            payload = body.encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Type", "text/plain")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        def log_message(self, format, *args):
            pass

    return _Handler


@pytest.fixture
def http_server_factory():
    """Start loopback HTTP servers answering every GET with a fixed body.

    With `location` set, the root path answers 302 to that location instead.
    """
    servers = []

    def start(
        body: str = TEST_SENTINEL, status: int = 200, location: Optional[str] = None
    ) -> ThreadingHTTPServer:
        server = ThreadingHTTPServer(("127.0.0.1", 0), _make_handler(body, status, location))
        server.daemon_threads = True
        server.hits = 0
        server.hits_lock = threading.Lock()
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return server

    yield start
    for server in servers:
        server.shutdown()
        server.server_close()


class ConcurrencyTracker:
    """Fake request executor recording how many requests are in flight at once."""

    def __init__(self, delay: float = 0.0, fail_every: int = 0):
        self.delay = delay
        self.fail_every = fail_every
        self.in_flight = 0
        self.max_in_flight = 0
        self.calls = 0
        # in-flight count seen by each request as it starts
        self.in_flight_at_start = []
        self._lock = threading.Lock()

    def _enter(self) -> int:
        with self._lock:
            self.calls += 1
            self.in_flight_at_start.append(self.in_flight)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
            return self.calls

    def _leave(self, call_number: int) -> RequestOutcome:
        with self._lock:
            self.in_flight -= 1
        failed = self.fail_every and call_number % self.fail_every == 0
        return RequestOutcome(succeeded=not failed)

    def send_request(self, session, url):
        call_number = self._enter()
        time.sleep(self.delay)
        return self._leave(call_number)


class AsyncConcurrencyTracker(ConcurrencyTracker):
    """Async flavour of ConcurrencyTracker for the batch strategy."""

    async def send_request(self, client, url):
        call_number = self._enter()
        await asyncio.sleep(self.delay)
        return self._leave(call_number)


@pytest.fixture
def concurrency_tracker():
    return ConcurrencyTracker


@pytest.fixture
def async_concurrency_tracker():
    return AsyncConcurrencyTracker

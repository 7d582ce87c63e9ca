"""Interchangeable ways of issuing a volume of requests under a concurrency cap."""
import asyncio
import concurrent.futures
import logging
import sys
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Sequence, Type

import httpx
import requests

from rpsbench.const import STRATEGY_AUTO, STRATEGY_BATCH, STRATEGY_POOL
from .exceptions import ConfigurationError, DependencyMissingError
from .models import DispatchReport, RequestOutcome
from .request_executor import AsyncRequestExecutor, RequestExecutor
from .request_session_manager import RequestSessionManager


# Configure logging
logger = logging.getLogger(__name__)

# Interpreters built without OS thread support
_THREADLESS_PLATFORMS = ("emscripten", "wasi")


def _check_limit(concurrency_limit: int) -> None:
    if concurrency_limit < 1:
        raise ValueError(f"concurrency_limit must be >= 1, got {concurrency_limit}")


class DispatchStrategy(ABC):
    """Issues every URL exactly once with at most concurrency_limit in flight."""

    name: str = ""

    @classmethod
    def is_available(cls) -> bool:
        return True

    @abstractmethod
    def execute(self, urls: Sequence[str], concurrency_limit: int) -> DispatchReport:
        """Block until every request is terminal and report the aggregate."""


class PoolDispatchStrategy(DispatchStrategy):
    """Worker pool of exactly concurrency_limit threads draining a shared job queue.

    Workers pick up the next URL as soon as they finish one, so the number of
    requests in flight stays at the limit until the queue runs dry.
    """

    name = STRATEGY_POOL

    def __init__(self, request_executor: RequestExecutor,
                 session_factory: Callable[[int], requests.Session] = RequestSessionManager.create_session):
        self.request_executor = request_executor
        self.session_factory = session_factory

    @classmethod
    def is_available(cls) -> bool:
        return sys.platform not in _THREADLESS_PLATFORMS

    def execute(self, urls: Sequence[str], concurrency_limit: int) -> DispatchReport:
        _check_limit(concurrency_limit)
        if not urls:
            return DispatchReport(attempted=0, succeeded=0, failed=0, strategy=self.name)

        outcomes: List[RequestOutcome] = []
        with self.session_factory(concurrency_limit) as session:
            with concurrent.futures.ThreadPoolExecutor(max_workers=concurrency_limit) as executor:
                futures = [executor.submit(self.request_executor.send_request, session, url) for url in urls]
                for future in concurrent.futures.as_completed(futures):
                    try:
                        outcomes.append(future.result())
                    except Exception as e:
                        logger.error(f"Error in request: {e}")
                        outcomes.append(RequestOutcome(succeeded=False))

        return DispatchReport.from_outcomes(outcomes, self.name)


class BatchDispatchStrategy(DispatchStrategy):
    """Fixed-size batches: launch concurrency_limit requests, wait for all, repeat.

    In-flight concurrency dips below the limit while a batch drains, which caps
    throughput compared to the pool strategy.
    """

    name = STRATEGY_BATCH

    def __init__(self, request_executor: AsyncRequestExecutor,
                 client_factory: Callable[[int], httpx.AsyncClient] = RequestSessionManager.create_async_client):
        self.request_executor = request_executor
        self.client_factory = client_factory

    @staticmethod
    def batches(urls: Sequence[str], size: int) -> List[Sequence[str]]:
        return [urls[start:start + size] for start in range(0, len(urls), size)]

    def execute(self, urls: Sequence[str], concurrency_limit: int) -> DispatchReport:
        _check_limit(concurrency_limit)
        if not urls:
            return DispatchReport(attempted=0, succeeded=0, failed=0, strategy=self.name)
        outcomes = asyncio.run(self._execute(urls, concurrency_limit))
        return DispatchReport.from_outcomes(outcomes, self.name)

    async def _execute(self, urls: Sequence[str], concurrency_limit: int) -> List[RequestOutcome]:
        outcomes: List[RequestOutcome] = []
        async with self.client_factory(concurrency_limit) as client:
            for number, batch in enumerate(self.batches(urls, concurrency_limit), start=1):
                results = await asyncio.gather(
                    *(self.request_executor.send_request(client, url) for url in batch),
                    return_exceptions=True,
                )
                for result in results:
                    if isinstance(result, BaseException):
                        logger.error(f"Error in request: {result}")
                        outcomes.append(RequestOutcome(succeeded=False))
                    else:
                        outcomes.append(result)
                logger.debug(f"Batch {number} done ({len(outcomes)}/{len(urls)} requests)")
        return outcomes


STRATEGIES: Dict[str, Type[DispatchStrategy]] = {
    STRATEGY_POOL: PoolDispatchStrategy,
    STRATEGY_BATCH: BatchDispatchStrategy,
}


def select_strategy(name: str = STRATEGY_AUTO, timeout: Optional[float] = None) -> DispatchStrategy:
    """
    Pick the dispatch strategy once at startup.

    "auto" prefers the worker pool and falls back to batches when the
    interpreter cannot run threads.

    Raises:
        DependencyMissingError: If an explicitly requested strategy is unavailable.
        ConfigurationError: If the name is unknown.
    """
    name = name.lower()
    if name == STRATEGY_AUTO:
        name = STRATEGY_POOL if PoolDispatchStrategy.is_available() else STRATEGY_BATCH
        logger.info(f"Automatically selected '{name}' dispatch strategy")

    strategy_class = STRATEGIES.get(name)
    if strategy_class is None:
        raise ConfigurationError(
            f"Unknown dispatch strategy: {name}",
            config_key="dispatch_strategy",
            suggestions=[f"Use one of: {', '.join([STRATEGY_AUTO] + sorted(STRATEGIES))}"],
        )
    if not strategy_class.is_available():
        raise DependencyMissingError(
            f"The '{name}' dispatch strategy is not available on {sys.platform}",
            suggestions=[
                f"Use --strategy {STRATEGY_BATCH}, which needs no worker threads",
                "Run under a CPython build with thread support",
            ],
        )

    kwargs = {} if timeout is None else {"timeout": timeout}
    if strategy_class is PoolDispatchStrategy:
        return PoolDispatchStrategy(RequestExecutor(**kwargs))
    return BatchDispatchStrategy(AsyncRequestExecutor(**kwargs))

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

import httpx

from ..core.config import (
    MIN_REQUEST_INTERVAL_SECONDS,
    OREF_WARMUP_URL,
    REQUEST_HEADERS,
    REQUEST_TIMEOUT_SECONDS,
)
from ..core.errors import FetchError

logger = logging.getLogger(__name__)


@dataclass
class QueuedRequest:
    method: str
    url: str
    # None for the bootstrap request, nobody awaits its result
    future: Optional[asyncio.Future] = None


class RateLimitedTransport:
    """
    Serializes all requests to the upstream host.

    Requests are queued in arrival order and sent by a single worker task, so
    at most one is in flight and consecutive request starts are at least
    ``min_interval`` seconds apart. The warm-up page is queued first on
    construction so the WAF cookies are in the shared jar before any data
    request goes out.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        warmup_url: str = OREF_WARMUP_URL,
        min_interval: float = MIN_REQUEST_INTERVAL_SECONDS,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers=REQUEST_HEADERS,
            timeout=timeout,
            follow_redirects=True,
        )
        self.warmup_url = warmup_url
        self.min_interval = min_interval
        self.timeout = timeout
        self._clock = clock
        self._sleep = sleep
        self._queue: asyncio.Queue = asyncio.Queue()
        self._worker: Optional[asyncio.Task] = None
        self._last_started: Optional[float] = None
        self.bootstrapped = False

        self._queue.put_nowait(QueuedRequest("GET", warmup_url))
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # No loop yet, the worker starts with the first request
            pass
        else:
            self._ensure_worker()

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    def _ensure_worker(self):
        if self._worker is None or self._worker.done():
            self._worker = asyncio.create_task(self._drain())
            logger.debug("Started upstream request worker")

    async def execute(self, method: str, url: str) -> httpx.Response:
        """Queue a request and wait for its response.

        Raises FetchError on timeout, network error or a non-2xx status.
        """
        self._ensure_worker()
        future = asyncio.get_running_loop().create_future()
        await self._queue.put(QueuedRequest(method, url, future))
        return await future

    async def get(self, url: str) -> httpx.Response:
        return await self.execute("GET", url)

    async def _drain(self):
        while True:
            queued = await self._queue.get()
            try:
                if queued.future is not None and queued.future.done():
                    logger.debug(f"Skipping abandoned request to {queued.url}")
                    continue
                await self._wait_for_slot()
                self._last_started = self._clock()
                await self._send(queued)
            except asyncio.CancelledError:
                if queued.future is not None and not queued.future.done():
                    queued.future.set_exception(FetchError("Transport closed", url=queued.url))
                raise
            finally:
                self._queue.task_done()

    async def _wait_for_slot(self):
        if self._last_started is None:
            return
        delay = self.min_interval - (self._clock() - self._last_started)
        if delay > 0:
            await self._sleep(delay)

    async def _send(self, queued: QueuedRequest):
        try:
            response = await self._request(queued.method, queued.url)
        except FetchError as e:
            if queued.future is None:
                logger.warning(f"Session bootstrap failed, continuing without WAF cookies: {e.message}")
            elif not queued.future.done():
                queued.future.set_exception(e)
            return
        except Exception as e:
            logger.error(f"Unexpected error requesting {queued.url}: {e}", exc_info=True)
            if queued.future is not None and not queued.future.done():
                queued.future.set_exception(e)
            return

        if queued.future is None:
            self.bootstrapped = True
            logger.info(f"Session bootstrap complete ({len(self._client.cookies)} cookies)")
        elif not queued.future.done():
            queued.future.set_result(response)

    async def _request(self, method: str, url: str) -> httpx.Response:
        try:
            response = await asyncio.wait_for(self._client.request(method, url), timeout=self.timeout)
            response.raise_for_status()
            return response
        except asyncio.TimeoutError:
            raise FetchError(f"Request to {url} timed out after {self.timeout:g}s", url=url)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 403:
                logger.warning(f"403 Forbidden from {url} (likely geo-blocked, non-Israeli IP)")
            raise FetchError(f"HTTP {status} from {url}", url=url, status_code=status) from e
        except httpx.RequestError as e:
            message = str(e) or e.__class__.__name__
            raise FetchError(f"Network error requesting {url}: {message}", url=url) from e

    async def close(self):
        """Stop the worker, fail anything still queued and close an owned client."""
        if self._worker is not None:
            self._worker.cancel()
            await asyncio.gather(self._worker, return_exceptions=True)
            self._worker = None
        while not self._queue.empty():
            queued = self._queue.get_nowait()
            if queued.future is not None and not queued.future.done():
                queued.future.set_exception(FetchError("Transport closed", url=queued.url))
        if self._owns_client:
            await self._client.aclose()

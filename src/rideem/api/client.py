# src/rideem/api/client.py

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import TypeVar
from urllib.parse import quote, urlencode

from ..config import DEFAULT_POOL_SIZE, Settings, get_settings
from ..core.models import DEFAULT_HOST, Code, opt_int
from ..core.ports import Transport
from ..transport.http import HttpTransport
from .task import Task

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class RideemClient:
    """
    rideem API client.

    All operation methods return a Task; nothing touches the network until
    the Task is executed. Run it directly off the latency-sensitive thread
    (task.get()), keep it for later, or hand it to submit() to get a Future.

    Configuration (with_host / with_key / with_executor) is chainable and
    must be finished before the client is shared between threads.
    """

    def __init__(
        self,
        key: str | None = None,
        *,
        host: str = DEFAULT_HOST,
        transport: Transport | None = None,
        executor: Executor | None = None,
        pool_size: int = DEFAULT_POOL_SIZE,
    ) -> None:
        self._host = host.rstrip("/")
        self._key = key
        self._transport: Transport = transport if transport is not None else HttpTransport()
        self._executor = executor
        self._owns_executor = False
        self._pool_size = max(1, int(pool_size))
        self._pool_lock = threading.Lock()

    # ---- construction ----

    @classmethod
    def create(cls, key: str | None = None) -> RideemClient:
        return cls(key)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, *, transport: Transport | None = None) -> RideemClient:
        """Build a client from Settings (falls back to get_settings())."""
        if settings is None:
            settings = get_settings()
        if transport is None:
            transport = HttpTransport(timeout=settings.timeout_seconds)
        return cls(
            settings.app_key,
            host=settings.host,
            transport=transport,
            pool_size=settings.pool_size,
        )

    # ---- configuration ----

    @property
    def host(self) -> str:
        return self._host

    @property
    def key(self) -> str | None:
        return self._key

    @property
    def executor(self) -> Executor | None:
        return self._executor

    def with_host(self, host: str) -> RideemClient:
        """Set the host URL including scheme, e.g. https://rideem.io."""
        self._host = host.rstrip("/")
        return self

    def with_key(self, key: str | None) -> RideemClient:
        self._key = key
        return self

    def with_executor(self, executor: Executor | None) -> RideemClient:
        """
        Replace the executor used by submit().

        A pool that submit() created itself is shut down; work already queued
        on it still runs. A caller-supplied executor is left to its owner.
        """
        with self._pool_lock:
            old, owned = self._executor, self._owns_executor
            self._executor = executor
            self._owns_executor = False
        if owned and old is not None and old is not executor:
            old.shutdown(wait=False)
        return self

    # ---- operations ----

    def from_(self, app: str, promo: str | None = None, key: str | None = None) -> Task[Code]:
        """
        Redeem a code from an app.

        - promo: the promotion name (default promotion when None)
        - key: key for a private promotion; overrides the client key
        """

        def _redeem() -> Code:
            resp = self._transport.send("GET", self.from_url(app, promo, key))
            return Code.from_payload(resp.payload)

        return Task(_redeem, Code, name=f"from:{app}")

    redeem = from_

    def from_url(self, app: str, promo: str | None = None, key: str | None = None) -> str:
        """Endpoint for from_(); an explicit key wins over the configured one."""
        k = key if key is not None else self._key
        url = f"{self._host}/rideem/from/{_segment(app)}"
        if promo is not None:
            url += f"/for/{_segment(promo)}"
        if k is not None:
            url += "?" + urlencode({"key": k})
        return url

    def request(self, app: str) -> Task[int]:
        """Post a request for an app; the task yields the current request count."""

        def _request() -> int:
            resp = self._transport.send("POST", f"{self._host}/rideem/request/{_segment(app)}")
            return opt_int(resp.payload.get("count", 0))

        return Task(_request, int, name=f"request:{app}")

    # ---- worker pool ----

    def _ensure_executor(self) -> Executor:
        with self._pool_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._pool_size,
                    thread_name_prefix="rideem",
                )
                self._owns_executor = True
                logger.debug("Worker pool created (size=%d)", self._pool_size)
            return self._executor

    def submit(self, task: Task[T]) -> Future[T]:
        """
        Run a Task in the worker pool.

        The returned Future carries either the value or the exception raised
        by the task (failures are not collapsed to defaults here).
        """
        return self._ensure_executor().submit(task.call)

    async_ = submit

    def shutdown(self, *, wait: bool = False) -> None:
        """
        Shut down the worker pool if submit() was used.

        Queued tasks are cancelled; tasks already running finish on their
        own. A later submit() creates a fresh pool.
        """
        with self._pool_lock:
            executor, self._executor = self._executor, None
            self._owns_executor = False
        if executor is None:
            return
        logger.debug("Worker pool shutting down (wait=%s)", wait)
        executor.shutdown(wait=wait, cancel_futures=True)

    def close(self) -> None:
        self.shutdown()
        self._transport.close()

    def __enter__(self) -> RideemClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

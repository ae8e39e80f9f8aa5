# src/rideem/transport/http.py

from __future__ import annotations

import json
import logging
import threading
from typing import Any

import httpx

from ..core.models import FAILURE_STATUS, Response
from ..core.ports import HttpMethod

logger = logging.getLogger(__name__)


def decode_response(status: int, body: bytes | str | None) -> Response:
    """
    Turn a raw status + body into a Response.

    - no body -> Response with that status and an empty payload
    - body that is not a JSON object (or not JSON at all) -> empty payload, 500
    """
    if body is None or len(body) == 0:
        return Response(payload={}, status=int(status))

    try:
        data: Any = json.loads(body)
    except (ValueError, RecursionError):
        # JSONDecodeError and UnicodeDecodeError are both ValueError; deep nesting recurses out.
        logger.debug("Response body is not valid JSON (status=%s)", status)
        return Response(payload={}, status=FAILURE_STATUS)

    if not isinstance(data, dict):
        logger.debug("Response body is not a JSON object (status=%s, type=%s)", status, type(data).__name__)
        return Response(payload={}, status=FAILURE_STATUS)

    return Response(payload=data, status=int(status))


class HttpTransport:
    """
    httpx-backed Transport.

    One send() is one round trip. Every httpx/OS-level failure is logged
    and reported as Response(payload={}, status=500); nothing is raised.

    The underlying httpx.Client is created lazily and shared across threads
    (httpx clients are thread-safe). An injected client is used as-is and
    is not closed by close().
    """

    def __init__(self, *, timeout: float = 10.0, client: httpx.Client | None = None) -> None:
        self._timeout = float(timeout)
        self._client = client
        self._owns_client = client is None
        self._lock = threading.Lock()

    def _get_client(self) -> httpx.Client:
        if self._client is not None:
            return self._client
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(timeout=self._timeout)
                logger.debug("HttpTransport: created httpx client (timeout=%.1fs)", self._timeout)
            return self._client

    def send(self, method: HttpMethod, url: str) -> Response:
        try:
            resp = self._get_client().request(method, url)
            body = resp.content
        except (httpx.HTTPError, OSError) as e:
            logger.warning("HTTP %s %s failed: %s", method, url, e.__class__.__name__)
            return Response(payload={}, status=FAILURE_STATUS)

        logger.debug("HTTP %s %s -> %s (%d bytes)", method, url, resp.status_code, len(body))
        return decode_response(resp.status_code, body)

    def close(self) -> None:
        if not self._owns_client:
            return
        with self._lock:
            client, self._client = self._client, None
        if client is not None:
            client.close()

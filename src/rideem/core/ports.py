# src/rideem/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the client.

Tasks depend on the Transport Protocol instead of a concrete HTTP stack.
This keeps the network layer swappable and makes testing easier.
"""

from typing import Literal, Protocol

from .models import Response

HttpMethod = Literal["GET", "POST"]


class Transport(Protocol):
    """
    Performs exactly one HTTP round trip.

    Implementations must not raise on I/O or parse failures; they report
    them as Response(payload={}, status=500).
    """

    def send(self, method: HttpMethod, url: str) -> Response: ...

    def close(self) -> None: ...

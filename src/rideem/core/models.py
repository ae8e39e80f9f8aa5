# src/rideem/core/models.py

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar

T = TypeVar("T")

DEFAULT_HOST = "https://rideem.io"

# Status reported for every transport-level failure (I/O, timeout, bad body).
FAILURE_STATUS = 500


def opt_int(value: Any, default: int = 0) -> int:
    """
    Lenient int coercion for payload fields.

    Numbers and numeric strings convert; anything else (null, objects,
    garbage) becomes `default`.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return default
    if isinstance(value, float):
        # NaN and infinities (json.loads accepts both) have no int value.
        if not math.isfinite(value):
            return default
        return int(value)
    return default


def opt_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(slots=True, frozen=True)
class Code:
    """
    A redeemable promo code.

    - code: the code value ("" when nothing was redeemed)
    - delay: seconds until the next code becomes available
    """

    code: str | None = ""
    delay: int = 1

    def empty(self) -> bool:
        return self.code is None or len(self.code) == 0

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> Code:
        """Build a Code from a decoded response; absent keys keep the defaults."""
        code = cls()
        if "code" in payload:
            code = cls(code=opt_str(payload["code"]), delay=code.delay)
        if "delay" in payload:
            code = cls(code=code.code, delay=opt_int(payload["delay"]))
        return code


@dataclass(slots=True)
class Response:
    """One decoded HTTP round trip. Failures collapse to an empty payload + 500."""

    payload: dict[str, Any] = field(default_factory=dict)
    status: int = FAILURE_STATUS

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass(slots=True, frozen=True)
class Outcome(Generic[T]):
    """
    Result of a single Task execution.

    On failure `value` holds the task's default and `error` the exception
    that was caught; callers that only want the value read `.value`.
    """

    value: T
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

# src/rideem/api/task.py

from __future__ import annotations

"""
Deferred API tasks.

Every client operation returns a Task instead of performing the call.
The caller decides where, when and how it runs:

- task.get()     blocking; failures collapse to the default value
- task.call()    blocking; failures propagate (what the worker pool runs)
- task.run()     blocking fire-and-forget, same failure policy as get()
- task.attempt() blocking; returns an Outcome with the value or the error

Tasks are not memoized: each invocation performs a fresh remote call.
"""

import logging
from typing import Callable, Generic, TypeVar

from ..core.models import Outcome

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Task(Generic[T]):
    def __init__(self, fn: Callable[[], T], default: Callable[[], T], *, name: str = "task") -> None:
        self._fn = fn
        self._default = default
        self.name = name

    def __repr__(self) -> str:
        return f"Task({self.name!r})"

    def call(self) -> T:
        """Execute once and let any failure surface to the caller."""
        return self._fn()

    __call__ = call

    def attempt(self) -> Outcome[T]:
        """Execute once; a failure is returned alongside the default value."""
        try:
            return Outcome(value=self._fn())
        except Exception as e:
            logger.debug("%s failed: %s", self.name, e, exc_info=True)
            return Outcome(value=self._default(), error=e)

    def get(self) -> T:
        """
        Execute once and return the value.

        Any failure (network, decoding, ...) yields the default value instead;
        use call() or attempt() when the error matters.
        """
        return self.attempt().value

    def run(self) -> None:
        self.attempt()

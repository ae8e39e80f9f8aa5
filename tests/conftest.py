# tests/conftest.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from rideem.api.client import RideemClient

from .fakes import FakeTransport


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def client(transport: FakeTransport):
    """
    RideemClient wired to a FakeTransport on a test host.

    The worker pool (if any test used it) is shut down afterwards.
    """
    c = RideemClient(host="http://test", transport=transport)
    yield c
    c.shutdown(wait=True)


@pytest.fixture()
def settings() -> SimpleNamespace:
    """
    Minimal settings object compatible with RideemClient.from_settings.

    A SimpleNamespace keeps tests independent of the process environment.
    """
    return SimpleNamespace(
        host="http://test",
        app_key="configured",
        timeout_seconds=1.0,
        pool_size=2,
        log_level="INFO",
        log_dir=None,
    )

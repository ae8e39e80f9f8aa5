# tests/test_client.py

from __future__ import annotations

import httpx

from rideem.api.client import RideemClient
from rideem.core.models import Code, Response
from rideem.transport.http import HttpTransport

from .fakes import FakeTransport


def test_building_tasks_performs_no_io(client, transport) -> None:
    for _ in range(5):
        client.from_("demo")
        client.from_("demo", "sale", "abc")
        client.request("demo")
    assert transport.sent == []


def test_from_urls(client, transport) -> None:
    client.from_("demo").get()
    client.from_("demo", "sale").get()
    client.from_("demo", "sale", "abc").get()

    assert transport.urls == [
        "http://test/rideem/from/demo",
        "http://test/rideem/from/demo/for/sale",
        "http://test/rideem/from/demo/for/sale?key=abc",
    ]
    assert {r.method for r in transport.sent} == {"GET"}


def test_explicit_key_overrides_configured_key(client, transport) -> None:
    client.with_key("configured")

    client.from_("demo", None, "explicit").get()
    client.from_("demo").get()

    assert transport.urls == [
        "http://test/rideem/from/demo?key=explicit",
        "http://test/rideem/from/demo?key=configured",
    ]


def test_path_segments_are_escaped(client) -> None:
    assert client.from_url("my app", "50%off", "a&b") == "http://test/rideem/from/my%20app/for/50%25off?key=a%26b"


def test_redeem_decodes_code(transport) -> None:
    transport.script.append(Response(payload={"code": "FREE-1", "delay": 60}, status=200))
    client = RideemClient(host="http://test", transport=transport)

    code = client.redeem("demo").get()
    assert code == Code(code="FREE-1", delay=60)


def test_get_is_not_memoized() -> None:
    transport = FakeTransport.returning(
        Response(payload={"code": "A"}, status=200),
        Response(payload={"code": "B"}, status=200),
    )
    task = RideemClient(host="http://test", transport=transport).from_("demo")

    assert task.get().code == "A"
    assert task.get().code == "B"
    assert len(transport.sent) == 2


def test_malformed_body_yields_default_code() -> None:
    http = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200, content=b"{oops")))
    client = RideemClient(host="http://test", transport=HttpTransport(client=http))

    code = client.from_("demo").get()
    assert code == Code()
    assert code.empty()
    assert code.delay == 1


def test_transport_exception_collapses_in_get_and_is_kept_by_attempt() -> None:
    transport = FakeTransport.returning(RuntimeError("boom"), RuntimeError("boom"))
    task = RideemClient(host="http://test", transport=transport).from_("demo")

    assert task.get() == Code()
    outcome = task.attempt()
    assert isinstance(outcome.error, RuntimeError)


def test_request_posts_and_decodes_count(client, transport) -> None:
    transport.script.extend(
        [
            Response(payload={"count": 42}, status=200),
            Response(payload={}, status=200),
        ]
    )
    task = client.request("demo")

    assert task.get() == 42
    assert task.get() == 0
    assert transport.sent[0].method == "POST"
    assert transport.urls[0] == "http://test/rideem/request/demo"


def test_configuration_chains(transport) -> None:
    client = RideemClient.create("k1")
    assert client.host == "https://rideem.io"
    assert client.key == "k1"

    same = RideemClient(transport=transport).with_host("http://other/").with_key("k2")
    assert same.host == "http://other"
    same.from_("demo").get()
    assert transport.urls == ["http://other/rideem/from/demo?key=k2"]


def test_from_settings(settings, transport) -> None:
    client = RideemClient.from_settings(settings, transport=transport)
    client.from_("demo").get()

    assert client.host == "http://test"
    assert client.key == "configured"
    assert transport.urls == ["http://test/rideem/from/demo?key=configured"]


def test_context_manager_closes_transport(transport) -> None:
    with RideemClient(host="http://test", transport=transport) as client:
        client.request("demo").get()
    assert transport.closed


def test_non_finite_count_decodes_to_zero_in_call(client, transport) -> None:
    transport.script.append(Response(payload={"count": float("inf")}, status=200))
    assert client.request("demo").call() == 0

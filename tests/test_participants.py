"""Tests for the upstream participants source."""

import httpx
import pytest

from ticketdash.errors import ConfigurationError, UpstreamError
from ticketdash.participants import UpstreamParticipants, load_records
from ticketdash.participants import records_from_payload

URL = "https://api.example.com/participants"


def make_source(handler, url=URL, token="tok"):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return UpstreamParticipants(http, url, token)


@pytest.mark.anyio
async def test_fetch_sends_bearer_token():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("authorization")
        seen["url"] = str(request.url)
        return httpx.Response(200, json={"data": [{"qty": 1}]})

    source = make_source(handler)
    assert await source.fetch() == {"data": [{"qty": 1}]}
    assert seen == {"auth": "Bearer tok", "url": URL}


@pytest.mark.anyio
@pytest.mark.parametrize("url, token", [(None, "tok"), (URL, None),
                                        ("", "")])
async def test_missing_configuration(url, token):
    def handler(request):
        raise AssertionError("must not be called")

    with pytest.raises(ConfigurationError) as exc_info:
        await make_source(handler, url=url, token=token).fetch()
    assert str(exc_info.value) == "API credentials are not configured"


@pytest.mark.anyio
async def test_not_found_is_empty():
    source = make_source(lambda request: httpx.Response(404))
    assert await source.fetch() is None
    assert await load_records(source) == []


@pytest.mark.anyio
async def test_error_status_raises():
    source = make_source(lambda request: httpx.Response(503))
    with pytest.raises(UpstreamError) as exc_info:
        await source.fetch()
    assert exc_info.value.status_code == 503
    assert "503" in str(exc_info.value)


@pytest.mark.anyio
async def test_transport_failure_raises():
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        await make_source(handler).fetch()
    assert exc_info.value.status_code is None


@pytest.mark.anyio
async def test_invalid_json_raises():
    source = make_source(
        lambda request: httpx.Response(200, content=b"<html>oops")
    )
    with pytest.raises(UpstreamError):
        await source.fetch()


@pytest.mark.parametrize("payload, expected", [
    (None, []),
    ([], []),
    ({}, []),
    ({"data": None}, []),
    ({"data": "nope"}, []),
    ({"data": {"qty": 1}}, []),
    ({"data": [{"qty": 1}]}, [{"qty": 1}]),
])
def test_records_from_payload(payload, expected):
    assert records_from_payload(payload) == expected

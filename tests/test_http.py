"""HttpClient tests against httpx.MockTransport."""

import json

import httpx
import pytest

from messenger_sdk.errors import TransportError
from messenger_sdk.transport.http import HttpClient, encode_query

URL = "https://graph.test/v1.0/me/messenger_profile"


def make_client(handler) -> HttpClient:
    return HttpClient(transport=httpx.MockTransport(handler))


def test_encode_query_flattens_values():
    params = encode_query({
        "fields": ["greeting", "get_started"],
        "locale": "default",
        "recipient": {"id": "1"},
        "skip": None,
    })
    assert params == {
        "fields": "greeting,get_started",
        "locale": "default",
        "recipient": '{"id":"1"}',
    }


@pytest.mark.asyncio
async def test_get_sends_envelope_as_query():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["params"] = dict(request.url.params)
        seen["content"] = request.content
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"data": []})

    client = make_client(handler)
    body = await client.perform(URL, "GET", "secret", {"fields": "greeting"})
    await client.close()

    assert body == {"data": []}
    assert seen["method"] == "GET"
    assert seen["params"] == {"fields": "greeting"}
    assert seen["content"] == b""
    assert seen["auth"] == "Bearer secret"


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["POST", "DELETE"])
async def test_post_and_delete_send_json_body(method):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"result": "success"})

    client = make_client(handler)
    envelope = {"fields": ["greeting"], "nested": {"a": [1, 2]}}
    body = await client.perform(URL, method, "secret", envelope)
    await client.close()

    assert body == {"result": "success"}
    assert seen["method"] == method
    assert seen["body"] == envelope
    assert seen["params"] == {}


@pytest.mark.asyncio
async def test_error_status_with_error_body_is_returned():
    error = {"error": {"message": "Invalid token", "type": "OAuthException", "code": 190}}
    client = make_client(lambda request: httpx.Response(400, json=error))
    body = await client.perform(URL, "POST", "secret", {})
    await client.close()
    assert body == error


@pytest.mark.asyncio
async def test_error_status_without_error_body_raises_transport_error():
    client = make_client(lambda request: httpx.Response(502, json={"oops": True}))
    with pytest.raises(TransportError) as exc_info:
        await client.perform(URL, "POST", "secret", {})
    await client.close()
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_malformed_body_raises_transport_error():
    client = make_client(lambda request: httpx.Response(200, text="<html>not json</html>"))
    with pytest.raises(TransportError) as exc_info:
        await client.perform(URL, "POST", "secret", {})
    await client.close()
    assert exc_info.value.status_code == 200


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(TransportError):
        await client.perform(URL, "GET", "secret", {"fields": "greeting"})
    await client.close()

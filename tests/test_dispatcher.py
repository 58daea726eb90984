"""GraphDispatcher tests."""

import pytest

from messenger_sdk.errors import RemoteApiError, TransportError
from messenger_sdk.transport.graph import Endpoint, GraphDispatcher, Method


@pytest.mark.asyncio
async def test_dispatch_builds_url_and_defaults_to_post(dispatcher, transport):
    transport.queue({"recipient_id": "1", "message_id": "m1"})

    body = await dispatcher.dispatch(Endpoint.MESSAGES, "tok", {"recipient": {"id": "1"}})

    assert body == {"recipient_id": "1", "message_id": "m1"}
    call = transport.calls[0]
    assert call.url == "https://graph.test/v1.0/me/messages"
    assert call.method == "POST"
    assert call.credential == "tok"
    assert call.envelope == {"recipient": {"id": "1"}}


@pytest.mark.asyncio
async def test_dispatch_passes_method(dispatcher, transport):
    await dispatcher.dispatch(Endpoint.MESSENGER_PROFILE, "tok", {"fields": "greeting"}, method=Method.GET)
    assert transport.calls[0].method == "GET"
    assert transport.calls[0].url == "https://graph.test/v1.0/me/messenger_profile"


@pytest.mark.asyncio
async def test_success_body_is_returned_unmodified(dispatcher, transport):
    raw = {"data": [{"greeting": [{"locale": "default", "text": "Hi"}]}], "extra": 1}
    transport.queue(raw)
    assert await dispatcher.dispatch(Endpoint.MESSENGER_PROFILE, "tok", {}, method=Method.GET) is raw


@pytest.mark.asyncio
async def test_error_body_raises_remote_api_error_verbatim(dispatcher, transport):
    transport.queue({"error": {
        "code": 100,
        "type": "OAuthException",
        "message": "Invalid token",
        "error_subcode": 0,
        "fbtrace_id": "X",
    }})

    with pytest.raises(RemoteApiError) as exc_info:
        await dispatcher.dispatch(Endpoint.MESSAGES, "tok", {})

    err = exc_info.value
    assert err.code == 100
    assert err.type == "OAuthException"
    assert err.message == "Invalid token"
    assert err.subcode == 0
    assert err.trace_id == "X"
    assert str(err) == "Invalid token"


@pytest.mark.asyncio
async def test_failures_are_not_retried(dispatcher, transport):
    transport.queue(TransportError("connection reset"), {"result": "success"})

    with pytest.raises(TransportError):
        await dispatcher.dispatch(Endpoint.MESSAGES, "tok", {})

    assert len(transport.calls) == 1


def test_base_url_trailing_slash_is_ignored(transport):
    dispatcher = GraphDispatcher(transport, base_url="https://graph.test/", graph_version="v2.0")
    assert dispatcher.url_for(Endpoint.MESSAGES) == "https://graph.test/v2.0/me/messages"

from dataclasses import dataclass
from typing import Any

import pytest

from messenger_sdk.profile import MessengerProfileAPI
from messenger_sdk.send import SendAPI
from messenger_sdk.store.reusable import AttachmentReuseCache
from messenger_sdk.transport.graph import GraphDispatcher

TOKEN = "page-token"


@dataclass
class Call:
    url: str
    method: str
    credential: str
    envelope: dict[str, Any]


class FakeTransport:
    """Records every call and answers with queued bodies (or raises queued exceptions)."""

    def __init__(self) -> None:
        self.calls: list[Call] = []
        self._responses: list[Any] = []

    def queue(self, *responses: Any) -> "FakeTransport":
        self._responses.extend(responses)
        return self

    async def perform(self, url: str, method: str, credential: str, envelope: dict[str, Any]) -> Any:
        self.calls.append(Call(url, method, credential, envelope))
        response = self._responses.pop(0) if self._responses else {"result": "success"}
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def dispatcher(transport: FakeTransport) -> GraphDispatcher:
    return GraphDispatcher(transport, base_url="https://graph.test", graph_version="v1.0")


@pytest.fixture
def profile_api(dispatcher: GraphDispatcher) -> MessengerProfileAPI:
    return MessengerProfileAPI(dispatcher, TOKEN)


@pytest.fixture
def reuse_cache() -> AttachmentReuseCache:
    return AttachmentReuseCache()


@pytest.fixture
def send_api(dispatcher: GraphDispatcher, reuse_cache: AttachmentReuseCache) -> SendAPI:
    return SendAPI(dispatcher, TOKEN, reuse_cache)

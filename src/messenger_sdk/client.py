"""
AsyncMessenger / Messenger — main SDK clients.
"""

import asyncio
import inspect
from typing import Any, Optional

import httpx

from messenger_sdk.errors import MessengerError
from messenger_sdk.profile import MessengerProfileAPI
from messenger_sdk.send import SendAPI
from messenger_sdk.store.reusable import AttachmentReuseCache, ReusableStore
from messenger_sdk.transport.graph import DEFAULT_BASE_URL, DEFAULT_GRAPH_VERSION, GraphDispatcher
from messenger_sdk.transport.http import DEFAULT_TIMEOUT_S, HttpClient


class AsyncMessenger:
    """Async Messenger Platform client (primary)."""

    def __init__(
        self,
        access_token: str,
        graph_version: str = DEFAULT_GRAPH_VERSION,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_S,
        reusable_store: Optional[ReusableStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not access_token or not access_token.strip():
            raise MessengerError("missing_access_token", "access_token is required")

        self.http = HttpClient(timeout=timeout, transport=transport)
        self.dispatcher = GraphDispatcher(self.http, base_url=base_url, graph_version=graph_version)
        self.reuse_cache = AttachmentReuseCache(reusable_store)
        self.profile = MessengerProfileAPI(self.dispatcher, access_token)
        self.send = SendAPI(self.dispatcher, access_token, self.reuse_cache)

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "AsyncMessenger":
        return self

    async def __aexit__(self, *_exc: Any) -> None:
        await self.close()


class _SyncProxy:
    """Runs the coroutine methods of an async API on the owner's loop."""

    def __init__(self, target: Any, run: Any):
        self._target = target
        self._run = run

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._target, name)
        if not inspect.iscoroutinefunction(attr):
            return attr

        def call(*args: Any, **kwargs: Any) -> Any:
            return self._run(attr(*args, **kwargs))
        return call


class Messenger:
    """Sync wrapper around AsyncMessenger. Runs the event loop internally."""

    def __init__(self, access_token: str, **kwargs: Any):
        self._async = AsyncMessenger(access_token, **kwargs)
        self._loop = asyncio.new_event_loop()
        self.profile = _SyncProxy(self._async.profile, self._run)
        self.send = _SyncProxy(self._async.send, self._run)

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def reuse_cache(self) -> AttachmentReuseCache:
        return self._async.reuse_cache

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()

    def __enter__(self) -> "Messenger":
        return self

    def __exit__(self, *_exc: Any) -> None:
        self.close()

"""
Graph API request dispatcher.

Every API surface (Send, Messenger Profile) goes through
GraphDispatcher.dispatch(). It never retries: a failed call surfaces
immediately as RemoteApiError or TransportError.
"""

import logging
from enum import Enum
from typing import Any, Protocol

from messenger_sdk.errors import RemoteApiError

DEFAULT_BASE_URL = "https://graph.facebook.com"
DEFAULT_GRAPH_VERSION = "v19.0"

logger = logging.getLogger(__name__)


class Endpoint(str, Enum):
    MESSAGES = "me/messages"
    MESSENGER_PROFILE = "me/messenger_profile"


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


class Transport(Protocol):
    async def perform(self, url: str, method: str, credential: str, envelope: dict[str, Any]) -> Any:
        ...


class GraphDispatcher:
    def __init__(
        self,
        transport: Transport,
        base_url: str = DEFAULT_BASE_URL,
        graph_version: str = DEFAULT_GRAPH_VERSION,
    ):
        self._transport = transport
        self._base_url = base_url.rstrip("/")
        self._graph_version = graph_version

    def url_for(self, endpoint: Endpoint) -> str:
        return f"{self._base_url}/{self._graph_version}/{endpoint.value}"

    async def dispatch(
        self,
        endpoint: Endpoint,
        credential: str,
        envelope: dict[str, Any],
        method: Method = Method.POST,
    ) -> Any:
        """Perform one call and return the raw decoded body.

        Raises RemoteApiError when the body carries an `error` object,
        TransportError when the exchange itself fails.
        """
        logger.debug("graph request", extra={"method": method.value, "endpoint": endpoint.value})
        body = await self._transport.perform(self.url_for(endpoint), method.value, credential, envelope)

        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            error = RemoteApiError.from_error_body(body["error"])
            logger.warning(
                "graph api error",
                extra={
                    "method": method.value,
                    "endpoint": endpoint.value,
                    "error_type": error.type,
                    "error_code": error.code,
                    "error_subcode": error.subcode,
                    "fbtrace_id": error.trace_id,
                },
            )
            raise error

        return body

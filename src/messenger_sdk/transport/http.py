"""
HTTP transport for the Graph API, built on httpx.

Sends one request and decodes the JSON body. Interpreting the body
(success payload vs. error object) is left to the dispatcher.
"""

import json
import logging
from typing import Any, Optional

import httpx

from messenger_sdk.errors import TransportError

DEFAULT_TIMEOUT_S = 30.0
USER_AGENT = "messenger-sdk/0.1.0"

logger = logging.getLogger(__name__)


def encode_query(envelope: dict[str, Any]) -> dict[str, str]:
    """Flatten an envelope into query parameters.

    Lists of plain strings become comma-separated values (`fields=a,b`),
    anything else that is not a string is JSON-encoded.
    """
    params: dict[str, str] = {}
    for key, value in envelope.items():
        if value is None:
            continue
        if isinstance(value, str):
            params[key] = value
        elif isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            params[key] = ",".join(value)
        else:
            params[key] = json.dumps(value, separators=(",", ":"))
    return params


class HttpClient:
    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_S,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @staticmethod
    def _auth_headers(credential: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {credential}"}

    async def perform(self, url: str, method: str, credential: str, envelope: dict[str, Any]) -> Any:
        """Send `envelope` to `url` and return the decoded JSON body.

        GET sends the envelope as query parameters, POST and DELETE as a
        JSON body. Error statuses are not raised here when the body is
        JSON, so the dispatcher can read the platform's error object.
        """
        headers = self._auth_headers(credential)
        try:
            if method == "GET":
                resp = await self._client.request(method, url, params=encode_query(envelope), headers=headers)
            else:
                resp = await self._client.request(method, url, json=envelope, headers=headers)
        except httpx.HTTPError as e:
            logger.debug("transport failure", extra={"method": method, "url": url, "error": type(e).__name__})
            raise TransportError(f"{method} {url} failed: {e}") from e

        try:
            body = resp.json()
        except ValueError as e:
            raise TransportError(
                f"HTTP {resp.status_code}: malformed response body: {resp.text[:200]}",
                status_code=resp.status_code,
            ) from e

        if resp.status_code >= 400 and not (isinstance(body, dict) and isinstance(body.get("error"), dict)):
            raise TransportError(f"HTTP {resp.status_code}: {resp.text[:200]}", status_code=resp.status_code)
        return body

    async def close(self) -> None:
        await self._client.aclose()

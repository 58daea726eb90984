"""
Postback payloads.

Postbacks from the persistent menu, the Get Started button, template
buttons and quick replies all carry an opaque string chosen by the bot.
The SDK encodes it as compact JSON tagged with its source so the webhook
side can tell the origins apart.
"""

import json
from enum import Enum
from typing import Any, Optional

from messenger_sdk.models.base import WireModel


class PostbackSource(str, Enum):
    PERSISTENT_MENU = "PERSISTENT_MENU"
    GET_STARTED_BUTTON = "GET_STARTED_BUTTON"
    BUTTON = "BUTTON"
    QUICK_REPLY = "QUICK_REPLY"


class PostbackPayload(WireModel):
    src: PostbackSource
    id: Optional[str] = None
    data: Optional[Any] = None

    def encode(self) -> str:
        body: dict[str, Any] = {"src": self.src.value}
        if self.id is not None:
            body["id"] = self.id
        if self.data is not None:
            body["data"] = self.data
        return json.dumps(body, separators=(",", ":"))

    @classmethod
    def decode(cls, raw: str) -> "PostbackPayload":
        return cls.model_validate(json.loads(raw))

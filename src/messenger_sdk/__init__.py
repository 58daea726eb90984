"""
messenger-sdk — Messenger Platform SDK for Python.

Typed async client for the Send API and the Messenger Profile API,
with payload builders and reuse of uploaded attachments.
"""

from messenger_sdk.client import AsyncMessenger, Messenger
from messenger_sdk.profile import MessengerProfileAPI
from messenger_sdk.send import SendAPI
from messenger_sdk.errors import MessengerError, BuilderValidationError, RemoteApiError, TransportError
from messenger_sdk.builders.persistent_menu import PersistentMenuBuilder, Menu
from messenger_sdk.builders.message import (
    ButtonTemplateBuilder,
    ElementBuilder,
    GenericTemplateBuilder,
    ListTemplateBuilder,
    MediaMessageBuilder,
    OpenGraphTemplateBuilder,
    ReceiptTemplateBuilder,
    TextMessageBuilder,
)
from messenger_sdk.store.reusable import AttachmentReuseCache, JsonFileReusableStore, MemoryReusableStore
from messenger_sdk.transport.graph import Endpoint, Method

__version__ = "0.1.0"
__all__ = [
    "AsyncMessenger",
    "Messenger",
    "MessengerProfileAPI",
    "SendAPI",
    "MessengerError",
    "BuilderValidationError",
    "RemoteApiError",
    "TransportError",
    "PersistentMenuBuilder",
    "Menu",
    "ButtonTemplateBuilder",
    "ElementBuilder",
    "GenericTemplateBuilder",
    "ListTemplateBuilder",
    "MediaMessageBuilder",
    "OpenGraphTemplateBuilder",
    "ReceiptTemplateBuilder",
    "TextMessageBuilder",
    "AttachmentReuseCache",
    "JsonFileReusableStore",
    "MemoryReusableStore",
    "Endpoint",
    "Method",
]

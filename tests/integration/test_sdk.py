"""
Integration tests for the Messenger SDK — run against the real Graph API.

Requires environment variables:
  MESSENGER_ACCESS_TOKEN    — page access token for a test page
  MESSENGER_TEST_RECIPIENT  — PSID of a user who has messaged the page
  MESSENGER_GRAPH_VERSION   — (optional) defaults to the SDK's version

Run: MESSENGER_INTEGRATION=1 pytest tests/integration/ -v
"""

import os

import pytest

from messenger_sdk import AsyncMessenger, PersistentMenuBuilder, RemoteApiError
from messenger_sdk.transport.graph import DEFAULT_GRAPH_VERSION

SKIP = not os.environ.get("MESSENGER_INTEGRATION")
ACCESS_TOKEN = os.environ.get("MESSENGER_ACCESS_TOKEN", "")
RECIPIENT = os.environ.get("MESSENGER_TEST_RECIPIENT", "")
GRAPH_VERSION = os.environ.get("MESSENGER_GRAPH_VERSION", DEFAULT_GRAPH_VERSION)

pytestmark = pytest.mark.skipif(SKIP, reason="MESSENGER_INTEGRATION not set")


def make_client() -> AsyncMessenger:
    return AsyncMessenger(access_token=ACCESS_TOKEN, graph_version=GRAPH_VERSION)


class TestAuth:
    @pytest.mark.asyncio
    async def test_rejects_invalid_token(self):
        async with AsyncMessenger(access_token="invalid", graph_version=GRAPH_VERSION) as client:
            with pytest.raises(RemoteApiError) as exc_info:
                await client.profile.get_greeting()
        assert exc_info.value.type == "OAuthException"


class TestProfile:
    @pytest.mark.asyncio
    async def test_greeting_set_get_delete(self):
        async with make_client() as client:
            await client.profile.set_greeting("Hello from the integration suite")
            greetings = await client.profile.get_greeting()
            assert greetings[0].text == "Hello from the integration suite"

            await client.profile.delete_greeting()
            assert await client.profile.get_greeting() is None

    @pytest.mark.asyncio
    async def test_persistent_menu_requires_get_started(self):
        menu = (PersistentMenuBuilder.create_menu()
                .add_postback_menu_item("Help", "help")
                .add_web_url_menu_item("Website", "https://www.facebook.com"))
        async with make_client() as client:
            await client.profile.set_get_started_button({"source": "integration"})
            await client.profile.set_persistent_menu(PersistentMenuBuilder().add_menu("default", False, menu))

            menus = await client.profile.get_persistent_menu()
            assert [item.title for item in menus[0].call_to_actions] == ["Help", "Website"]

            await client.profile.delete_persistent_menu()
            await client.profile.delete_get_started_button()


@pytest.mark.skipif(not RECIPIENT, reason="MESSENGER_TEST_RECIPIENT not set")
class TestSend:
    @pytest.mark.asyncio
    async def test_text_and_actions(self):
        async with make_client() as client:
            await client.send.typing_on(RECIPIENT)
            response = await client.send.send_text(RECIPIENT, "integration ping")
            assert response.message_id
            await client.send.typing_off(RECIPIENT)

    @pytest.mark.asyncio
    async def test_reusable_image_is_reused(self):
        url = "https://www.facebook.com/images/fb_icon_325x325.png"
        async with make_client() as client:
            first = await client.send.send_image(RECIPIENT, url, reusable=True)
            assert first
            assert client.reuse_cache.lookup(url) == first
            assert await client.send.send_image(RECIPIENT, url, reusable=True) == first

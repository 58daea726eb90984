"""
Messenger Profile API — persistent menu, Get Started button, greeting,
whitelisted domains, account linking URL, target audience, home URL.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from pydantic import TypeAdapter, ValidationError

from messenger_sdk.builders.persistent_menu import PersistentMenuBuilder
from messenger_sdk.errors import BuilderValidationError
from messenger_sdk.models.profile import (
    AudienceType,
    ChatExtensionHomeUrl,
    Countries,
    GetStartedButton,
    Greeting,
    PersistentMenu,
    ProfileField,
    TargetAudience,
)
from messenger_sdk.models.webhook import PostbackPayload, PostbackSource
from messenger_sdk.models.webview import HeightRatio, ShareButton
from messenger_sdk.transport.graph import Endpoint, GraphDispatcher, Method

logger = logging.getLogger(__name__)

_MENUS = TypeAdapter(list[PersistentMenu])
_GREETINGS = TypeAdapter(list[Greeting])


def _as_list(value: Union[str, list[str]]) -> list[str]:
    return list(value) if isinstance(value, (list, tuple)) else [value]


def _validated(adapter: TypeAdapter, value: Any, field: ProfileField) -> list[dict[str, Any]]:
    """Validate `value` into wire dicts, reporting failures as BuilderValidationError."""
    try:
        return [item.to_wire() for item in adapter.validate_python(value)]
    except ValidationError as e:
        raise BuilderValidationError(
            f"invalid {field.value}: {e.error_count()} validation error(s)",
            details={"field": field.value, "errors": e.errors()},
        ) from e


class MessengerProfileAPI:
    def __init__(self, dispatcher: GraphDispatcher, access_token: str):
        self._dispatcher = dispatcher
        self._access_token = access_token

    # Get Started button

    async def set_get_started_button(self, data: Any = None) -> None:
        payload = PostbackPayload(src=PostbackSource.GET_STARTED_BUTTON, data=data)
        await self.set_field(ProfileField.GET_STARTED_BUTTON, GetStartedButton(payload=payload.encode()).to_wire())

    async def get_get_started_button(self) -> Optional[GetStartedButton]:
        raw = await self.get_field(ProfileField.GET_STARTED_BUTTON)
        return GetStartedButton.model_validate(raw) if raw is not None else None

    async def delete_get_started_button(self) -> None:
        await self.delete_fields([ProfileField.GET_STARTED_BUTTON])

    # Greeting

    async def set_greeting(self, greeting: Union[str, Greeting, list[Greeting]]) -> None:
        """Set the greeting; a plain string becomes the default-locale greeting."""
        if isinstance(greeting, str):
            greetings = [{"locale": "default", "text": greeting}]
        elif isinstance(greeting, Greeting):
            greetings = [greeting]
        else:
            greetings = list(greeting)
        await self.set_field(ProfileField.GREETING, _validated(_GREETINGS, greetings, ProfileField.GREETING))

    async def get_greeting(self) -> Optional[list[Greeting]]:
        raw = await self.get_field(ProfileField.GREETING)
        return _GREETINGS.validate_python(raw) if raw is not None else None

    async def delete_greeting(self) -> None:
        await self.delete_fields([ProfileField.GREETING])

    # Persistent menu

    async def set_persistent_menu(
        self, menu: Union[PersistentMenu, list[PersistentMenu], PersistentMenuBuilder],
    ) -> None:
        """Install the persistent menu. The Get Started button must be set first."""
        if isinstance(menu, PersistentMenuBuilder):
            menus = menu.build()
        elif isinstance(menu, PersistentMenu):
            menus = [menu]
        else:
            menus = list(menu)
        await self.set_field(ProfileField.PERSISTENT_MENU, _validated(_MENUS, menus, ProfileField.PERSISTENT_MENU))

    async def get_persistent_menu(self) -> Optional[list[PersistentMenu]]:
        raw = await self.get_field(ProfileField.PERSISTENT_MENU)
        return _MENUS.validate_python(raw) if raw is not None else None

    async def delete_persistent_menu(self) -> None:
        await self.delete_fields([ProfileField.PERSISTENT_MENU])

    # Whitelisted domains

    async def whitelist_domains(self, domains: Union[str, list[str]]) -> None:
        await self.set_field(ProfileField.DOMAIN_WHITELIST, _as_list(domains))

    async def get_whitelisted_domains(self) -> Optional[list[str]]:
        return await self.get_field(ProfileField.DOMAIN_WHITELIST)

    async def delete_domain_whitelist(self) -> None:
        await self.delete_fields([ProfileField.DOMAIN_WHITELIST])

    # Account linking URL

    async def set_account_linking_url(self, url: str) -> None:
        await self.set_field(ProfileField.ACCOUNT_LINKING_URL, url)

    async def get_account_linking_url(self) -> Optional[str]:
        return await self.get_field(ProfileField.ACCOUNT_LINKING_URL)

    async def delete_account_linking_url(self) -> None:
        await self.delete_fields([ProfileField.ACCOUNT_LINKING_URL])

    # Target audience

    async def whitelist_audience_countries(self, countries: Union[str, list[str]]) -> None:
        """Restrict the audience to the given ISO 3166 Alpha-2 country codes."""
        audience = TargetAudience(audience_type=AudienceType.CUSTOM, countries=Countries(whitelist=_as_list(countries)))
        await self.set_field(ProfileField.TARGET_AUDIENCE, audience.to_wire())

    async def blacklist_audience_countries(self, countries: Union[str, list[str]]) -> None:
        audience = TargetAudience(audience_type=AudienceType.CUSTOM, countries=Countries(blacklist=_as_list(countries)))
        await self.set_field(ProfileField.TARGET_AUDIENCE, audience.to_wire())

    async def open_audience_to_all(self) -> None:
        await self.set_field(ProfileField.TARGET_AUDIENCE, TargetAudience(audience_type=AudienceType.ALL).to_wire())

    async def close_audience_to_all(self) -> None:
        await self.set_field(ProfileField.TARGET_AUDIENCE, TargetAudience(audience_type=AudienceType.NONE).to_wire())

    async def get_target_audience(self) -> Optional[TargetAudience]:
        raw = await self.get_field(ProfileField.TARGET_AUDIENCE)
        return TargetAudience.model_validate(raw) if raw is not None else None

    async def delete_audience(self) -> None:
        await self.delete_fields([ProfileField.TARGET_AUDIENCE])

    # Chat extension home URL

    async def set_chat_extension_home_url(self, url: str, in_test: bool = False, share_button: bool = True) -> None:
        """Set the Chat Extension home URL. Its domain must be whitelisted.

        Keep `in_test` True until the extension is ready for users outside
        the page's roles.
        """
        home_url = ChatExtensionHomeUrl(
            url=url,
            webview_height_ratio=HeightRatio.TALL,
            webview_share_button=ShareButton.SHOW if share_button else ShareButton.HIDE,
            in_test=in_test,
        )
        await self.set_field(ProfileField.CHAT_EXTENSION_HOME_URL, home_url.to_wire())

    async def get_chat_extension_home_url(self) -> Optional[ChatExtensionHomeUrl]:
        raw = await self.get_field(ProfileField.CHAT_EXTENSION_HOME_URL)
        return ChatExtensionHomeUrl.model_validate(raw) if raw is not None else None

    async def delete_chat_extension_home_url(self) -> None:
        await self.delete_fields([ProfileField.CHAT_EXTENSION_HOME_URL])

    # Raw field access

    async def set_field(self, field: ProfileField, value: Any) -> None:
        logger.debug("setting profile field", extra={"field": field.value})
        await self._dispatcher.dispatch(Endpoint.MESSENGER_PROFILE, self._access_token, {field.value: value})
        logger.debug("profile field set", extra={"field": field.value})

    async def get_field(self, field: ProfileField) -> Any:
        """Current value of `field`, or None when it is not set."""
        logger.debug("reading profile field", extra={"field": field.value})
        body = await self._dispatcher.dispatch(
            Endpoint.MESSENGER_PROFILE, self._access_token, {"fields": field.value}, method=Method.GET,
        )
        data = body.get("data") if isinstance(body, dict) else None
        if not data:
            return None
        return data[0].get(field.value)

    async def delete_fields(self, fields: list[ProfileField]) -> None:
        logger.debug("deleting profile fields", extra={"fields": [f.value for f in fields]})
        await self._dispatcher.dispatch(
            Endpoint.MESSENGER_PROFILE,
            self._access_token,
            {"fields": [f.value for f in fields]},
            method=Method.DELETE,
        )

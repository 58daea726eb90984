"""
Messenger Profile models — persistent menu, greeting, Get Started button,
target audience and chat extension home URL.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import Field, model_validator

from messenger_sdk.errors import BuilderValidationError
from messenger_sdk.models.base import WireModel
from messenger_sdk.models.webview import HeightRatio, ShareButton, WebviewDecorations


class ProfileField(str, Enum):
    PERSISTENT_MENU = "persistent_menu"
    GET_STARTED_BUTTON = "get_started"
    GREETING = "greeting"
    DOMAIN_WHITELIST = "whitelisted_domains"
    ACCOUNT_LINKING_URL = "account_linking_url"
    TARGET_AUDIENCE = "target_audience"
    CHAT_EXTENSION_HOME_URL = "home_url"


class MenuItemType(str, Enum):
    WEB_URL = "web_url"
    POSTBACK = "postback"
    NESTED = "nested"


class WebUrlMenuItem(WebviewDecorations):
    type: Literal["web_url"] = "web_url"
    title: str
    url: str


class PostbackMenuItem(WebviewDecorations):
    type: Literal["postback"] = "postback"
    title: str
    payload: str


class NestedMenuItem(WebviewDecorations):
    type: Literal["nested"] = "nested"
    title: str
    call_to_actions: list[MenuItem]


MenuItem = Annotated[
    Union[WebUrlMenuItem, PostbackMenuItem, NestedMenuItem],
    Field(discriminator="type"),
]

NestedMenuItem.model_rebuild()


class PersistentMenu(WireModel):
    locale: str = "default"
    composer_input_disabled: bool = False
    call_to_actions: Optional[list[MenuItem]] = None

    @model_validator(mode="after")
    def _actions_required_when_composer_disabled(self) -> PersistentMenu:
        if self.composer_input_disabled and not self.call_to_actions:
            raise BuilderValidationError(
                "at least one menu item is required when composer input is disabled",
                details={"locale": self.locale},
            )
        return self


class GetStartedButton(WireModel):
    payload: str


class GreetingPlaceholder(str, Enum):
    """Personalization tokens, written into greeting text as `{{user_first_name}}`."""

    FIRST_NAME = "user_first_name"
    LAST_NAME = "user_last_name"
    FULL_NAME = "user_full_name"

    @property
    def token(self) -> str:
        return "{{" + self.value + "}}"


class Greeting(WireModel):
    locale: str = "default"
    text: str = Field(max_length=160)


class AudienceType(str, Enum):
    ALL = "all"
    CUSTOM = "custom"
    NONE = "none"


class Countries(WireModel):
    whitelist: Optional[list[str]] = None  # ISO 3166 Alpha-2 codes
    blacklist: Optional[list[str]] = None


class TargetAudience(WireModel):
    audience_type: AudienceType
    countries: Optional[Countries] = None


class ChatExtensionHomeUrl(WireModel):
    url: str
    webview_height_ratio: HeightRatio = HeightRatio.TALL
    webview_share_button: ShareButton = ShareButton.SHOW
    in_test: bool = False

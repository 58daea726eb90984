"""
Persistent menu builder.

    menu = (PersistentMenuBuilder.create_menu()
            .add_postback_menu_item("Help", "help", {"topic": "start"})
            .add_web_url_menu_item("Website", "https://example.com"))
    menus = PersistentMenuBuilder().add_menu("default", False, menu).build()
"""

from typing import Any, Optional

from messenger_sdk.builders.base import Builder
from messenger_sdk.errors import BuilderValidationError
from messenger_sdk.models.profile import (
    MenuItem,
    NestedMenuItem,
    PersistentMenu,
    PostbackMenuItem,
    WebUrlMenuItem,
)
from messenger_sdk.models.webhook import PostbackPayload, PostbackSource
from messenger_sdk.models.webview import HeightRatio, webview_decorations


class Menu:
    """Ordered list of menu items for one locale, or for a submenu."""

    def __init__(self) -> None:
        self._actions: list[MenuItem] = []

    def get_actions(self) -> list[MenuItem]:
        return list(self._actions)

    def add_web_url_menu_item(
        self,
        title: str,
        url: str,
        webview_height_ratio: Optional[HeightRatio] = None,
        messenger_extensions: Optional[bool] = None,
        share_button: Optional[bool] = None,
        fallback_url: Optional[str] = None,
    ) -> "Menu":
        self._actions.append(WebUrlMenuItem(
            title=title,
            url=url,
            **webview_decorations(webview_height_ratio, messenger_extensions, share_button, fallback_url),
        ))
        return self

    def add_postback_menu_item(
        self,
        title: str,
        id: str,
        data: Any = None,
        webview_height_ratio: Optional[HeightRatio] = None,
        messenger_extensions: Optional[bool] = None,
        share_button: Optional[bool] = None,
        fallback_url: Optional[str] = None,
    ) -> "Menu":
        payload = PostbackPayload(src=PostbackSource.PERSISTENT_MENU, id=id, data=data)
        self._actions.append(PostbackMenuItem(
            title=title,
            payload=payload.encode(),
            **webview_decorations(webview_height_ratio, messenger_extensions, share_button, fallback_url),
        ))
        return self

    def add_submenu(self, title: str, submenu: "Menu") -> "Menu":
        self._actions.append(NestedMenuItem(
            title=title,
            call_to_actions=submenu.get_actions(),
            **webview_decorations(),
        ))
        return self


class PersistentMenuBuilder(Builder[list[PersistentMenu]]):
    def __init__(self) -> None:
        self._menus: list[PersistentMenu] = []

    @staticmethod
    def _check_menu(locale: str, composer_input_disabled: bool, actions: list[MenuItem]) -> None:
        if composer_input_disabled and not actions:
            raise BuilderValidationError(
                "at least one menu item must be added when composer input is disabled",
                details={"locale": locale},
            )

    def add_menu(self, locale: str, composer_input_disabled: bool, menu: Menu) -> "PersistentMenuBuilder":
        """Add the menu shown for `locale`. Fails right away if the menu is unusable."""
        actions = menu.get_actions()
        self._check_menu(locale, composer_input_disabled, actions)
        self._menus.append(PersistentMenu(
            locale=locale,
            composer_input_disabled=composer_input_disabled,
            call_to_actions=actions,
        ))
        return self

    def build(self) -> list[PersistentMenu]:
        return list(self._menus)

    @staticmethod
    def create_menu() -> Menu:
        return Menu()

"""
Webview settings shared by menu items, URL buttons and default actions.
"""

from enum import Enum
from typing import Optional

from messenger_sdk.models.base import WireModel


class HeightRatio(str, Enum):
    COMPACT = "compact"
    TALL = "tall"
    FULL = "full"


class ShareButton(str, Enum):
    SHOW = "show"
    HIDE = "hide"


class WebviewDecorations(WireModel):
    webview_height_ratio: Optional[HeightRatio] = None
    messenger_extensions: Optional[bool] = None
    fallback_url: Optional[str] = None
    webview_share_button: Optional[ShareButton] = None


def webview_decorations(
    webview_height_ratio: Optional[HeightRatio] = None,
    messenger_extensions: Optional[bool] = None,
    share_button: Optional[bool] = None,
    fallback_url: Optional[str] = None,
) -> dict[str, object]:
    """Keyword arguments for a WebviewDecorations subclass.

    Only values the caller supplied are set, except the share button,
    which is shown unless `share_button` is explicitly False.
    """
    fields: dict[str, object] = {
        "webview_share_button": ShareButton.HIDE if share_button is False else ShareButton.SHOW,
    }
    if webview_height_ratio is not None:
        fields["webview_height_ratio"] = webview_height_ratio
    if messenger_extensions is not None:
        fields["messenger_extensions"] = messenger_extensions
    if fallback_url is not None:
        fields["fallback_url"] = fallback_url
    return fields

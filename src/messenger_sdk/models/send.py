"""
Send API models — messages, attachments, templates, buttons and quick replies.

Every union is closed and discriminated by its wire field (`type`,
`template_type` or `content_type`), so a parsed Message always resolves to
exactly one variant.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Field, model_validator

from messenger_sdk.errors import BuilderValidationError
from messenger_sdk.models.base import WireModel
from messenger_sdk.models.webview import WebviewDecorations


class SenderAction(str, Enum):
    TYPING_ON = "typing_on"
    TYPING_OFF = "typing_off"
    MARK_SEEN = "mark_seen"


class NotificationType(str, Enum):
    REGULAR = "REGULAR"
    SILENT_PUSH = "SILENT_PUSH"
    NO_PUSH = "NO_PUSH"


class Tag(str, Enum):
    SHIPPING_UPDATE = "SHIPPING_UPDATE"
    RESERVATION_UPDATE = "RESERVATION_UPDATE"
    ISSUE_RESOLUTION = "ISSUE_RESOLUTION"


# Buttons

class ButtonType(str, Enum):
    WEB_URL = "web_url"
    POSTBACK = "postback"
    CALL = "phone_number"
    SHARE = "element_share"
    LOGIN = "account_link"
    LOGOUT = "account_unlink"


class UrlButton(WebviewDecorations):
    type: Literal["web_url"] = "web_url"
    title: str
    url: str


class PostbackButton(WireModel):
    type: Literal["postback"] = "postback"
    title: str
    payload: str


class CallButton(WireModel):
    type: Literal["phone_number"] = "phone_number"
    title: str
    payload: str  # phone number, "+" prefixed


class ElementShareButton(WireModel):
    type: Literal["element_share"] = "element_share"
    share_contents: Optional[dict[str, Any]] = None


class LoginButton(WireModel):
    type: Literal["account_link"] = "account_link"
    url: str


class LogoutButton(WireModel):
    type: Literal["account_unlink"] = "account_unlink"


Button = Annotated[
    Union[UrlButton, PostbackButton, CallButton, ElementShareButton, LoginButton, LogoutButton],
    Field(discriminator="type"),
]


# Template parts

class DefaultAction(WebviewDecorations):
    type: Literal["web_url"] = "web_url"
    url: str


class Element(WireModel):
    title: str
    subtitle: Optional[str] = None
    image_url: Optional[str] = None
    default_action: Optional[DefaultAction] = None
    buttons: Optional[list[Button]] = None


class OpenGraphElement(WireModel):
    url: str
    buttons: Optional[list[Button]] = None


class ReceiptElement(WireModel):
    title: str
    subtitle: Optional[str] = None
    quantity: Optional[int] = None
    price: float
    currency: Optional[str] = None
    image_url: Optional[str] = None


class Address(WireModel):
    street_1: str
    street_2: Optional[str] = None
    city: str
    postal_code: str
    state: str
    country: str


class PaymentSummary(WireModel):
    subtotal: Optional[float] = None
    shipping_cost: Optional[float] = None
    total_tax: Optional[float] = None
    total_cost: float


class PaymentAdjustment(WireModel):
    name: str
    amount: float


class ImageAspectRatio(str, Enum):
    HORIZONTAL = "horizontal"
    SQUARE = "square"


class ListTopElementStyle(str, Enum):
    LARGE = "large"
    COMPACT = "compact"


# Templates

class TemplateType(str, Enum):
    GENERIC = "generic"
    BUTTON = "button"
    LIST = "list"
    OPEN_GRAPH = "open_graph"
    RECEIPT = "receipt"


class GenericTemplate(WireModel):
    template_type: Literal["generic"] = "generic"
    sharable: Optional[bool] = None
    image_aspect_ratio: Optional[ImageAspectRatio] = None
    elements: list[Element]


class ButtonTemplate(WireModel):
    template_type: Literal["button"] = "button"
    text: str
    buttons: list[Button]


class ListTemplate(WireModel):
    template_type: Literal["list"] = "list"
    top_element_style: Optional[ListTopElementStyle] = None
    elements: list[Element]
    buttons: Optional[list[Button]] = None


class OpenGraphTemplate(WireModel):
    template_type: Literal["open_graph"] = "open_graph"
    elements: list[OpenGraphElement]


class ReceiptTemplate(WireModel):
    template_type: Literal["receipt"] = "receipt"
    sharable: Optional[bool] = None
    recipient_name: str
    merchant_name: Optional[str] = None
    order_number: str
    currency: str
    payment_method: str
    timestamp: Optional[str] = None
    order_url: Optional[str] = None
    elements: Optional[list[ReceiptElement]] = None
    address: Optional[Address] = None
    summary: PaymentSummary
    adjustments: Optional[list[PaymentAdjustment]] = None


Template = Annotated[
    Union[GenericTemplate, ButtonTemplate, ListTemplate, OpenGraphTemplate, ReceiptTemplate],
    Field(discriminator="template_type"),
]


# Attachments

class AttachmentType(str, Enum):
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    FILE = "file"
    TEMPLATE = "template"


MEDIA_ATTACHMENT_TYPES = (AttachmentType.IMAGE, AttachmentType.AUDIO, AttachmentType.VIDEO, AttachmentType.FILE)


class MediaPayload(WireModel):
    """Either a source URL (optionally marked reusable) or a saved attachment id."""

    url: Optional[str] = None
    is_reusable: Optional[bool] = None
    attachment_id: Optional[str] = None

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "MediaPayload":
        if (self.url is None) == (self.attachment_id is None):
            raise BuilderValidationError("exactly one of url or attachment_id is required")
        return self


class ImageAttachment(WireModel):
    type: Literal["image"] = "image"
    payload: MediaPayload


class AudioAttachment(WireModel):
    type: Literal["audio"] = "audio"
    payload: MediaPayload


class VideoAttachment(WireModel):
    type: Literal["video"] = "video"
    payload: MediaPayload


class FileAttachment(WireModel):
    type: Literal["file"] = "file"
    payload: MediaPayload


class TemplateAttachment(WireModel):
    type: Literal["template"] = "template"
    payload: Template


Attachment = Annotated[
    Union[ImageAttachment, AudioAttachment, VideoAttachment, FileAttachment, TemplateAttachment],
    Field(discriminator="type"),
]

_MEDIA_ATTACHMENTS = {
    AttachmentType.IMAGE: ImageAttachment,
    AttachmentType.AUDIO: AudioAttachment,
    AttachmentType.VIDEO: VideoAttachment,
    AttachmentType.FILE: FileAttachment,
}


def media_attachment(
    type: AttachmentType,
    url: Optional[str] = None,
    reusable: Optional[bool] = None,
    attachment_id: Optional[str] = None,
) -> Union[ImageAttachment, AudioAttachment, VideoAttachment, FileAttachment]:
    if type not in _MEDIA_ATTACHMENTS:
        raise ValueError(f"not a media attachment type: {type!r}")
    if attachment_id is not None:
        payload = MediaPayload(attachment_id=attachment_id)
    else:
        payload = MediaPayload(url=url, is_reusable=reusable)
    return _MEDIA_ATTACHMENTS[type](payload=payload)


# Quick replies

class ContentType(str, Enum):
    TEXT = "text"
    LOCATION = "location"


class TextQuickReply(WireModel):
    content_type: Literal["text"] = "text"
    title: str
    payload: str
    image_url: Optional[str] = None


class LocationQuickReply(WireModel):
    content_type: Literal["location"] = "location"


QuickReply = Annotated[
    Union[TextQuickReply, LocationQuickReply],
    Field(discriminator="content_type"),
]


# Messages

class TextMessage(WireModel):
    text: str
    quick_replies: Optional[list[QuickReply]] = None
    metadata: Optional[str] = None


class AttachmentMessage(WireModel):
    attachment: Attachment
    quick_replies: Optional[list[QuickReply]] = None
    metadata: Optional[str] = None


Message = Union[TextMessage, AttachmentMessage]


class SendResponse(WireModel):
    recipient_id: Optional[str] = None
    message_id: Optional[str] = None
    attachment_id: Optional[str] = None

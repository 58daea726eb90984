"""
Message builders — text, media and the five template kinds, each with
optional quick replies and metadata.

    message = (ButtonTemplateBuilder("Pick one")
               .add_postback_button("Yes", "answer", {"value": True})
               .add_url_button("Read more", "https://example.com")
               .add_text_quick_reply("Later", "later")
               .build())
"""

from abc import abstractmethod
from typing import Any, Optional, Union

from messenger_sdk.builders.base import Builder
from messenger_sdk.errors import BuilderValidationError
from messenger_sdk.models.send import (
    Address,
    Attachment,
    AttachmentMessage,
    AttachmentType,
    Button,
    ButtonTemplate,
    CallButton,
    DefaultAction,
    Element,
    ElementShareButton,
    GenericTemplate,
    ImageAspectRatio,
    ListTemplate,
    ListTopElementStyle,
    LocationQuickReply,
    LoginButton,
    LogoutButton,
    Message,
    OpenGraphElement,
    OpenGraphTemplate,
    PaymentAdjustment,
    PaymentSummary,
    PostbackButton,
    QuickReply,
    ReceiptElement,
    ReceiptTemplate,
    Template,
    TemplateAttachment,
    TextMessage,
    TextQuickReply,
    UrlButton,
    media_attachment,
)
from messenger_sdk.models.webhook import PostbackPayload, PostbackSource
from messenger_sdk.models.webview import HeightRatio, webview_decorations

MAX_QUICK_REPLIES = 11
MAX_ELEMENT_BUTTONS = 3
MAX_TEMPLATE_BUTTONS = 3
MAX_GENERIC_ELEMENTS = 10
MIN_LIST_ELEMENTS = 2
MAX_LIST_ELEMENTS = 4
MAX_LIST_BUTTONS = 1


class ButtonsMixin:
    """Button accumulation shared by elements and button-carrying templates."""

    _max_buttons: int = MAX_ELEMENT_BUTTONS
    _buttons: list[Button]

    def _add_button(self, button: Button) -> Any:
        if len(self._buttons) >= self._max_buttons:
            raise BuilderValidationError(
                f"{type(self).__name__} accepts at most {self._max_buttons} buttons",
                details={"max_buttons": self._max_buttons},
            )
        self._buttons.append(button)
        return self

    def _built_buttons(self) -> Optional[list[Button]]:
        return list(self._buttons) if self._buttons else None

    def add_url_button(
        self,
        title: str,
        url: str,
        webview_height_ratio: Optional[HeightRatio] = None,
        messenger_extensions: Optional[bool] = None,
        share_button: Optional[bool] = None,
        fallback_url: Optional[str] = None,
    ) -> Any:
        return self._add_button(UrlButton(
            title=title,
            url=url,
            **webview_decorations(webview_height_ratio, messenger_extensions, share_button, fallback_url),
        ))

    def add_postback_button(self, title: str, id: str, data: Any = None) -> Any:
        payload = PostbackPayload(src=PostbackSource.BUTTON, id=id, data=data)
        return self._add_button(PostbackButton(title=title, payload=payload.encode()))

    def add_call_button(self, title: str, phone_number: str) -> Any:
        return self._add_button(CallButton(title=title, payload=phone_number))

    def add_share_button(self, share_contents: Optional[dict[str, Any]] = None) -> Any:
        return self._add_button(ElementShareButton(share_contents=share_contents))

    def add_login_button(self, url: str) -> Any:
        return self._add_button(LoginButton(url=url))

    def add_logout_button(self) -> Any:
        return self._add_button(LogoutButton())


class ElementBuilder(ButtonsMixin, Builder[Element]):
    """One element of a generic or list template."""

    def __init__(self, title: str, subtitle: Optional[str] = None, image_url: Optional[str] = None):
        self._title = title
        self._subtitle = subtitle
        self._image_url = image_url
        self._default_action: Optional[DefaultAction] = None
        self._buttons: list[Button] = []

    def set_default_action(
        self,
        url: str,
        webview_height_ratio: Optional[HeightRatio] = None,
        messenger_extensions: Optional[bool] = None,
        share_button: Optional[bool] = None,
        fallback_url: Optional[str] = None,
    ) -> "ElementBuilder":
        self._default_action = DefaultAction(
            url=url,
            **webview_decorations(webview_height_ratio, messenger_extensions, share_button, fallback_url),
        )
        return self

    def build(self) -> Element:
        return Element(
            title=self._title,
            subtitle=self._subtitle,
            image_url=self._image_url,
            default_action=self._default_action,
            buttons=self._built_buttons(),
        )


class MessageBuilder(Builder[Message]):
    def __init__(self) -> None:
        self._quick_replies: list[QuickReply] = []
        self._metadata: Optional[str] = None

    def _add_quick_reply(self, quick_reply: QuickReply) -> "MessageBuilder":
        if len(self._quick_replies) >= MAX_QUICK_REPLIES:
            raise BuilderValidationError(f"a message accepts at most {MAX_QUICK_REPLIES} quick replies")
        self._quick_replies.append(quick_reply)
        return self

    def add_text_quick_reply(self, title: str, id: str, data: Any = None, image_url: Optional[str] = None) -> Any:
        payload = PostbackPayload(src=PostbackSource.QUICK_REPLY, id=id, data=data)
        return self._add_quick_reply(TextQuickReply(title=title, payload=payload.encode(), image_url=image_url))

    def add_location_quick_reply(self) -> Any:
        return self._add_quick_reply(LocationQuickReply())

    def set_metadata(self, metadata: str) -> Any:
        self._metadata = metadata
        return self

    def _decorations(self) -> dict[str, Any]:
        return {
            "quick_replies": list(self._quick_replies) if self._quick_replies else None,
            "metadata": self._metadata,
        }


class TextMessageBuilder(MessageBuilder):
    def __init__(self, text: str):
        super().__init__()
        self._text = text

    def build(self) -> TextMessage:
        return TextMessage(text=self._text, **self._decorations())


class AttachmentMessageBuilder(MessageBuilder):
    @abstractmethod
    def _build_attachment(self) -> Attachment:
        ...

    def build(self) -> AttachmentMessage:
        return AttachmentMessage(attachment=self._build_attachment(), **self._decorations())


class MediaMessageBuilder(AttachmentMessageBuilder):
    """Image, audio, video or file, given by URL or by a saved attachment id."""

    def __init__(
        self,
        type: AttachmentType,
        url: Optional[str] = None,
        reusable: bool = False,
        attachment_id: Optional[str] = None,
    ):
        super().__init__()
        if (url is None) == (attachment_id is None):
            raise BuilderValidationError("exactly one of url or attachment_id is required")
        if type == AttachmentType.TEMPLATE:
            raise BuilderValidationError("use a template builder for template attachments")
        self._type = type
        self._url = url
        self._reusable = reusable
        self._attachment_id = attachment_id

    def _build_attachment(self) -> Attachment:
        if self._attachment_id is not None:
            return media_attachment(self._type, attachment_id=self._attachment_id)
        return media_attachment(self._type, url=self._url, reusable=self._reusable)


class TemplateMessageBuilder(AttachmentMessageBuilder):
    @abstractmethod
    def build_template(self) -> Template:
        ...

    def _build_attachment(self) -> Attachment:
        return TemplateAttachment(payload=self.build_template())


def _element(element: Union[Element, ElementBuilder]) -> Element:
    return element.build() if isinstance(element, ElementBuilder) else element


class GenericTemplateBuilder(TemplateMessageBuilder):
    def __init__(self, sharable: Optional[bool] = None, image_aspect_ratio: Optional[ImageAspectRatio] = None):
        super().__init__()
        self._sharable = sharable
        self._image_aspect_ratio = image_aspect_ratio
        self._elements: list[Element] = []

    def add_element(self, element: Union[Element, ElementBuilder]) -> "GenericTemplateBuilder":
        if len(self._elements) >= MAX_GENERIC_ELEMENTS:
            raise BuilderValidationError(f"a generic template accepts at most {MAX_GENERIC_ELEMENTS} elements")
        self._elements.append(_element(element))
        return self

    def build_template(self) -> GenericTemplate:
        if not self._elements:
            raise BuilderValidationError("a generic template needs at least one element")
        return GenericTemplate(
            sharable=self._sharable,
            image_aspect_ratio=self._image_aspect_ratio,
            elements=list(self._elements),
        )


class ButtonTemplateBuilder(ButtonsMixin, TemplateMessageBuilder):
    _max_buttons = MAX_TEMPLATE_BUTTONS

    def __init__(self, text: str):
        super().__init__()
        self._text = text
        self._buttons: list[Button] = []

    def build_template(self) -> ButtonTemplate:
        if not self._buttons:
            raise BuilderValidationError("a button template needs at least one button")
        return ButtonTemplate(text=self._text, buttons=list(self._buttons))


class ListTemplateBuilder(ButtonsMixin, TemplateMessageBuilder):
    _max_buttons = MAX_LIST_BUTTONS

    def __init__(self, top_element_style: Optional[ListTopElementStyle] = None):
        super().__init__()
        self._top_element_style = top_element_style
        self._elements: list[Element] = []
        self._buttons: list[Button] = []

    def add_element(self, element: Union[Element, ElementBuilder]) -> "ListTemplateBuilder":
        if len(self._elements) >= MAX_LIST_ELEMENTS:
            raise BuilderValidationError(f"a list template accepts at most {MAX_LIST_ELEMENTS} elements")
        self._elements.append(_element(element))
        return self

    def build_template(self) -> ListTemplate:
        if len(self._elements) < MIN_LIST_ELEMENTS:
            raise BuilderValidationError(f"a list template needs at least {MIN_LIST_ELEMENTS} elements")
        return ListTemplate(
            top_element_style=self._top_element_style,
            elements=list(self._elements),
            buttons=self._built_buttons(),
        )


class OpenGraphTemplateBuilder(TemplateMessageBuilder):
    def __init__(self) -> None:
        super().__init__()
        self._elements: list[OpenGraphElement] = []

    def add_element(self, url: str, buttons: Optional[list[Button]] = None) -> "OpenGraphTemplateBuilder":
        self._elements.append(OpenGraphElement(url=url, buttons=list(buttons) if buttons else None))
        return self

    def build_template(self) -> OpenGraphTemplate:
        if not self._elements:
            raise BuilderValidationError("an open graph template needs at least one element")
        return OpenGraphTemplate(elements=list(self._elements))


class ReceiptTemplateBuilder(TemplateMessageBuilder):
    def __init__(
        self,
        recipient_name: str,
        order_number: str,
        currency: str,
        payment_method: str,
        merchant_name: Optional[str] = None,
        timestamp: Optional[str] = None,
        order_url: Optional[str] = None,
        sharable: Optional[bool] = None,
    ):
        super().__init__()
        self._header = {
            "recipient_name": recipient_name,
            "order_number": order_number,
            "currency": currency,
            "payment_method": payment_method,
            "merchant_name": merchant_name,
            "timestamp": timestamp,
            "order_url": order_url,
            "sharable": sharable,
        }
        self._elements: list[ReceiptElement] = []
        self._adjustments: list[PaymentAdjustment] = []
        self._address: Optional[Address] = None
        self._summary: Optional[PaymentSummary] = None

    def add_element(
        self,
        title: str,
        price: float,
        subtitle: Optional[str] = None,
        quantity: Optional[int] = None,
        currency: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> "ReceiptTemplateBuilder":
        self._elements.append(ReceiptElement(
            title=title, price=price, subtitle=subtitle,
            quantity=quantity, currency=currency, image_url=image_url,
        ))
        return self

    def set_address(
        self,
        street_1: str,
        city: str,
        postal_code: str,
        state: str,
        country: str,
        street_2: Optional[str] = None,
    ) -> "ReceiptTemplateBuilder":
        self._address = Address(
            street_1=street_1, street_2=street_2, city=city,
            postal_code=postal_code, state=state, country=country,
        )
        return self

    def set_summary(
        self,
        total_cost: float,
        subtotal: Optional[float] = None,
        shipping_cost: Optional[float] = None,
        total_tax: Optional[float] = None,
    ) -> "ReceiptTemplateBuilder":
        self._summary = PaymentSummary(
            total_cost=total_cost, subtotal=subtotal,
            shipping_cost=shipping_cost, total_tax=total_tax,
        )
        return self

    def add_adjustment(self, name: str, amount: float) -> "ReceiptTemplateBuilder":
        self._adjustments.append(PaymentAdjustment(name=name, amount=amount))
        return self

    def build_template(self) -> ReceiptTemplate:
        if self._summary is None:
            raise BuilderValidationError("a receipt template needs a payment summary")
        return ReceiptTemplate(
            **self._header,
            elements=list(self._elements) if self._elements else None,
            address=self._address,
            summary=self._summary,
            adjustments=list(self._adjustments) if self._adjustments else None,
        )

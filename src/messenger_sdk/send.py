"""
Send API — messages, media attachments and sender actions.
"""

import logging
from typing import Any, Optional, Union

from messenger_sdk.builders.message import MessageBuilder
from messenger_sdk.models.send import (
    AttachmentMessage,
    AttachmentType,
    Message,
    NotificationType,
    SendResponse,
    SenderAction,
    Tag,
    TextMessage,
    media_attachment,
)
from messenger_sdk.store.reusable import AttachmentReuseCache
from messenger_sdk.transport.graph import Endpoint, GraphDispatcher

logger = logging.getLogger(__name__)


class SendAPI:
    def __init__(
        self,
        dispatcher: GraphDispatcher,
        access_token: str,
        reuse_cache: Optional[AttachmentReuseCache] = None,
    ):
        self._dispatcher = dispatcher
        self._access_token = access_token
        self._reuse_cache = reuse_cache if reuse_cache is not None else AttachmentReuseCache()

    async def send(
        self,
        recipient_id: str,
        message: Union[Message, MessageBuilder],
        notification: NotificationType = NotificationType.REGULAR,
        tag: Optional[Tag] = None,
    ) -> SendResponse:
        if isinstance(message, MessageBuilder):
            message = message.build()
        envelope: dict[str, Any] = {
            "recipient": {"id": recipient_id},
            "message": message.to_wire(),
            "notification_type": notification.value,
        }
        if tag is not None:
            envelope["tag"] = tag.value
        body = await self._dispatcher.dispatch(Endpoint.MESSAGES, self._access_token, envelope)
        return SendResponse.model_validate(body)

    async def send_text(
        self,
        recipient_id: str,
        text: str,
        notification: NotificationType = NotificationType.REGULAR,
    ) -> SendResponse:
        return await self.send(recipient_id, TextMessage(text=text), notification)

    async def send_image(
        self, recipient_id: str, url: str, reusable: bool = False,
        notification: NotificationType = NotificationType.REGULAR,
    ) -> Optional[str]:
        """Send an image by URL. Returns its attachment id when `reusable`."""
        return await self._send_media(AttachmentType.IMAGE, recipient_id, url, reusable, notification)

    async def send_audio(
        self, recipient_id: str, url: str, reusable: bool = False,
        notification: NotificationType = NotificationType.REGULAR,
    ) -> Optional[str]:
        return await self._send_media(AttachmentType.AUDIO, recipient_id, url, reusable, notification)

    async def send_video(
        self, recipient_id: str, url: str, reusable: bool = False,
        notification: NotificationType = NotificationType.REGULAR,
    ) -> Optional[str]:
        return await self._send_media(AttachmentType.VIDEO, recipient_id, url, reusable, notification)

    async def send_file(
        self, recipient_id: str, url: str, reusable: bool = False,
        notification: NotificationType = NotificationType.REGULAR,
    ) -> Optional[str]:
        return await self._send_media(AttachmentType.FILE, recipient_id, url, reusable, notification)

    async def typing_on(self, recipient_id: str) -> None:
        await self._send_action(recipient_id, SenderAction.TYPING_ON)

    async def typing_off(self, recipient_id: str) -> None:
        await self._send_action(recipient_id, SenderAction.TYPING_OFF)

    async def mark_seen(self, recipient_id: str) -> None:
        await self._send_action(recipient_id, SenderAction.MARK_SEEN)

    async def _send_action(self, recipient_id: str, action: SenderAction) -> None:
        await self._dispatcher.dispatch(Endpoint.MESSAGES, self._access_token, {
            "recipient": {"id": recipient_id},
            "sender_action": action.value,
        })

    async def _send_media(
        self,
        type: AttachmentType,
        recipient_id: str,
        url: str,
        reusable: bool,
        notification: NotificationType,
    ) -> Optional[str]:
        if reusable:
            attachment_id = self._reuse_cache.lookup(url)
            if attachment_id is not None:
                logger.info("re-using attachment", extra={"url": url, "attachment_id": attachment_id})
                message = AttachmentMessage(attachment=media_attachment(type, attachment_id=attachment_id))
                await self.send(recipient_id, message, notification)
                return attachment_id

        message = AttachmentMessage(attachment=media_attachment(type, url=url, reusable=reusable))
        response = await self.send(recipient_id, message, notification)

        if reusable and response.attachment_id:
            self._reuse_cache.record(url, response.attachment_id)
            return response.attachment_id
        return None

"""CLI: messenger send text|media|action"""

import click
from rich.console import Console

from messenger_sdk.models.send import MEDIA_ATTACHMENT_TYPES, AttachmentType, SenderAction

console = Console()


def _get_client():
    from messenger_sdk.cli.main import _get_client
    return _get_client()


def _run(coro):
    from messenger_sdk.cli.main import _run
    return _run(coro)


@click.group()
def send():
    """Send messages to a user."""


@send.command("text")
@click.argument("recipient_id")
@click.argument("text")
def send_text(recipient_id: str, text: str):
    """Send a plain text message."""

    async def _send():
        async with _get_client() as client:
            return await client.send.send_text(recipient_id, text)

    response = _run(_send())
    console.print(f"[green]Sent[/green] (message_id: {response.message_id})")


@send.command("media")
@click.argument("recipient_id")
@click.argument("url")
@click.option("--type", "media_type", type=click.Choice([t.value for t in MEDIA_ATTACHMENT_TYPES]), default="image")
@click.option("--reuse", is_flag=True, help="Reuse the attachment id saved for this URL")
def send_media(recipient_id: str, url: str, media_type: str, reuse: bool):
    """Send an image, audio, video or file by URL."""

    async def _send():
        async with _get_client() as client:
            senders = {
                AttachmentType.IMAGE: client.send.send_image,
                AttachmentType.AUDIO: client.send.send_audio,
                AttachmentType.VIDEO: client.send.send_video,
                AttachmentType.FILE: client.send.send_file,
            }
            return await senders[AttachmentType(media_type)](recipient_id, url, reusable=reuse)

    attachment_id = _run(_send())
    if attachment_id:
        console.print(f"[green]Sent[/green] (attachment_id: {attachment_id})")
    else:
        console.print("[green]Sent[/green]")


@send.command("action")
@click.argument("recipient_id")
@click.argument("action", type=click.Choice([a.value for a in SenderAction]))
def send_action(recipient_id: str, action: str):
    """Send a sender action (typing indicator or read receipt)."""

    async def _send():
        async with _get_client() as client:
            actions = {
                SenderAction.TYPING_ON: client.send.typing_on,
                SenderAction.TYPING_OFF: client.send.typing_off,
                SenderAction.MARK_SEEN: client.send.mark_seen,
            }
            await actions[SenderAction(action)](recipient_id)

    _run(_send())
    console.print(f"[green]{action} sent.[/green]")

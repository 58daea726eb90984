"""CLI: messenger profile get|delete|greeting|get-started|whitelist"""

import json
from typing import Optional

import click
from rich.console import Console

from messenger_sdk.models.profile import ProfileField

console = Console()

FIELD_CHOICE = click.Choice([f.value for f in ProfileField])


def _get_client():
    from messenger_sdk.cli.main import _get_client
    return _get_client()


def _run(coro):
    from messenger_sdk.cli.main import _run
    return _run(coro)


@click.group()
def profile():
    """Messenger Profile settings."""


@profile.command("get")
@click.argument("field", type=FIELD_CHOICE)
def profile_get(field: str):
    """Print the current value of FIELD as JSON."""

    async def _get():
        async with _get_client() as client:
            return await client.profile.get_field(ProfileField(field))

    value = _run(_get())
    if value is None:
        console.print(f"[yellow]{field} is not set.[/yellow]")
        return
    click.echo(json.dumps(value, indent=2))


@profile.command("delete")
@click.argument("field", type=FIELD_CHOICE)
def profile_delete(field: str):
    """Remove FIELD from the profile."""

    async def _delete():
        async with _get_client() as client:
            with console.status(f"Deleting {field}..."):
                await client.profile.delete_fields([ProfileField(field)])

    _run(_delete())
    console.print(f"[green]{field} deleted.[/green]")


@profile.command("greeting")
@click.argument("text")
def profile_greeting(text: str):
    """Set the default-locale greeting."""

    async def _set():
        async with _get_client() as client:
            await client.profile.set_greeting(text)

    _run(_set())
    console.print("[green]Greeting set.[/green]")


@profile.command("get-started")
@click.option("--data", default=None, help="JSON delivered with the Get Started postback")
def profile_get_started(data: Optional[str]):
    """Set the Get Started button."""
    try:
        parsed = json.loads(data) if data else None
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--data")

    async def _set():
        async with _get_client() as client:
            await client.profile.set_get_started_button(parsed)

    _run(_set())
    console.print("[green]Get Started button set.[/green]")


@profile.command("whitelist")
@click.argument("domains", nargs=-1, required=True)
def profile_whitelist(domains: tuple):
    """Whitelist DOMAINS for webviews and Chat Extensions."""

    async def _set():
        async with _get_client() as client:
            await client.profile.whitelist_domains(list(domains))

    _run(_set())
    console.print(f"[green]Whitelisted {len(domains)} domain(s).[/green]")

"""
Messenger CLI — `messenger` command.

Commands:
  messenger auth set-token       Save a page access token
  messenger profile <cmd>        Read, set and delete Messenger Profile fields
  messenger send <cmd>           Send text, media and sender actions
"""

import asyncio
import json
import logging
import os
from pathlib import Path

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
    from rich.markup import escape
except ImportError:
    raise SystemExit("CLI requires extras: pip install messenger-sdk[cli]")

from messenger_sdk.client import AsyncMessenger
from messenger_sdk.errors import MessengerError, RemoteApiError
from messenger_sdk.store.reusable import JsonFileReusableStore
from messenger_sdk.transport.graph import DEFAULT_GRAPH_VERSION

console = Console()
CONFIG_DIR = Path.home() / ".messenger"
CONFIG_FILE = CONFIG_DIR / "config.json"
REUSABLES_FILE = CONFIG_DIR / "reusables.json"
TOKEN_ENV = "MESSENGER_ACCESS_TOKEN"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client() -> AsyncMessenger:
    cfg = _load_config()
    token = os.environ.get(TOKEN_ENV) or cfg.get("access_token")
    if not token:
        console.print(f"[red]No access token. Run `messenger auth set-token` or set {TOKEN_ENV}.[/red]")
        raise SystemExit(1)
    return AsyncMessenger(
        access_token=token,
        graph_version=cfg.get("graph_version", DEFAULT_GRAPH_VERSION),
        reusable_store=JsonFileReusableStore(REUSABLES_FILE),
    )


def _run(coro):
    try:
        return asyncio.run(coro)
    except RemoteApiError as e:
        console.print(f"[red]Graph API error {e.code}/{e.subcode} ({e.type}): {escape(e.message)}[/red]")
        console.print(f"[dim]fbtrace_id: {e.trace_id}[/dim]")
        raise SystemExit(1)
    except MessengerError as e:
        console.print(f"[red]{escape(e.message)}[/red]")
        raise SystemExit(1)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log requests to stderr")
def main(verbose: bool):
    """Messenger CLI — configure your bot's profile and message users."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler(console=Console(stderr=True))])


# Register subcommands from separate modules
from messenger_sdk.cli.auth import auth
from messenger_sdk.cli.profile import profile
from messenger_sdk.cli.send import send

main.add_command(auth)
main.add_command(profile)
main.add_command(send)


if __name__ == "__main__":
    main()

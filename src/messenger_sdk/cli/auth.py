"""CLI: messenger auth set-token|status|logout"""

from typing import Optional

import click
from rich.console import Console

console = Console()


def _load_config() -> dict:
    from messenger_sdk.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from messenger_sdk.cli.main import _save_config
    _save_config(cfg)


@click.group()
def auth():
    """Page access token management."""


@auth.command("set-token")
@click.option("--graph-version", default=None, help="Graph API version, e.g. v19.0")
def auth_set_token(graph_version: Optional[str]):
    """Save a page access token."""
    token = click.prompt("Page access token", hide_input=True)
    cfg = _load_config()
    cfg["access_token"] = token.strip()
    if graph_version:
        cfg["graph_version"] = graph_version
    _save_config(cfg)
    console.print("[green]Token saved to ~/.messenger/config.json[/green]")


@auth.command("status")
def auth_status():
    """Show whether a token is configured."""
    cfg = _load_config()
    if cfg.get("access_token"):
        token = cfg["access_token"]
        console.print(f"[green]Token configured[/green] (…{token[-4:]}), graph version {cfg.get('graph_version', 'default')}")
    else:
        console.print("[yellow]No token. Run `messenger auth set-token`.[/yellow]")


@auth.command("logout")
def auth_logout():
    """Clear the saved token."""
    _save_config({})
    console.print("[green]Token cleared.[/green]")

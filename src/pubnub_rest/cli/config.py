"""CLI: pubnub config set|show"""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from pubnub_rest.config import load_config, save_config

console = Console()


@click.group()
def config():
    """Client configuration."""


@config.command("set")
@click.option("--subscribe-key", default=None)
@click.option("--publish-key", default=None)
@click.option("--secret-key", default=None)
@click.option("--auth-key", default=None)
@click.option("--cipher-key", default=None)
@click.option("--uuid", default=None)
@click.option("--origin", default=None)
@click.option("--filter-expression", default=None)
def config_set(**fields: Optional[str]):
    """Update saved settings. Unset options keep their current value."""
    cfg = load_config(env={})
    updates = {k: v for k, v in fields.items() if v is not None}
    cfg = cfg.model_copy(update=updates)
    path = save_config(cfg)
    console.print(f"[green]Saved {', '.join(sorted(updates)) or 'nothing'} to {path}[/green]")


@config.command("show")
def config_show():
    """Show the effective configuration, secrets masked."""
    cfg = load_config()
    table = Table(title="PubNub config")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for name, value in cfg.model_dump().items():
        if value and name in ("secret_key", "cipher_key", "auth_key"):
            value = value[:4] + "…"
        table.add_row(name, "" if value is None else str(value))
    console.print(table)

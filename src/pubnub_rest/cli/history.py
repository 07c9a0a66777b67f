"""CLI: pubnub history, pubnub url history"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from pubnub_rest.config import load_config
from pubnub_rest.endpoints.history import HistoryEndpoint
from pubnub_rest.errors import PubNubError
from pubnub_rest.request import build_request

console = Console()


def _get_client():
    from pubnub_rest.cli.main import _get_client
    return _get_client()


def _run(coro):
    from pubnub_rest.cli.main import _run
    return _run(coro)


@click.command("history")
@click.argument("channel")
@click.option("--count", default=100, type=int)
@click.option("--start", default=None)
@click.option("--end", default=None)
@click.option("--reverse", is_flag=True)
@click.option("--include-token", is_flag=True)
@click.option("--json-output", "--json", is_flag=True)
def history_cmd(channel, count, start, end, reverse, include_token, json_output):
    """Fetch stored messages for CHANNEL."""

    async def _history():
        client = _get_client()
        try:
            with console.status("Fetching history..."):
                result = await client.history(
                    channel, start=start, end=end, count=count,
                    reverse=reverse, include_timetoken=include_token,
                )
        finally:
            await client.close()
        if json_output:
            click.echo(json.dumps(result.model_dump(), indent=2))
            return
        table = Table(title=f"{channel} ({result.start_timetoken} – {result.end_timetoken})")
        table.add_column("Timetoken")
        table.add_column("Message")
        for item in result.messages:
            table.add_row("" if item.timetoken is None else str(item.timetoken), json.dumps(item.message))
        console.print(table)

    _run(_history())


@click.group()
def url():
    """Print signed request URLs without sending them."""


@url.command("history")
@click.argument("channel")
@click.option("--count", default=100, type=int)
@click.option("--start", default=None)
@click.option("--end", default=None)
@click.option("--reverse", is_flag=True)
@click.option("--include-token", is_flag=True)
def url_history(
    channel: str, count: int, start: Optional[str], end: Optional[str], reverse: bool, include_token: bool
):
    """Signed URL for a history request on CHANNEL."""
    endpoint = HistoryEndpoint(
        config=load_config(), channel=channel, count=count, start=start, end=end,
        reverse=reverse, include_timetoken=include_token,
    )
    try:
        request = build_request(endpoint)
    except PubNubError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    click.echo(request.url)

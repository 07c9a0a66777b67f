"""CLI: pubnub publish"""

import json

import click
from rich.console import Console

console = Console()


def _get_client():
    from pubnub_rest.cli.main import _get_client
    return _get_client()


def _run(coro):
    from pubnub_rest.cli.main import _run
    return _run(coro)


@click.command("publish")
@click.argument("channel")
@click.argument("message")
@click.option("--meta", default=None, help="JSON metadata for filter expressions.")
@click.option("--no-store", is_flag=True, help="Do not keep the message in history.")
@click.option("--post", "use_post", is_flag=True, help="Send the message in a POST body.")
def publish_cmd(channel, message, meta, no_store, use_post):
    """Publish MESSAGE (JSON, or a plain string) to CHANNEL."""
    try:
        payload = json.loads(message)
    except json.JSONDecodeError:
        payload = message
    meta_value = json.loads(meta) if meta else None

    async def _publish():
        client = _get_client()
        try:
            with console.status("Publishing..."):
                result = await client.publish(
                    channel, payload, meta=meta_value,
                    should_store=False if no_store else None, use_post=use_post,
                )
        finally:
            await client.close()
        console.print(f"[green]Published at {result.timetoken}[/green]")

    _run(_publish())

"""
PubNub REST CLI: `pubnub` command.

Commands:
  pubnub config set|show          Keys and origin in ~/.pubnub/config.json
  pubnub publish <channel> <msg>  Publish a JSON message
  pubnub history <channel>        Fetch stored messages
  pubnub url history <channel>    Print the signed request URL without sending it
  pubnub time                     Server time
"""

import asyncio
import logging

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install pubnub-rest[cli]")

from pubnub_rest.client import AsyncPubNub
from pubnub_rest.config import load_config
from pubnub_rest.errors import PubNubError
from pubnub_rest.version import __version__

console = Console()


def _get_client() -> AsyncPubNub:
    return AsyncPubNub(load_config())


def _run(coro):
    try:
        return asyncio.run(coro)
    except PubNubError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log signing input and request URLs.")
def main(verbose: bool):
    """PubNub REST CLI."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@main.command("time")
def time_cmd():
    """Print the server time as a timetoken."""

    async def _time():
        client = _get_client()
        try:
            result = await client.time()
        finally:
            await client.close()
        click.echo(result.timetoken)

    _run(_time())


# Register subcommands from separate modules
from pubnub_rest.cli.config import config
from pubnub_rest.cli.history import history_cmd, url
from pubnub_rest.cli.publish import publish_cmd

main.add_command(config)
main.add_command(history_cmd)
main.add_command(publish_cmd)
main.add_command(url)


if __name__ == "__main__":
    main()

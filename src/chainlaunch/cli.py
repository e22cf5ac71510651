"""
chainlaunch/cli.py

Command-line helpers for preparing a publish.

Run with: chainlaunch --help
"""

import logging

import click
import trio

from .config import LaunchConfig
from .errors import GenesisFetchError, InvalidSharesError
from .genesis import GenesisFetcher
from .shares import Shares

logger = logging.getLogger("chainlaunch.cli")


@click.group()
@click.option(
    '--log-level',
    type=click.Choice(['debug', 'info', 'warning', 'error'], case_sensitive=False),
    default='warning',
    help='Logging verbosity',
)
def main(log_level: str):
    """Tools for publishing chains to the coordination network."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s [%(name)s] %(levelname)s: %(message)s',
    )


@main.command('genesis-hash')
@click.argument('url')
@click.option('--timeout', type=float, default=None, help='Download timeout in seconds')
def genesis_hash_command(url: str, timeout):
    """Fetch the genesis at URL and print its hash."""
    config = LaunchConfig.from_env()
    fetcher = GenesisFetcher(
        timeout=timeout or config.genesis_timeout,
        max_size=config.max_genesis_size,
    )
    try:
        genesis = trio.run(fetcher.fetch, url)
    except GenesisFetchError as e:
        raise click.ClickException(str(e))

    click.echo(f"hash: {genesis.hash}")
    click.echo(f"chain-id: {genesis.chain_id or '-'}")


@main.command('parse-shares')
@click.argument('text')
@click.option('--prefix/--no-prefix', default=False, help='Add the share prefix to plain denominations')
def parse_shares_command(text: str, prefix: bool):
    """Validate TEXT as shares (e.g. "100s/stake,5s/token") and print it normalized."""
    try:
        shares = Shares.parse(text)
    except InvalidSharesError as e:
        raise click.ClickException(str(e))
    if prefix:
        shares = Shares.from_coins(shares)
    click.echo(str(shares))


if __name__ == "__main__":
    main()

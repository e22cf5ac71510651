"""
chainlaunch/network/options.py

Options for Network.publish().

Each option is a function that sets exactly one field of PublishOptions
and reads nothing, so options touching different fields can be given in
any order. When a field is set twice the last option wins.

Usage:
    await network.publish(
        chain,
        with_chain_id("mychain-1"),
        with_shares(Shares.parse("1000s/stake")),
    )
"""

from dataclasses import dataclass, field
from typing import Callable

from ..shares import Shares


@dataclass
class PublishOptions:
    """How a chain is published. Defaults are all empty."""
    genesis_url: str = ""
    chain_id: str = ""
    campaign_id: int = 0
    no_check: bool = False
    shares: Shares = field(default_factory=Shares)

    @classmethod
    def from_options(cls, *options: "PublishOption") -> "PublishOptions":
        """Apply options in order over the defaults."""
        opts = cls()
        for apply in options:
            apply(opts)
        return opts


PublishOption = Callable[[PublishOptions], None]


def with_campaign(campaign_id: int) -> PublishOption:
    """Publish under an existing campaign instead of creating one."""
    def apply(o: PublishOptions) -> None:
        o.campaign_id = campaign_id
    return apply


def with_chain_id(chain_id: str) -> PublishOption:
    """Use a custom chain id instead of deriving it from the chain."""
    def apply(o: PublishOptions) -> None:
        o.chain_id = chain_id
    return apply


def with_no_check() -> PublishOption:
    """Skip checking the integrity of the chain."""
    def apply(o: PublishOptions) -> None:
        o.no_check = True
    return apply


def with_custom_genesis(url: str) -> PublishOption:
    """Publish with a genesis hosted at url."""
    def apply(o: PublishOptions) -> None:
        o.genesis_url = url
    return apply


def with_shares(shares: Shares) -> PublishOption:
    """Allocate shares of the campaign to the coordinator after launch."""
    def apply(o: PublishOptions) -> None:
        o.shares = shares
    return apply

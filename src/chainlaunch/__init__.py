"""
chainlaunch - Publish chains to a coordination network

Registers a locally described chain on the coordination network so that
validators can discover and join it:
- Registers the publishing account as a coordinator (once)
- Creates a campaign, or reuses an existing one
- Creates the chain's launch record
- Optionally allocates campaign shares

Usage:
    import trio
    from chainlaunch import Network, EventBus, StaticAccount
    from chainlaunch.network import with_chain_id, with_shares
    from chainlaunch.shares import Shares

    network = Network(
        broadcaster=my_broadcaster,
        queries=my_query_service,
        account=StaticAccount.for_spn("alice", "spn1..."),
        events=EventBus(),
    )

    result = trio.run(
        network.publish,
        my_chain,
        with_chain_id("mychain-1"),
        with_shares(Shares.parse("1000s/stake")),
    )
    if not result.ok:
        # Chain launched, shares not allocated; retry separately
        trio.run(network.add_shares, result.campaign_id, "spn1...", shares)
"""

from .account import StaticAccount
from .config import LaunchConfig, SPN_ADDRESS_PREFIX, SHARE_DENOM_PREFIX
from .errors import (
    ChainLaunchError,
    QueryError,
    BroadcastError,
    DecodeError,
    GenesisFetchError,
    CancellationError,
    RequestTimeoutError,
    InvalidSharesError,
    ErrorCode,
    is_resource_absent,
)
from .events import Event, EventBus, EventStatus
from .genesis import Genesis, GenesisFetcher
from .network import Network, PublishResult
from .shares import Coin, Shares

__version__ = "0.1.0"

__all__ = [
    "Network",
    "PublishResult",
    "LaunchConfig",
    "StaticAccount",
    "Event",
    "EventBus",
    "EventStatus",
    "Genesis",
    "GenesisFetcher",
    "Coin",
    "Shares",
    "SPN_ADDRESS_PREFIX",
    "SHARE_DENOM_PREFIX",
    # Errors
    "ChainLaunchError",
    "QueryError",
    "BroadcastError",
    "DecodeError",
    "GenesisFetchError",
    "CancellationError",
    "RequestTimeoutError",
    "InvalidSharesError",
    "ErrorCode",
    "is_resource_absent",
]

"""
chainlaunch/network/interfaces.py

Contracts for the collaborators the publishing workflow talks to.
"""

from typing import Protocol, Union

from ..events import Event
from ..genesis import Genesis
from .types import (
    Campaign,
    Coordinator,
    MsgAddShares,
    MsgCreateCampaign,
    MsgCreateChain,
    MsgCreateCoordinator,
    TxResponse,
)

Msg = Union[MsgCreateCoordinator, MsgCreateCampaign, MsgCreateChain, MsgAddShares]


class QueryService(Protocol):
    """
    Reads current coordination-chain state.

    Failures raise QueryError with an ErrorCode; a missing resource must be
    reported with a code that is_resource_absent() recognizes.
    """

    async def get_coordinator_by_address(self, address: str) -> Coordinator:
        ...

    async def get_campaign(self, campaign_id: int) -> Campaign:
        ...


class TxBroadcaster(Protocol):
    """Signs, submits and waits for confirmation of one message."""

    async def broadcast_tx(self, account_name: str, msg: Msg) -> TxResponse:
        """Raises BroadcastError if the transaction is rejected or not confirmed."""
        ...


class ChainDescriptor(Protocol):
    """The local chain being published."""

    def chain_id(self) -> str:
        """Derive the chain id; may raise."""
        ...

    def name(self) -> str:
        ...

    def source_url(self) -> str:
        ...

    def source_hash(self) -> str:
        ...


class GenesisSource(Protocol):
    async def fetch(self, url: str) -> Genesis:
        ...


class EventSink(Protocol):
    def send(self, event: Event) -> None:
        ...


class AccountResolver(Protocol):
    name: str

    def address(self, prefix: str) -> str:
        ...

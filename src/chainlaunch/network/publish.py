"""
chainlaunch/network/publish.py

Publishes a chain to the coordination network.

Publishing is a fixed sequence of remote steps:
1. Fetch the custom genesis hash (only when checks are skipped)
2. Make sure the account is a registered coordinator
3. Use the given campaign, or create one
4. Create the chain's launch record
5. Optionally allocate campaign shares to the coordinator

Each step gates the next. Nothing already committed on chain is rolled
back when a later step fails.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional
import logging

import trio

from ..config import LaunchConfig, PUBLISHING_MESSAGE
from ..errors import QueryError, RequestTimeoutError, is_resource_absent
from ..events import EventBus, EventStatus, new_event
from ..genesis import GenesisFetcher
from ..shares import Shares
from .interfaces import (
    AccountResolver,
    ChainDescriptor,
    EventSink,
    GenesisSource,
    Msg,
    QueryService,
    TxBroadcaster,
)
from .options import PublishOption, PublishOptions
from .types import (
    MsgAddShares,
    MsgAddSharesResponse,
    MsgCreateCampaign,
    MsgCreateCampaignResponse,
    MsgCreateChain,
    MsgCreateChainResponse,
    MsgCreateCoordinator,
    MsgCreateCoordinatorResponse,
    TxResponse,
)

logger = logging.getLogger("chainlaunch.network.publish")


@dataclass
class PublishResult:
    """
    Outcome of Network.publish().

    When shares_error is set the chain WAS launched (launch_id and
    campaign_id are valid) but allocating the configured shares failed.
    Network.add_shares() can be retried on its own in that case.
    """
    launch_id: int
    campaign_id: int
    shares_error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.shares_error is None

    def raise_for_error(self) -> None:
        """Raise the share allocation error, if any."""
        if self.shares_error is not None:
            raise self.shares_error

    def to_dict(self) -> dict:
        return {
            "launch_id": self.launch_id,
            "campaign_id": self.campaign_id,
            "shares_error": str(self.shares_error) if self.shares_error else None,
        }


class Network:
    """
    Client-side orchestration of chain publishing.

    Example:
        network = Network(broadcaster, queries, account, events=EventBus())
        result = await network.publish(chain, with_chain_id("mychain-1"))
        print(result.launch_id, result.campaign_id)

    Cancel a publish with trio's usual scopes (trio.move_on_after,
    trio.fail_after, nursery cancellation); steps already committed stay
    committed.
    """

    def __init__(
        self,
        broadcaster: TxBroadcaster,
        queries: QueryService,
        account: AccountResolver,
        events: Optional[EventSink] = None,
        genesis: Optional[GenesisSource] = None,
        config: Optional[LaunchConfig] = None,
    ):
        """
        Initialize the network client.

        Args:
            broadcaster: Submits and confirms transactions
            queries: Reads coordination-chain state
            account: Publishing account (signer name + address)
            events: Receives progress events (defaults to a new EventBus)
            genesis: Fetches custom genesis files (defaults to GenesisFetcher)
            config: Shared settings (defaults to LaunchConfig())
        """
        self.config = config or LaunchConfig()
        self.broadcaster = broadcaster
        self.queries = queries
        self.account = account
        self.events = events if events is not None else EventBus()
        self.genesis = genesis or GenesisFetcher(
            timeout=self.config.genesis_timeout,
            max_size=self.config.max_genesis_size,
        )

    @property
    def address(self) -> str:
        """Coordination-network address of the publishing account."""
        return self.account.address(self.config.address_prefix)

    async def publish(
        self,
        chain: ChainDescriptor,
        *options: PublishOption,
    ) -> PublishResult:
        """
        Announce a new network on the coordination chain.

        Args:
            chain: The chain to publish
            *options: PublishOption functions (with_chain_id, with_campaign, ...)

        Returns:
            PublishResult; check shares_error when shares were requested

        Raises:
            GenesisFetchError: The custom genesis could not be fetched
            QueryError: A coordinator or campaign lookup failed
            BroadcastError: A transaction was rejected
            DecodeError: A transaction response had the wrong shape
            RequestTimeoutError: A remote call exceeded request_timeout
        """
        o = PublishOptions.from_options(*options)

        # The genesis is not validated against the chain when checks are skipped,
        # only its hash is needed.
        genesis_hash = ""
        if o.no_check and o.genesis_url:
            genesis = await self.genesis.fetch(o.genesis_url)
            genesis_hash = genesis.hash

        chain_id = o.chain_id or chain.chain_id()
        coordinator_address = self.address

        self.events.send(new_event(EventStatus.ONGOING, PUBLISHING_MESSAGE))
        logger.info(f"Publishing {chain_id} as {coordinator_address}")

        await self._ensure_coordinator(coordinator_address)
        campaign_id = await self._ensure_campaign(chain, o.campaign_id, coordinator_address)

        msg_create_chain = MsgCreateChain(
            coordinator=coordinator_address,
            genesis_chain_id=chain_id,
            source_url=chain.source_url(),
            source_hash=chain.source_hash(),
            genesis_url=o.genesis_url,
            genesis_hash=genesis_hash,
            has_campaign=True,
            campaign_id=campaign_id,
        )
        res = await self._broadcast(msg_create_chain)
        launch_id = res.decode(MsgCreateChainResponse).launch_id
        logger.info(f"Chain {chain_id} published with launch ID {launch_id} in campaign {campaign_id}")

        if not o.shares.empty():
            try:
                await self.add_shares(campaign_id, coordinator_address, o.shares)
            except Exception as e:
                logger.warning(
                    f"Launch {launch_id} created but adding shares to campaign "
                    f"{campaign_id} failed: {e}"
                )
                return PublishResult(launch_id, campaign_id, shares_error=e)

        return PublishResult(launch_id, campaign_id)

    async def add_shares(self, campaign_id: int, address: str, shares: Shares) -> None:
        """
        Allocate campaign shares to an address.

        Runs even for empty shares; callers decide whether to call it.

        Args:
            campaign_id: Campaign to allocate from
            address: Address receiving the shares
            shares: Amounts to allocate

        Raises:
            BroadcastError: The transaction was rejected
            DecodeError: The response was not an add-shares response
        """
        self.events.send(new_event(
            EventStatus.ONGOING,
            f"Adding shares {shares} to account {address} for campaign {campaign_id}",
        ))

        msg = MsgAddShares(
            campaign_id=campaign_id,
            coordinator=self.address,
            address=address,
            shares=shares,
        )
        res = await self._broadcast(msg)
        res.decode(MsgAddSharesResponse)

        self.events.send(new_event(
            EventStatus.DONE,
            f"Added {shares} for address {address} in the campaign {campaign_id}",
        ))

    # ------------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------------

    async def _ensure_coordinator(self, address: str) -> None:
        absent = False
        try:
            coordinator = await self._remote(
                f"coordinator lookup for {address}",
                self.queries.get_coordinator_by_address,
                address,
            )
        except QueryError as e:
            if not is_resource_absent(e):
                raise
            absent = True

        if not absent:
            logger.debug(f"Coordinator {coordinator.coordinator_id} already registered for {address}")
            return

        logger.info(f"No coordinator registered for {address}, creating one")
        res = await self._broadcast(MsgCreateCoordinator(address=address))
        created = res.decode(MsgCreateCoordinatorResponse)
        logger.info(f"Created coordinator {created.coordinator_id} for {address}")

    async def _ensure_campaign(
        self,
        chain: ChainDescriptor,
        campaign_id: int,
        coordinator_address: str,
    ) -> int:
        # An explicit campaign must already exist; it is never created here.
        if campaign_id:
            campaign = await self._remote(
                f"campaign lookup for {campaign_id}",
                self.queries.get_campaign,
                campaign_id,
            )
            logger.info(f"Using existing campaign {campaign_id} ({campaign.campaign_name})")
            return campaign_id

        msg = MsgCreateCampaign(
            coordinator=coordinator_address,
            campaign_name=chain.name(),
        )
        res = await self._broadcast(msg)
        campaign_id = res.decode(MsgCreateCampaignResponse).campaign_id
        logger.info(f"Created campaign {campaign_id} ({msg.campaign_name})")
        return campaign_id

    # ------------------------------------------------------------------------
    # Remote calls
    # ------------------------------------------------------------------------

    async def _broadcast(self, msg: Msg) -> TxResponse:
        return await self._remote(
            f"broadcast of {msg.TYPE_URL}",
            self.broadcaster.broadcast_tx,
            self.account.name,
            msg,
        )

    async def _remote(
        self,
        what: str,
        fn: Callable[..., Awaitable[Any]],
        *args: Any,
    ) -> Any:
        timeout = self.config.request_timeout
        logger.debug(f"Remote call: {what}")
        if timeout is None:
            return await fn(*args)

        try:
            with trio.fail_after(timeout):
                return await fn(*args)
        except trio.TooSlowError as e:
            raise RequestTimeoutError(f"{what} timed out after {timeout}s", timeout=timeout) from e

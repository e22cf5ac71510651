"""
Shared fakes for chainlaunch tests.

The fakes record every call so tests can assert exactly which remote
operations happened, and in which order.
"""

from typing import Dict, List, Optional, Tuple

import pytest
import trio

from chainlaunch.account import StaticAccount
from chainlaunch.errors import BroadcastError, QueryError
from chainlaunch.events import EventBus
from chainlaunch.genesis import Genesis, parse_genesis
from chainlaunch.network import Network
from chainlaunch.network.types import (
    Campaign,
    Coordinator,
    MsgAddShares,
    MsgCreateCampaign,
    MsgCreateChain,
    MsgCreateCoordinator,
    MsgData,
    TxResponse,
)

TEST_ADDRESS = "spn1coordinator0000000000000000000000000"
TEST_ACCOUNT = "alice"


class FakeChain:
    """Chain descriptor with fixed values."""

    def __init__(
        self,
        name: str = "mychain",
        chain_id: str = "mychain-1",
        source_url: str = "https://github.com/example/mychain",
        source_hash: str = "a1b2c3d4",
        chain_id_error: Optional[Exception] = None,
    ):
        self._name = name
        self._chain_id = chain_id
        self._source_url = source_url
        self._source_hash = source_hash
        self._chain_id_error = chain_id_error
        self.chain_id_calls = 0

    def chain_id(self) -> str:
        self.chain_id_calls += 1
        if self._chain_id_error is not None:
            raise self._chain_id_error
        return self._chain_id

    def name(self) -> str:
        return self._name

    def source_url(self) -> str:
        return self._source_url

    def source_hash(self) -> str:
        return self._source_hash


class FakeQueryService:
    """
    In-memory query service.

    A missing coordinator is reported as an invalid-request status and a
    missing campaign as not-found, as the coordination chain does.
    """

    def __init__(
        self,
        coordinator: Optional[Coordinator] = None,
        campaigns: Optional[Dict[int, Campaign]] = None,
        coordinator_error: Optional[Exception] = None,
        campaign_error: Optional[Exception] = None,
    ):
        self.coordinator = coordinator
        self.campaigns = campaigns or {}
        self.coordinator_error = coordinator_error
        self.campaign_error = campaign_error
        self.coordinator_calls: List[str] = []
        self.campaign_calls: List[int] = []

    async def get_coordinator_by_address(self, address: str) -> Coordinator:
        self.coordinator_calls.append(address)
        if self.coordinator_error is not None:
            raise self.coordinator_error
        if self.coordinator is None:
            raise QueryError.from_status(3, "coordinator not found", resource=address)
        return self.coordinator

    async def get_campaign(self, campaign_id: int) -> Campaign:
        self.campaign_calls.append(campaign_id)
        if self.campaign_error is not None:
            raise self.campaign_error
        if campaign_id not in self.campaigns:
            raise QueryError.from_status(5, "campaign not found", resource=str(campaign_id))
        return self.campaigns[campaign_id]


class FakeBroadcaster:
    """
    Broadcaster that answers each message kind with a canned response.

    Args:
        fail_on: Message types whose broadcast raises BroadcastError
        malformed: Message types answered with an undecodable response
        hang_on: Message types whose broadcast never returns
    """

    def __init__(
        self,
        coordinator_id: int = 1,
        campaign_id: int = 42,
        launch_id: int = 100,
        fail_on: Tuple[type, ...] = (),
        malformed: Tuple[type, ...] = (),
        hang_on: Tuple[type, ...] = (),
    ):
        self.coordinator_id = coordinator_id
        self.campaign_id = campaign_id
        self.launch_id = launch_id
        self.fail_on = fail_on
        self.malformed = malformed
        self.hang_on = hang_on
        self.sent: List[Tuple[str, object]] = []

    async def broadcast_tx(self, account_name: str, msg) -> TxResponse:
        self.sent.append((account_name, msg))
        tx_hash = f"TX{len(self.sent):04d}"

        if isinstance(msg, self.hang_on):
            await trio.sleep_forever()
        if isinstance(msg, self.fail_on):
            raise BroadcastError(f"rejected {type(msg).__name__}", tx_hash=tx_hash, code=5)
        if isinstance(msg, self.malformed):
            return TxResponse(tx_hash=tx_hash, height=10)

        if isinstance(msg, MsgCreateCoordinator):
            value = {"coordinator_id": self.coordinator_id}
        elif isinstance(msg, MsgCreateCampaign):
            value = {"campaign_id": self.campaign_id}
        elif isinstance(msg, MsgCreateChain):
            value = {"launch_id": self.launch_id}
        else:
            value = {}
        return TxResponse(
            tx_hash=tx_hash,
            height=10,
            data=[MsgData(type_url=msg.TYPE_URL + "Response", value=value)],
        )

    def messages(self, msg_type: type) -> list:
        """Broadcast messages of one type, in order."""
        return [msg for _, msg in self.sent if isinstance(msg, msg_type)]


class FakeGenesisSource:
    """Genesis source returning fixed content."""

    def __init__(self, raw: bytes = b'{"chain_id": "mychain-1"}', error: Optional[Exception] = None):
        self._genesis = parse_genesis(raw)
        self.error = error
        self.calls: List[str] = []

    async def fetch(self, url: str) -> Genesis:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self._genesis

    @property
    def hash(self) -> str:
        return self._genesis.hash


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def account():
    return StaticAccount.for_spn(TEST_ACCOUNT, TEST_ADDRESS)


@pytest.fixture
def chain():
    return FakeChain()


@pytest.fixture
def queries():
    return FakeQueryService()


@pytest.fixture
def broadcaster():
    return FakeBroadcaster()


@pytest.fixture
def events():
    return EventBus(history=50)


@pytest.fixture
def genesis_source():
    return FakeGenesisSource()


@pytest.fixture
def network(broadcaster, queries, account, events, genesis_source):
    return Network(
        broadcaster=broadcaster,
        queries=queries,
        account=account,
        events=events,
        genesis=genesis_source,
    )


@pytest.fixture
def existing_campaign():
    return Campaign(campaign_id=7, coordinator_id=1, campaign_name="existing")


@pytest.fixture
def registered_coordinator():
    return Coordinator(coordinator_id=1, address=TEST_ADDRESS)

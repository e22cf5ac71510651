"""
chainlaunch/network/types.py

Messages, responses and on-chain records of the coordination network.

Every message and response carries the protobuf type URL the chain uses
for it. TxResponse.decode() checks that URL so a response can never be
decoded as the wrong message kind.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Type, TypeVar

from ..errors import DecodeError
from ..shares import Shares

PROFILE_PREFIX = "/tendermint.spn.profile."
CAMPAIGN_PREFIX = "/tendermint.spn.campaign."
LAUNCH_PREFIX = "/tendermint.spn.launch."


# ============================================================================
# ON-CHAIN RECORDS
# ============================================================================

@dataclass
class Coordinator:
    """A registered campaign coordinator."""
    coordinator_id: int
    address: str


@dataclass
class Campaign:
    """A campaign grouping launched chains and share allocations."""
    campaign_id: int
    coordinator_id: int
    campaign_name: str


# ============================================================================
# MESSAGES
# ============================================================================

@dataclass
class MsgCreateCoordinator:
    """Register an address as a coordinator."""
    TYPE_URL = PROFILE_PREFIX + "MsgCreateCoordinator"

    address: str
    identity: str = ""
    website: str = ""
    details: str = ""

    def to_dict(self) -> dict:
        return {
            "address": self.address,
            "description": {
                "identity": self.identity,
                "website": self.website,
                "details": self.details,
            },
        }


@dataclass
class MsgCreateCampaign:
    """Create a campaign owned by a coordinator."""
    TYPE_URL = CAMPAIGN_PREFIX + "MsgCreateCampaign"

    coordinator: str
    campaign_name: str
    metadata: bytes = b""

    def to_dict(self) -> dict:
        return {
            "coordinator": self.coordinator,
            "campaign_name": self.campaign_name,
            "metadata": self.metadata.hex(),
        }


@dataclass
class MsgCreateChain:
    """Register a chain to launch."""
    TYPE_URL = LAUNCH_PREFIX + "MsgCreateChain"

    coordinator: str
    genesis_chain_id: str
    source_url: str
    source_hash: str
    genesis_url: str
    genesis_hash: str
    has_campaign: bool
    campaign_id: int

    def to_dict(self) -> dict:
        return {
            "coordinator": self.coordinator,
            "genesis_chain_id": self.genesis_chain_id,
            "source_url": self.source_url,
            "source_hash": self.source_hash,
            "genesis_url": self.genesis_url,
            "genesis_hash": self.genesis_hash,
            "has_campaign": self.has_campaign,
            "campaign_id": self.campaign_id,
        }


@dataclass
class MsgAddShares:
    """Allocate campaign shares to an address."""
    TYPE_URL = CAMPAIGN_PREFIX + "MsgAddShares"

    campaign_id: int
    coordinator: str
    address: str
    shares: Shares

    def to_dict(self) -> dict:
        return {
            "campaign_id": self.campaign_id,
            "coordinator": self.coordinator,
            "address": self.address,
            "shares": [
                {"denom": coin.denom, "amount": str(coin.amount)}
                for coin in self.shares
            ],
        }


# ============================================================================
# RESPONSES
# ============================================================================

@dataclass
class MsgCreateCoordinatorResponse:
    TYPE_URL = MsgCreateCoordinator.TYPE_URL + "Response"

    coordinator_id: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MsgCreateCoordinatorResponse":
        return cls(coordinator_id=int(data["coordinator_id"]))


@dataclass
class MsgCreateCampaignResponse:
    TYPE_URL = MsgCreateCampaign.TYPE_URL + "Response"

    campaign_id: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MsgCreateCampaignResponse":
        return cls(campaign_id=int(data["campaign_id"]))


@dataclass
class MsgCreateChainResponse:
    TYPE_URL = MsgCreateChain.TYPE_URL + "Response"

    launch_id: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MsgCreateChainResponse":
        return cls(launch_id=int(data["launch_id"]))


@dataclass
class MsgAddSharesResponse:
    TYPE_URL = MsgAddShares.TYPE_URL + "Response"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MsgAddSharesResponse":
        return cls()


# ============================================================================
# TRANSACTION RESPONSE
# ============================================================================

R = TypeVar("R")


@dataclass
class MsgData:
    """Result data of one message in a confirmed transaction."""
    type_url: str
    value: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TxResponse:
    """A confirmed transaction, as returned by a broadcaster."""
    tx_hash: str
    height: int = 0
    data: List[MsgData] = field(default_factory=list)

    def decode(self, response_cls: Type[R]) -> R:
        """
        Decode the first message result into a typed response.

        Args:
            response_cls: Response dataclass with TYPE_URL and from_dict()

        Returns:
            Instance of response_cls

        Raises:
            DecodeError: If there is no result, its type does not match,
                or its payload is malformed
        """
        if not self.data:
            raise DecodeError(f"transaction {self.tx_hash} has no message data")

        msg_data = self.data[0]
        expected = getattr(response_cls, "TYPE_URL", "")
        if msg_data.type_url != expected:
            raise DecodeError(
                f"transaction {self.tx_hash}: expected {expected}, got {msg_data.type_url}"
            )

        try:
            return response_cls.from_dict(msg_data.value)
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"transaction {self.tx_hash}: malformed {expected}: {e}") from e

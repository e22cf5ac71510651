"""
chainlaunch/network/

Publishing chains to the coordination network.
"""

from .options import (
    PublishOptions,
    PublishOption,
    with_campaign,
    with_chain_id,
    with_no_check,
    with_custom_genesis,
    with_shares,
)
from .publish import Network, PublishResult
from .types import (
    Coordinator,
    Campaign,
    MsgCreateCoordinator,
    MsgCreateCoordinatorResponse,
    MsgCreateCampaign,
    MsgCreateCampaignResponse,
    MsgCreateChain,
    MsgCreateChainResponse,
    MsgAddShares,
    MsgAddSharesResponse,
    MsgData,
    TxResponse,
)

__all__ = [
    # Workflow
    "Network",
    "PublishResult",
    # Options
    "PublishOptions",
    "PublishOption",
    "with_campaign",
    "with_chain_id",
    "with_no_check",
    "with_custom_genesis",
    "with_shares",
    # Records
    "Coordinator",
    "Campaign",
    # Messages
    "MsgCreateCoordinator",
    "MsgCreateCoordinatorResponse",
    "MsgCreateCampaign",
    "MsgCreateCampaignResponse",
    "MsgCreateChain",
    "MsgCreateChainResponse",
    "MsgAddShares",
    "MsgAddSharesResponse",
    "MsgData",
    "TxResponse",
]

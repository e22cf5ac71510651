"""
chainlaunch/config.py

Configuration constants and settings for chainlaunch.

Settings can be given programmatically or read from the environment:

    CHAINLAUNCH_ADDRESS_PREFIX      Bech32 prefix of the coordination chain
    CHAINLAUNCH_REQUEST_TIMEOUT     Deadline (seconds) for each remote call
    CHAINLAUNCH_GENESIS_TIMEOUT     Deadline (seconds) for genesis downloads
    CHAINLAUNCH_MAX_GENESIS_SIZE    Largest accepted genesis, in bytes
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging
import os

logger = logging.getLogger("chainlaunch.config")


# Address prefix of the coordination network (SPN)
SPN_ADDRESS_PREFIX = "spn"

# Denominations of campaign shares are prefixed with this
SHARE_DENOM_PREFIX = "s/"

# Genesis download settings
DEFAULT_GENESIS_TIMEOUT = 30.0          # seconds
MAX_GENESIS_SIZE = 64 * 1024 * 1024     # 64 MiB
GENESIS_ARCHIVE_MEMBER = "genesis.json"

# Progress messages
PUBLISHING_MESSAGE = "Publishing the network"

ENV_PREFIX = "CHAINLAUNCH_"


@dataclass
class LaunchConfig:
    """
    Settings shared by every publish call on a Network.

    Usage:
        config = LaunchConfig(request_timeout=20.0)
        config = LaunchConfig.from_env()
    """

    # Bech32 prefix used to resolve the publishing account's address
    address_prefix: str = SPN_ADDRESS_PREFIX

    # Deadline for each query / broadcast, None disables it
    request_timeout: Optional[float] = None

    # Genesis fetching
    genesis_timeout: float = DEFAULT_GENESIS_TIMEOUT
    max_genesis_size: int = MAX_GENESIS_SIZE

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "LaunchConfig":
        """
        Build a config from environment variables.

        Invalid values are logged and the default is kept.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            LaunchConfig
        """
        env = os.environ if environ is None else environ
        config = cls()

        prefix = env.get(f"{ENV_PREFIX}ADDRESS_PREFIX")
        if prefix:
            config.address_prefix = prefix.strip()

        timeout = _read_float(env, "REQUEST_TIMEOUT")
        if timeout is not None:
            config.request_timeout = timeout

        genesis_timeout = _read_float(env, "GENESIS_TIMEOUT")
        if genesis_timeout is not None:
            config.genesis_timeout = genesis_timeout

        max_size = env.get(f"{ENV_PREFIX}MAX_GENESIS_SIZE")
        if max_size:
            try:
                value = int(max_size)
                if value <= 0:
                    raise ValueError("must be positive")
                config.max_genesis_size = value
            except ValueError as e:
                logger.warning(f"Invalid {ENV_PREFIX}MAX_GENESIS_SIZE={max_size!r}: {e}")

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "address_prefix": self.address_prefix,
            "request_timeout": self.request_timeout,
            "genesis_timeout": self.genesis_timeout,
            "max_genesis_size": self.max_genesis_size,
        }


def _read_float(env, name: str) -> Optional[float]:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Invalid {ENV_PREFIX}{name}={raw!r}: not a number")
        return None
    if value <= 0:
        logger.warning(f"Invalid {ENV_PREFIX}{name}={raw!r}: must be positive")
        return None
    return value

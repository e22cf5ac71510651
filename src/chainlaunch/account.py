"""
chainlaunch/account.py

Static account resolver.

The publishing account is identified by a keyring name (used as the
broadcaster's signer) and resolves to one address per bech32 prefix.
"""

from dataclasses import dataclass, field
from typing import Dict

from .config import SPN_ADDRESS_PREFIX


@dataclass
class StaticAccount:
    """
    Account with pre-computed addresses.

    Example:
        account = StaticAccount("alice", {"spn": "spn1qy..."})
        account.address("spn")
    """
    name: str
    addresses: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def for_spn(cls, name: str, address: str) -> "StaticAccount":
        """Account that only knows its coordination-network address."""
        return cls(name=name, addresses={SPN_ADDRESS_PREFIX: address})

    def address(self, prefix: str) -> str:
        """
        Get the account's address for a network prefix.

        Raises:
            KeyError: If no address is known for the prefix
        """
        try:
            return self.addresses[prefix]
        except KeyError:
            raise KeyError(f"account {self.name!r} has no address for prefix {prefix!r}") from None

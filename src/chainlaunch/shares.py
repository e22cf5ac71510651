"""
chainlaunch/shares.py

Multi-denomination share amounts for campaigns.

Shares are coins whose denomination carries the "s/" prefix, e.g. a
campaign's share of "stake" is denominated "s/stake". The string form
matches the coordination chain's: "100s/stake,5s/token".
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Tuple

from .config import SHARE_DENOM_PREFIX
from .errors import InvalidSharesError

_COIN_RE = re.compile(r"^\s*(\d+)\s*([a-zA-Z][a-zA-Z0-9/:._-]{0,127})\s*$")


@dataclass(frozen=True)
class Coin:
    """A single non-negative amount of one denomination."""
    denom: str
    amount: int

    def __post_init__(self):
        if not self.denom:
            raise InvalidSharesError("denomination cannot be empty")
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise InvalidSharesError(f"amount for {self.denom} must be an integer")
        if self.amount < 0:
            raise InvalidSharesError(f"negative amount {self.amount} for {self.denom}")

    @classmethod
    def parse(cls, text: str) -> "Coin":
        """Parse a coin written as "<amount><denom>"."""
        match = _COIN_RE.match(text)
        if not match:
            raise InvalidSharesError(f"invalid coin: {text!r}")
        return cls(denom=match.group(2), amount=int(match.group(1)))

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


class Shares:
    """
    An immutable, denom-sorted set of share amounts.

    Zero amounts are dropped and repeated denominations are summed, so two
    Shares built from the same amounts compare equal.

    Example:
        shares = Shares.parse("100s/stake,5s/token")
        shares = Shares.from_coins([Coin("stake", 100)])  # -> 100s/stake
    """

    __slots__ = ("_coins",)

    def __init__(self, coins: Iterable[Coin] = ()):
        totals: Dict[str, int] = {}
        for coin in coins:
            if not isinstance(coin, Coin):
                raise InvalidSharesError(f"expected Coin, got {type(coin).__name__}")
            totals[coin.denom] = totals.get(coin.denom, 0) + coin.amount
        self._coins: Tuple[Coin, ...] = tuple(
            Coin(denom, amount)
            for denom, amount in sorted(totals.items())
            if amount > 0
        )

    @classmethod
    def from_coins(cls, coins: Iterable[Coin]) -> "Shares":
        """Convert plain coins to shares by prefixing their denominations."""
        return cls(
            coin if coin.denom.startswith(SHARE_DENOM_PREFIX)
            else Coin(SHARE_DENOM_PREFIX + coin.denom, coin.amount)
            for coin in coins
        )

    @classmethod
    def parse(cls, text: str) -> "Shares":
        """
        Parse a comma-separated share list.

        Args:
            text: e.g. "100s/stake,5s/token" (empty string gives empty Shares)

        Returns:
            Shares

        Raises:
            InvalidSharesError: If any entry is malformed
        """
        text = text.strip()
        if not text:
            return cls()
        return cls(Coin.parse(part) for part in text.split(","))

    @property
    def coins(self) -> Tuple[Coin, ...]:
        return self._coins

    def empty(self) -> bool:
        """True if there are no non-zero amounts."""
        return not self._coins

    def amount_of(self, denom: str) -> int:
        for coin in self._coins:
            if coin.denom == denom:
                return coin.amount
        return 0

    def to_dict(self) -> Dict[str, int]:
        return {coin.denom: coin.amount for coin in self._coins}

    def __iter__(self) -> Iterator[Coin]:
        return iter(self._coins)

    def __len__(self) -> int:
        return len(self._coins)

    def __bool__(self) -> bool:
        return bool(self._coins)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Shares):
            return NotImplemented
        return self._coins == other._coins

    def __hash__(self) -> int:
        return hash(self._coins)

    def __str__(self) -> str:
        return ",".join(str(coin) for coin in self._coins)

    def __repr__(self) -> str:
        return f"Shares({str(self)!r})"

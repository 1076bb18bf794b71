"""Core types for the multisend balance-change spec.

Addresses and denoms are plain strings. Amounts are Python ints; the
signed 128-bit range the ledger uses is enforced by the calculation, not
by these containers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from fractions import Fraction
from typing import Dict, List, Optional, Tuple, Union

RateLike = Union[Fraction, Decimal, int, float, str]

# (address, denom) -> signed delta; an absent key means zero.
DeltaKey = Tuple[str, str]
DeltaMap = Dict[DeltaKey, int]


@dataclass(frozen=True)
class Coin:
    denom: str
    amount: int


@dataclass
class Balance:
    address: str
    coins: List[Coin] = field(default_factory=list)

    def find_coin(self, denom: str) -> Optional[Coin]:
        """Return the first coin of ``denom``; later duplicates are ignored."""
        for coin in self.coins:
            if coin.denom == denom:
                return coin
        return None

    def amount_of(self, denom: str) -> int:
        coin = self.find_coin(denom)
        return coin.amount if coin is not None else 0


@dataclass(frozen=True)
class DenomDefinition:
    denom: str
    issuer: str
    burn_rate: RateLike = 0
    commission_rate: RateLike = 0


@dataclass
class MultiSend:
    inputs: List[Balance] = field(default_factory=list)
    outputs: List[Balance] = field(default_factory=list)

    def denoms(self) -> List[str]:
        """Distinct denoms referenced by the tx, in first-seen order."""
        seen: Dict[str, None] = {}
        for balance in (*self.inputs, *self.outputs):
            for coin in balance.coins:
                seen.setdefault(coin.denom, None)
        return list(seen)


@dataclass(frozen=True)
class FeeShare:
    address: str
    amount: int
    burn: int
    commission: int

    @property
    def total_debit(self) -> int:
        return self.amount + self.burn + self.commission


@dataclass
class DenomFees:
    denom: str
    issuer: str
    non_issuer_input_sum: int
    non_issuer_output_sum: int
    shares: List[FeeShare] = field(default_factory=list)

    @property
    def total_burn(self) -> int:
        return sum(s.burn for s in self.shares)

    @property
    def total_commission(self) -> int:
        return sum(s.commission for s in self.shares)

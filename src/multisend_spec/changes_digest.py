"""Canonical balance-change digest implementation (v1)."""
from __future__ import annotations

from typing import Any, Iterable

from blake3 import blake3

from .config import AMOUNT_BITS, CHANGES_DIGEST_VERSION
from .rates import check_i128

_AMOUNT_BYTES = AMOUNT_BITS // 8


def _u32_be(value: int) -> bytes:
    if value < 0:
        raise ValueError("u32 must be non-negative")
    return int(value).to_bytes(4, "big", signed=False)


def _str_field(value: str) -> bytes:
    raw = value.encode("utf-8")
    return _u32_be(len(raw)) + raw


def _iter_entries(changes: Iterable[dict[str, Any]]) -> Iterable[tuple[str, str, int]]:
    for balance in changes:
        address = balance.get("address", "")
        if not isinstance(address, str):
            raise TypeError("address must be string")
        for coin in balance.get("coins", []):
            amount = int(coin["amount"])
            if amount != 0:
                yield address, coin["denom"], amount


def compute_changes_digest(changes: Iterable[dict[str, Any]]) -> str:
    """Compute the changes digest v1 from serialized balance changes.

    Entries are sorted by (address, denom) so the digest does not depend on
    the order deltas were materialized in, then hashed with BLAKE3-256.
    """
    buf = bytearray(_u32_be(CHANGES_DIGEST_VERSION))
    for address, denom, amount in sorted(_iter_entries(changes)):
        check_i128(amount, "delta", address=address, denom=denom)
        buf += _str_field(address)
        buf += _str_field(denom)
        buf += amount.to_bytes(_AMOUNT_BYTES, "big", signed=True)
    return blake3(buf).hexdigest()

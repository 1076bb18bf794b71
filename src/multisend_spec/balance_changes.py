"""Balance-change entrypoints for multisend transactions."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .errors import ErrorCode, SpecError
from .multisend import process
from .rates import check_i128, parse_rate
from .types import Balance, Coin, DeltaKey, DeltaMap, DenomDefinition, DenomFees, MultiSend


class CheckResult:
    """Thin wrapper for calculate results."""

    def __init__(
        self,
        ok: bool,
        error: Optional[SpecError] = None,
        changes: Optional[List[Balance]] = None,
    ):
        self.ok = ok
        self.error = error
        self.changes = changes if changes is not None else []

    @classmethod
    def success(cls, changes: List[Balance]) -> "CheckResult":
        return cls(True, None, changes)

    @classmethod
    def failure(cls, error: SpecError) -> "CheckResult":
        return cls(False, error)


def _validate_amounts(balances: Sequence[Balance], what: str) -> None:
    for balance in balances:
        for coin in balance.coins:
            if not isinstance(coin.amount, int) or isinstance(coin.amount, bool):
                raise SpecError(
                    ErrorCode.INVALID_AMOUNT,
                    f"{what} amount must be an integer",
                    address=balance.address,
                    denom=coin.denom,
                )
            if coin.amount < 0:
                raise SpecError(
                    ErrorCode.INVALID_AMOUNT,
                    f"negative {what} amount",
                    address=balance.address,
                    denom=coin.denom,
                )
            check_i128(coin.amount, f"{what} amount", address=balance.address, denom=coin.denom)


def _validate_definitions(definitions: Sequence[DenomDefinition]) -> None:
    seen = set()
    for definition in definitions:
        if definition.denom in seen:
            raise SpecError(ErrorCode.DUPLICATE_DENOM, "denom defined twice", denom=definition.denom)
        seen.add(definition.denom)
        parse_rate(definition.burn_rate, denom=definition.denom)
        parse_rate(definition.commission_rate, denom=definition.denom)


def _validate_known_denoms(tx: MultiSend, definitions: Sequence[DenomDefinition]) -> None:
    known = {d.denom for d in definitions}
    for denom in tx.denoms():
        if denom not in known:
            raise SpecError(ErrorCode.UNKNOWN_DENOM, "no definition for denom", denom=denom)


def _verify_args(
    original_balances: Sequence[Balance],
    definitions: Sequence[DenomDefinition],
    tx: MultiSend,
    strict_denoms: bool,
) -> None:
    _validate_definitions(definitions)
    _validate_amounts(original_balances, "balance")
    _validate_amounts(tx.inputs, "input")
    _validate_amounts(tx.outputs, "output")
    if strict_denoms:
        _validate_known_denoms(tx, definitions)


def to_balance_map(balances: Sequence[Balance]) -> Dict[DeltaKey, int]:
    """Flatten balances to (address, denom) -> amount; the first entry wins."""
    result: Dict[DeltaKey, int] = {}
    for balance in balances:
        for coin in balance.coins:
            result.setdefault((balance.address, coin.denom), coin.amount)
    return result


def from_delta_map(changes: DeltaMap) -> List[Balance]:
    """Group non-zero deltas per address, keeping first-insertion order."""
    by_address: Dict[str, Balance] = {}
    for (address, denom), amount in changes.items():
        if amount == 0:
            continue
        balance = by_address.setdefault(address, Balance(address=address))
        balance.coins.append(Coin(denom=denom, amount=amount))
    return list(by_address.values())


def check_solvency(changes: DeltaMap, original: Dict[DeltaKey, int]) -> None:
    """Every deduction must be covered by the pre-tx balance.

    Runs over the final map so a sender that also receives in the same
    denom is judged on its net change.
    """
    for (address, denom), amount in changes.items():
        if amount >= 0:
            continue
        if original.get((address, denom), 0) < -amount:
            raise SpecError(
                ErrorCode.INSUFFICIENT_BALANCE,
                f"needs {-amount}, has {original.get((address, denom), 0)}",
                address=address,
                denom=denom,
            )


def calculate_fees(definitions: Sequence[DenomDefinition], tx: MultiSend) -> List[DenomFees]:
    """Per-denom burn/commission breakdown, without the solvency check."""
    _verify_args((), definitions, tx, strict_denoms=False)
    _, breakdown = process(tx, list(definitions))
    return breakdown


def calculate_balance_changes(
    original_balances: Sequence[Balance],
    definitions: Sequence[DenomDefinition],
    tx: MultiSend,
    *,
    strict_denoms: bool = False,
) -> List[Balance]:
    """Compute the per-account deltas a multisend produces.

    Raises ``SpecError`` when the tx must be rejected. Denoms without a
    definition are ignored unless ``strict_denoms`` is set.
    """
    _verify_args(original_balances, definitions, tx, strict_denoms)
    changes, _ = process(tx, list(definitions))
    check_solvency(changes, to_balance_map(original_balances))
    return from_delta_map(changes)


def check_multisend(
    original_balances: Sequence[Balance],
    definitions: Sequence[DenomDefinition],
    tx: MultiSend,
    *,
    strict_denoms: bool = False,
) -> CheckResult:
    try:
        changes = calculate_balance_changes(
            original_balances, definitions, tx, strict_denoms=strict_denoms
        )
    except SpecError as exc:
        return CheckResult.failure(exc)
    return CheckResult.success(changes)

"""Helpers to serialize/deserialize multisend fixtures."""

from __future__ import annotations

from fractions import Fraction
from typing import Any, Sequence

from multisend_spec.balance_changes import CheckResult
from multisend_spec.rates import format_rate
from multisend_spec.types import Balance, Coin, DenomDefinition, MultiSend, RateLike


def _rate_to_json(rate: RateLike) -> str:
    # Rates are stored as strings so fractions survive the round trip exactly.
    if isinstance(rate, Fraction):
        return format_rate(rate)
    if isinstance(rate, float):
        return repr(rate)
    return str(rate)


def balance_to_json(balance: Balance) -> dict[str, Any]:
    return {
        "address": balance.address,
        "coins": [{"denom": c.denom, "amount": c.amount} for c in balance.coins],
    }


def balance_from_json(data: dict[str, Any]) -> Balance:
    return Balance(
        address=data["address"],
        coins=[Coin(denom=c["denom"], amount=int(c["amount"])) for c in data.get("coins", [])],
    )


def balances_to_json(balances: Sequence[Balance]) -> list[dict[str, Any]]:
    return [balance_to_json(b) for b in balances]


def balances_from_json(data: list[dict[str, Any]]) -> list[Balance]:
    return [balance_from_json(b) for b in data]


def definition_to_json(definition: DenomDefinition) -> dict[str, Any]:
    return {
        "denom": definition.denom,
        "issuer": definition.issuer,
        "burn_rate": _rate_to_json(definition.burn_rate),
        "commission_rate": _rate_to_json(definition.commission_rate),
    }


def definition_from_json(data: dict[str, Any]) -> DenomDefinition:
    return DenomDefinition(
        denom=data["denom"],
        issuer=data["issuer"],
        burn_rate=data.get("burn_rate", "0"),
        commission_rate=data.get("commission_rate", "0"),
    )


def tx_to_json(tx: MultiSend) -> dict[str, Any]:
    return {
        "inputs": balances_to_json(tx.inputs),
        "outputs": balances_to_json(tx.outputs),
    }


def tx_from_json(data: dict[str, Any]) -> MultiSend:
    return MultiSend(
        inputs=balances_from_json(data.get("inputs", [])),
        outputs=balances_from_json(data.get("outputs", [])),
    )


def result_to_json(result: CheckResult) -> dict[str, Any]:
    return {
        "ok": result.ok,
        "error": result.error.code.name if result.error else None,
        "changes": balances_to_json(result.changes),
    }


def case_to_json(
    name: str,
    original_balances: Sequence[Balance],
    definitions: Sequence[DenomDefinition],
    tx: MultiSend,
    result: CheckResult,
    *,
    description: str = "",
    strict_denoms: bool = False,
) -> dict[str, Any]:
    case: dict[str, Any] = {
        "name": name,
        "original_balances": balances_to_json(original_balances),
        "definitions": [definition_to_json(d) for d in definitions],
        "tx": tx_to_json(tx),
        "expected": result_to_json(result),
    }
    if description:
        case["description"] = description
    if strict_denoms:
        case["strict_denoms"] = True
    return case


def case_from_json(
    data: dict[str, Any],
) -> tuple[list[Balance], list[DenomDefinition], MultiSend, bool]:
    return (
        balances_from_json(data.get("original_balances", [])),
        [definition_from_json(d) for d in data.get("definitions", [])],
        tx_from_json(data.get("tx", {})),
        bool(data.get("strict_denoms", False)),
    )


def changes_key(changes: list[dict[str, Any]]) -> frozenset[tuple[str, str, int]]:
    """Order-independent view of serialized changes."""
    return frozenset(
        (b["address"], c["denom"], int(c["amount"])) for b in changes for c in b.get("coins", [])
    )

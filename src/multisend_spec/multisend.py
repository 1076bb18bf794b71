"""Per-denom multisend pipeline (conservation, fees, deltas)."""

from __future__ import annotations

from typing import List, Tuple

from .errors import ErrorCode, SpecError
from .fees import coin_sum, compute_denom_fees
from .rates import check_i128
from .types import DeltaMap, DenomDefinition, DenomFees, MultiSend


def validate_inout(tx: MultiSend, definition: DenomDefinition) -> None:
    denom = definition.denom
    input_sum = check_i128(coin_sum(tx.inputs, denom), "input sum", denom=denom)
    output_sum = check_i128(coin_sum(tx.outputs, denom), "output sum", denom=denom)
    if input_sum != output_sum:
        raise SpecError(
            ErrorCode.INPUT_OUTPUT_MISMATCH,
            f"inputs sum to {input_sum}, outputs to {output_sum}",
            denom=denom,
        )


def _credit(changes: DeltaMap, address: str, denom: str, amount: int) -> None:
    key = (address, denom)
    changes[key] = check_i128(changes.get(key, 0) + amount, "balance change", address=address, denom=denom)


def process_inputs(fees: DenomFees, changes: DeltaMap) -> None:
    for share in fees.shares:
        _credit(changes, share.address, fees.denom, -share.total_debit)
        _credit(changes, fees.issuer, fees.denom, share.commission)


def process_outputs(tx: MultiSend, definition: DenomDefinition, changes: DeltaMap) -> None:
    for output in tx.outputs:
        coin = output.find_coin(definition.denom)
        if coin is not None:
            _credit(changes, output.address, coin.denom, coin.amount)


def process(tx: MultiSend, definitions: List[DenomDefinition]) -> Tuple[DeltaMap, List[DenomFees]]:
    """Run every definition through the pipeline; fail fast on the first error."""
    changes: DeltaMap = {}
    breakdown: List[DenomFees] = []
    for definition in definitions:
        validate_inout(tx, definition)
        fees = compute_denom_fees(tx.inputs, tx.outputs, definition)
        process_inputs(fees, changes)
        process_outputs(tx, definition, changes)
        breakdown.append(fees)
    return changes, breakdown

"""Solvency and conservation ordering fixtures."""

from __future__ import annotations

import pytest

from multisend_spec.balance_changes import check_solvency, from_delta_map, to_balance_map
from multisend_spec.errors import ErrorCode, SpecError
from multisend_spec.test_accounts import (
    ACCOUNT1,
    ACCOUNT2,
    DENOM1,
    DENOM2,
    ISSUER_A,
    ISSUER_B,
    RECIPIENT,
    bal,
    delta_of,
)
from multisend_spec.types import DenomDefinition, MultiSend

_PATH = "multisend/solvency.json"

_FEES = [DenomDefinition(DENOM1, ISSUER_A, burn_rate="0.08", commission_rate="0.12")]


def _send(amount: int) -> MultiSend:
    return MultiSend(
        inputs=[bal(ACCOUNT1, (DENOM1, amount))],
        outputs=[bal(RECIPIENT, (DENOM1, amount))],
    )


def test_exact_balance_covers_principal_and_fees(balance_test) -> None:
    result = balance_test(
        _PATH, "exact_balance_covers_principal_and_fees", [bal(ACCOUNT1, (DENOM1, 1200))], _FEES, _send(1000)
    )
    assert result.ok
    assert delta_of(result.changes, ACCOUNT1, DENOM1) == -1200


def test_one_short_of_fees(balance_test) -> None:
    """Balance covers the principal but not principal + burn + commission."""
    result = balance_test(
        _PATH, "one_short_of_fees", [bal(ACCOUNT1, (DENOM1, 1199))], _FEES, _send(1000)
    )
    assert not result.ok
    assert result.error.code == ErrorCode.INSUFFICIENT_BALANCE


def test_missing_original_balance(balance_test) -> None:
    result = balance_test(_PATH, "missing_original_balance", [], _FEES, _send(1))
    assert not result.ok
    assert result.error.code == ErrorCode.INSUFFICIENT_BALANCE


def test_balance_in_other_denom_does_not_count(balance_test) -> None:
    result = balance_test(
        _PATH,
        "balance_in_other_denom_does_not_count",
        [bal(ACCOUNT1, (DENOM2, 10**6))],
        _FEES,
        _send(10),
    )
    assert not result.ok
    assert result.error.denom == DENOM1


def test_mismatch_reported_before_insufficient_balance(balance_test) -> None:
    tx = MultiSend(
        inputs=[bal(ACCOUNT1, (DENOM1, 350))],
        outputs=[bal(RECIPIENT, (DENOM1, 450))],
    )
    result = balance_test(_PATH, "mismatch_reported_before_insufficient_balance", [], _FEES, tx)
    assert result.error.code == ErrorCode.INPUT_OUTPUT_MISMATCH


def test_first_mismatching_definition_is_reported(balance_test) -> None:
    definitions = [DenomDefinition(DENOM2, ISSUER_B), DenomDefinition(DENOM1, ISSUER_A)]
    tx = MultiSend(
        inputs=[bal(ACCOUNT1, (DENOM1, 1), (DENOM2, 1))],
        outputs=[bal(RECIPIENT, (DENOM1, 2), (DENOM2, 2))],
    )
    result = balance_test(_PATH, "first_mismatching_definition_is_reported", [], definitions, tx)
    assert result.error.code == ErrorCode.INPUT_OUTPUT_MISMATCH
    assert result.error.denom == DENOM2


def test_self_send_nets_out(balance_test) -> None:
    """Sending to yourself without fees needs no balance and produces no change."""
    tx = MultiSend(
        inputs=[bal(ACCOUNT1, (DENOM1, 500))],
        outputs=[bal(ACCOUNT1, (DENOM1, 500))],
    )
    result = balance_test(
        _PATH, "self_send_nets_out", [], [DenomDefinition(DENOM1, ISSUER_A)], tx
    )
    assert result.ok
    assert result.changes == []


def test_self_send_still_pays_fees(balance_test) -> None:
    tx = MultiSend(
        inputs=[bal(ACCOUNT1, (DENOM1, 500))],
        outputs=[bal(ACCOUNT1, (DENOM1, 500))],
    )
    ok = balance_test(_PATH, "self_send_pays_fees", [bal(ACCOUNT1, (DENOM1, 100))], _FEES, tx)
    assert ok.ok
    assert delta_of(ok.changes, ACCOUNT1, DENOM1) == -100

    short = balance_test(_PATH, "self_send_fees_uncovered", [bal(ACCOUNT1, (DENOM1, 99))], _FEES, tx)
    assert short.error.code == ErrorCode.INSUFFICIENT_BALANCE


def test_incoming_transfer_offsets_outgoing(balance_test) -> None:
    """Solvency is judged on the net change per (address, denom)."""
    tx = MultiSend(
        inputs=[bal(ACCOUNT1, (DENOM1, 100)), bal(ACCOUNT2, (DENOM1, 100))],
        outputs=[bal(ACCOUNT1, (DENOM1, 80)), bal(RECIPIENT, (DENOM1, 120))],
    )
    result = balance_test(
        _PATH,
        "incoming_transfer_offsets_outgoing",
        [bal(ACCOUNT1, (DENOM1, 20)), bal(ACCOUNT2, (DENOM1, 100))],
        [DenomDefinition(DENOM1, ISSUER_A)],
        tx,
    )
    assert result.ok
    assert delta_of(result.changes, ACCOUNT1, DENOM1) == -20


def test_duplicate_balance_entries_use_first_match() -> None:
    original = to_balance_map([bal(ACCOUNT1, (DENOM1, 5), (DENOM1, 500)), bal(ACCOUNT1, (DENOM1, 50))])
    assert original == {(ACCOUNT1, DENOM1): 5}


def test_check_solvency_ignores_credits() -> None:
    check_solvency({(RECIPIENT, DENOM1): 10**30}, {})


def test_check_solvency_carries_context() -> None:
    with pytest.raises(SpecError) as excinfo:
        check_solvency({(ACCOUNT1, DENOM1): -10}, {(ACCOUNT1, DENOM1): 9})
    assert excinfo.value.code == ErrorCode.INSUFFICIENT_BALANCE
    assert (excinfo.value.address, excinfo.value.denom) == (ACCOUNT1, DENOM1)


def test_from_delta_map_groups_by_address_and_drops_zeros() -> None:
    changes = from_delta_map(
        {
            (ACCOUNT1, DENOM1): -5,
            (RECIPIENT, DENOM1): 5,
            (ACCOUNT1, DENOM2): 0,
            (ISSUER_A, DENOM1): 0,
            (ACCOUNT1, DENOM2 + "x"): 7,
        }
    )
    assert [b.address for b in changes] == [ACCOUNT1, RECIPIENT]
    assert [(c.denom, c.amount) for c in changes[0].coins] == [(DENOM1, -5), (DENOM2 + "x", 7)]

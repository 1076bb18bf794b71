"""Burn and commission distribution across multisend inputs.

Fees are assessed only on the part of a transfer that actually leaves
non-issuer hands. With ``N_in``/``N_out`` the input/output sums that
exclude the issuer, every non-issuer input ``a`` owes::

    burn       = ceil(a * burn_rate       * min(N_in, N_out) / N_in)
    commission = ceil(a * commission_rate * min(N_in, N_out) / N_in)

When outputs cover the whole non-issuer input the factor is 1 and each
sender pays on its full input; otherwise shares shrink in proportion.

Each share is rounded up on its own; the totals are the sums of the
rounded shares. Issuer inputs owe nothing.
"""

from __future__ import annotations

from typing import List

from .rates import check_i128, parse_rate, scaled_share
from .types import Balance, DenomDefinition, DenomFees, FeeShare


def coin_sum(balances: List[Balance], denom: str) -> int:
    return sum(b.amount_of(denom) for b in balances)


def non_issuer_sum(balances: List[Balance], definition: DenomDefinition) -> int:
    return sum(
        b.amount_of(definition.denom) for b in balances if b.address != definition.issuer
    )


def compute_denom_fees(inputs: List[Balance], outputs: List[Balance], definition: DenomDefinition) -> DenomFees:
    denom = definition.denom
    burn_rate = parse_rate(definition.burn_rate, denom=denom)
    commission_rate = parse_rate(definition.commission_rate, denom=denom)

    n_in = check_i128(non_issuer_sum(inputs, definition), "non-issuer input sum", denom=denom)
    n_out = check_i128(non_issuer_sum(outputs, definition), "non-issuer output sum", denom=denom)
    num, den = min(n_in, n_out), n_in

    fees = DenomFees(
        denom=denom,
        issuer=definition.issuer,
        non_issuer_input_sum=n_in,
        non_issuer_output_sum=n_out,
    )

    for balance in inputs:
        coin = balance.find_coin(denom)
        if coin is None:
            continue
        if balance.address == definition.issuer or den == 0:
            burn = commission = 0
        else:
            burn = scaled_share(coin.amount, burn_rate, num, den)
            commission = scaled_share(coin.amount, commission_rate, num, den)
        fees.shares.append(
            FeeShare(address=balance.address, amount=coin.amount, burn=burn, commission=commission)
        )

    return fees

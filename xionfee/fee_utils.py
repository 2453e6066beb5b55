"""Combining and comparing fee requirements."""

from __future__ import annotations

from bisect import bisect_left
from typing import Sequence

from xionfee.coins import DecCoin, amount_of, sorted_coins


class GlobalFeeNotFoundError(LookupError):
    """Raised when no global fee is configured."""


def find(coins: Sequence[DecCoin], denom: str) -> DecCoin | None:
    """Binary-search coins sorted by denomination; None when absent."""
    position = bisect_left(coins, denom, key=lambda coin: coin.denom)
    if position < len(coins) and coins[position].denom == denom:
        return coins[position]
    return None


def combined_fee_requirement(global_fees: Sequence[DecCoin], min_gas_prices: Sequence[DecCoin]) -> list[DecCoin]:
    """Take each global fee, raised to the local minimum where that is higher."""
    if not global_fees:
        raise GlobalFeeNotFoundError("global fee cannot be empty: not found")
    if not min_gas_prices:
        return list(global_fees)
    combined = []
    for fee in global_fees:
        local = find(min_gas_prices, fee.denom)
        combined.append(local if local is not None and local.amount > fee.amount else fee)
    return sorted_coins(combined)


def denoms_subset_of(a: Sequence[DecCoin], b: Sequence[DecCoin]) -> bool:
    """True when every denomination of ``a`` holds a non-zero amount in ``b``."""
    if len(a) > len(b):
        return False
    return all(amount_of(b, coin.denom) != 0 for coin in a)


def is_all_gt(a: Sequence[DecCoin], b: Sequence[DecCoin]) -> bool:
    """True when ``a`` exceeds ``b`` in every denomination of ``b``."""
    if not a:
        return False
    if not b:
        return True
    if not denoms_subset_of(b, a):
        return False
    return all(amount_of(a, coin.denom) > coin.amount for coin in b)


def max_coins(a: Sequence[DecCoin], b: Sequence[DecCoin]) -> Sequence[DecCoin]:
    """Return ``a`` if it is greater everywhere, otherwise ``b``."""
    return a if is_all_gt(a, b) else b
"""Decimal coins: a denomination paired with a decimal amount."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable

_DENOM_PATTERN = re.compile(r"[a-zA-Z][a-zA-Z0-9/:._-]{2,127}")


class CoinError(ValueError):
    """Raised for a malformed denomination or amount."""


def _to_decimal(value: object) -> Decimal:
    if isinstance(value, bool):
        raise CoinError(f"invalid coin amount: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(value)
        except InvalidOperation as exc:
            raise CoinError(f"invalid coin amount: {value!r}") from exc
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        raise CoinError(f"invalid coin amount: {value!r}")
    if not result.is_finite():
        raise CoinError(f"invalid coin amount: {value!r}")
    return result


@dataclass(frozen=True)
class DecCoin:
    """A coin whose amount is a decimal number."""

    denom: str
    amount: Decimal = Decimal(0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _to_decimal(self.amount))

    def is_negative(self) -> bool:
        return self.amount < 0

    def is_zero(self) -> bool:
        return self.amount == 0

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


def validate_denom(denom: str) -> None:
    """Raise CoinError unless ``denom`` is a well-formed denomination."""
    if not isinstance(denom, str) or not _DENOM_PATTERN.fullmatch(denom):
        raise CoinError(f"invalid denom: {denom}")


def sorted_coins(coins: Iterable[DecCoin]) -> list[DecCoin]:
    """Return the coins ordered by denomination."""
    return sorted(coins, key=lambda coin: coin.denom)


def amount_of(coins: Iterable[DecCoin], denom: str) -> Decimal:
    """Return the amount held in ``denom``, or zero when absent."""
    validate_denom(denom)
    return next((coin.amount for coin in coins if coin.denom == denom), Decimal(0))


def all_zero(coins: Iterable[DecCoin]) -> bool:
    """True when every coin has a zero amount (an empty set counts as zero)."""
    return all(coin.is_zero() for coin in coins)


def coins_equal(a: Iterable[DecCoin], b: Iterable[DecCoin]) -> bool:
    """Compare two coin sets irrespective of their order."""
    left, right = list(a), list(b)
    if len(left) != len(right):
        return False
    return sorted_coins(left) == sorted_coins(right)
"""Checking that a block minted or burned exactly what the mint rules require.

At a block the distribution account receives the collected fees plus any
newly minted tokens. When the fees fall short of the block provision, the
shortfall is minted. When they exceed it, the excess is burned. Otherwise
the total supply is unchanged.
"""

from __future__ import annotations

import re
from decimal import ROUND_DOWN, Decimal, localcontext
from enum import Enum

_PRECISION = 18
_QUANTUM = Decimal(1).scaleb(-_PRECISION)
_DEC_PATTERN = re.compile(r"-?(?:\d+(?:\.\d+)?|\.\d+)")


class MintCheckError(ValueError):
    """Raised when provision input is malformed or a block breaks the mint rules."""


class MintOutcome(Enum):
    """What the mint module did to the total supply at a block."""

    MINTED = "minted"
    BURNED = "burned"
    UNCHANGED = "unchanged"


def _parse_dec(value: object) -> Decimal:
    if isinstance(value, bool):
        raise MintCheckError(f"invalid decimal: {value!r}")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise MintCheckError(f"invalid decimal: {value!r}")
        text = format(value, "f")
    elif isinstance(value, int):
        text = str(value)
    elif isinstance(value, str):
        text = value
    else:
        raise MintCheckError(f"invalid decimal: {value!r}")
    if not _DEC_PATTERN.fullmatch(text):
        raise MintCheckError(f"expected decimal string: {text!r}")
    if "." in text and len(text.split(".", 1)[1]) > _PRECISION:
        raise MintCheckError(f"value {text!r} has too much precision, maximum {_PRECISION}, decimal places")
    return Decimal(text)


def block_provision(annual_provision, blocks_per_year: int) -> Decimal:
    """The per-block share of the annual provision, truncated to 18 decimal places."""
    if isinstance(blocks_per_year, bool) or not isinstance(blocks_per_year, int):
        raise MintCheckError(f"blocks per year must be an integer, got {blocks_per_year!r}")
    if blocks_per_year == 0:
        raise MintCheckError("blocks per year cannot be zero")
    annual = _parse_dec(annual_provision)
    with localcontext() as ctx:
        ctx.prec = 200
        ctx.rounding = ROUND_DOWN
        share = annual / Decimal(blocks_per_year)
        return share.quantize(_QUANTUM, rounding=ROUND_DOWN)


def _fees_and_change(
    previous_supply: int, current_supply: int, previous_distribution: int, current_distribution: int
) -> tuple[int, int]:
    for name, value in (
        ("previous supply", previous_supply),
        ("current supply", current_supply),
        ("previous distribution balance", previous_distribution),
        ("current distribution balance", current_distribution),
    ):
        if isinstance(value, bool) or not isinstance(value, int):
            raise MintCheckError(f"{name} must be an integer, got {value!r}")
    token_change = current_supply - previous_supply
    delta = current_distribution - previous_distribution
    return delta - token_change, token_change


def _truncated(provision) -> int:
    if isinstance(provision, Decimal):
        if not provision.is_finite():
            raise MintCheckError(f"invalid provision: {provision!r}")
        return int(provision)
    return int(_parse_dec(provision))


def classify_mint(
    previous_supply: int,
    current_supply: int,
    previous_distribution: int,
    current_distribution: int,
    provision,
) -> tuple[MintOutcome, int]:
    """Return what the block should have done and by how many tokens.

    Fees accrued are the distribution account's growth less the change in
    total supply; they are compared with the truncated block provision.
    """
    fees, _ = _fees_and_change(previous_supply, current_supply, previous_distribution, current_distribution)
    whole_provision = _truncated(provision)
    if whole_provision > fees:
        return MintOutcome.MINTED, whole_provision - fees
    if whole_provision < fees:
        return MintOutcome.BURNED, fees - whole_provision
    return MintOutcome.UNCHANGED, 0


def verify_mint(
    previous_supply: int,
    current_supply: int,
    previous_distribution: int,
    current_distribution: int,
    provision,
) -> MintOutcome:
    """Check the supply change against the mint rules; raise MintCheckError if it differs."""
    _, token_change = _fees_and_change(
        previous_supply, current_supply, previous_distribution, current_distribution
    )
    outcome, amount = classify_mint(
        previous_supply, current_supply, previous_distribution, current_distribution, provision
    )
    if outcome is MintOutcome.MINTED and amount != token_change:
        raise MintCheckError(f"minted tokens {amount} differ from token change {token_change}")
    if outcome is MintOutcome.BURNED and amount != abs(token_change):
        raise MintCheckError(f"burned tokens {amount} differ from token change {token_change}")
    if outcome is MintOutcome.UNCHANGED and token_change != 0:
        raise MintCheckError(f"no tokens should be minted or burned, but token change is {token_change}")
    return outcome
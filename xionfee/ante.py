"""Ante handler step that sets the fee requirement from global and local gas prices."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Protocol, Sequence

from xionfee.coins import DecCoin, all_zero, sorted_coins
from xionfee.fee_utils import max_coins
from xionfee.params import (
    PARAM_STORE_KEY_BYPASS_MIN_FEE_MSG_TYPES,
    PARAM_STORE_KEY_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE,
    PARAM_STORE_KEY_MIN_GAS_PRICES,
    ParamSubspace,
)

_log = logging.getLogger(__name__)


class _ParamSource(Protocol):
    def has(self, key: bytes) -> bool: ...

    def get(self, key: bytes) -> Any: ...


@dataclass(frozen=True)
class Context:
    """The slice of execution state the fee check reads and writes."""

    min_gas_prices: tuple[DecCoin, ...] = ()
    is_check_tx: bool = False
    chain_id: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "min_gas_prices", tuple(self.min_gas_prices))

    def with_min_gas_prices(self, min_gas_prices: Iterable[DecCoin]) -> Context:
        return replace(self, min_gas_prices=tuple(min_gas_prices))

    def with_is_check_tx(self, is_check_tx: bool) -> Context:
        return replace(self, is_check_tx=is_check_tx)


@dataclass(frozen=True)
class FeeTx:
    """A transaction carrying message type URLs, a fee and a gas limit."""

    msgs: tuple[str, ...] = ()
    fee: tuple[DecCoin, ...] = ()
    gas_limit: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "msgs", tuple(self.msgs))
        object.__setattr__(self, "fee", tuple(self.fee))


AnteHandler = Callable[[Context, Any, bool], Context]


@dataclass(frozen=True)
class FeeDecorator:
    """Raises the context's minimum gas prices to the network requirement.

    Simulations and transactions made only of bypass message types are
    passed on unchanged.
    """

    global_min_fee_param_source: _ParamSource
    staking_keeper_bond_denom: Callable[[Context], str]

    def ante_handle(self, ctx: Context, tx: Any, simulate: bool, next_handler: AnteHandler) -> Context:
        if not isinstance(tx, FeeTx):
            raise TypeError("Tx must implement the FeeTx interface: tx parse error")
        if simulate or self.contains_only_bypass_min_fee_msgs(ctx, tx.msgs):
            return next_handler(ctx, tx, simulate)
        fee_required = self.get_tx_fee_required(ctx, tx)
        return next_handler(ctx.with_min_gas_prices(fee_required), tx, simulate)

    def get_tx_fee_required(self, ctx: Context, tx: FeeTx | None) -> list[DecCoin]:
        """Global fees in delivery; the larger of local and global fees in CheckTx."""
        global_fees = self.get_global_fee(ctx)
        if not ctx.is_check_tx:
            return global_fees
        local_fees = get_min_gas_price(ctx)
        fee_required = list(max_coins(local_fees, global_fees))
        _log.debug(
            "debugging globalfee: fee required=%s tx=%s min gas prices=%s global fees=%s local fees=%s",
            fee_required,
            tx,
            list(ctx.min_gas_prices),
            global_fees,
            local_fees,
        )
        return fee_required

    def get_global_fee(self, ctx: Context) -> list[DecCoin]:
        """The global minimum gas prices, sorted; a zero bond-denom coin when unset."""
        source = self.global_min_fee_param_source
        prices: Sequence[DecCoin] = []
        if source.has(PARAM_STORE_KEY_MIN_GAS_PRICES):
            prices = source.get(PARAM_STORE_KEY_MIN_GAS_PRICES) or []
        if not prices:
            prices = self.default_zero_global_fee(ctx)
        return sorted_coins(prices)

    def default_zero_global_fee(self, ctx: Context) -> list[DecCoin]:
        bond_denom = self.staking_keeper_bond_denom(ctx)
        if not bond_denom:
            raise ValueError("empty staking bond denomination")
        return [DecCoin(bond_denom, 0)]

    def contains_only_bypass_min_fee_msgs(self, ctx: Context, msgs: Iterable[str]) -> bool:
        bypass = set(self.get_bypass_msg_types(ctx))
        return all(msg in bypass for msg in msgs)

    def get_bypass_msg_types(self, ctx: Context) -> list[str]:
        source = self.global_min_fee_param_source
        if source.has(PARAM_STORE_KEY_BYPASS_MIN_FEE_MSG_TYPES):
            return list(source.get(PARAM_STORE_KEY_BYPASS_MIN_FEE_MSG_TYPES) or [])
        return []

    def get_max_total_bypass_min_fee_msg_gas_usage(self, ctx: Context) -> int:
        source = self.global_min_fee_param_source
        if source.has(PARAM_STORE_KEY_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE):
            return int(source.get(PARAM_STORE_KEY_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE))
        return 0


def new_fee_decorator(subspace: ParamSubspace, bond_denom: Callable[[Context], str]) -> FeeDecorator:
    if not subspace.has_key_table():
        raise RuntimeError("global fee paramspace was not set up via module")
    return FeeDecorator(subspace, bond_denom)


def get_min_gas_price(ctx: Context) -> list[DecCoin]:
    """The node's local minimum gas prices, sorted; empty when all are zero."""
    if all_zero(ctx.min_gas_prices):
        return []
    return sorted_coins(ctx.min_gas_prices)
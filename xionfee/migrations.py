"""In-place store migrations for the global fee parameters."""

from __future__ import annotations

from dataclasses import dataclass

from xionfee.params import (
    PARAM_STORE_KEY_MIN_GAS_PRICES,
    Params,
    ParamSubspace,
    default_params,
    param_key_table,
)


def migrate_store(subspace: ParamSubspace) -> None:
    """Keep the minimum gas prices and add the default bypass parameters."""
    old_min_gas_prices = subspace.get(PARAM_STORE_KEY_MIN_GAS_PRICES)
    defaults = default_params()
    params = Params(
        minimum_gas_prices=list(old_min_gas_prices or []),
        bypass_min_fee_msg_types=defaults.bypass_min_fee_msg_types,
        max_total_bypass_min_fee_msg_gas_usage=defaults.max_total_bypass_min_fee_msg_gas_usage,
    )
    if not subspace.has_key_table():
        subspace = subspace.with_key_table(param_key_table())
    subspace.set_param_set(params)


@dataclass(frozen=True)
class Migrator:
    """Runs the module's store migrations against its parameter subspace."""

    subspace: ParamSubspace

    def migrate_1_to_2(self) -> None:
        migrate_store(self.subspace)
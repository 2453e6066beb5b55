"""Read-only query service for the global fee parameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from xionfee.params import (
    PARAM_STORE_KEY_BYPASS_MIN_FEE_MSG_TYPES,
    PARAM_STORE_KEY_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE,
    PARAM_STORE_KEY_MIN_GAS_PRICES,
    Params,
)


class _ParamSource(Protocol):
    def has(self, key: bytes) -> bool: ...

    def get(self, key: bytes) -> Any: ...


@dataclass(frozen=True)
class GrpcQuerier:
    """Answers parameter queries from a parameter source."""

    param_source: _ParamSource

    def params(self) -> Params:
        """Return the stored parameters, with zero values for unset ones."""
        source = self.param_source
        min_gas_prices = []
        bypass_types = []
        max_gas_usage = 0
        if source.has(PARAM_STORE_KEY_MIN_GAS_PRICES):
            min_gas_prices = list(source.get(PARAM_STORE_KEY_MIN_GAS_PRICES))
        if source.has(PARAM_STORE_KEY_BYPASS_MIN_FEE_MSG_TYPES):
            bypass_types = list(source.get(PARAM_STORE_KEY_BYPASS_MIN_FEE_MSG_TYPES))
        if source.has(PARAM_STORE_KEY_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE):
            max_gas_usage = int(source.get(PARAM_STORE_KEY_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE))
        return Params(
            minimum_gas_prices=min_gas_prices,
            bypass_min_fee_msg_types=bypass_types,
            max_total_bypass_min_fee_msg_gas_usage=max_gas_usage,
        )
"""Parameters, genesis state and a parameter store for the global fee module."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Callable, Mapping, NamedTuple

from xionfee.coins import CoinError, DecCoin, validate_denom

MODULE_NAME = "globalfee"
STORE_KEY = MODULE_NAME
QUERIER_ROUTE = MODULE_NAME

PARAM_STORE_KEY_MIN_GAS_PRICES = b"MinimumGasPricesParam"
PARAM_STORE_KEY_BYPASS_MIN_FEE_MSG_TYPES = b"BypassMinFeeMsgTypes"
PARAM_STORE_KEY_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE = b"MaxTotalBypassMinFeeMsgGasUsage"

# Filled at runtime with the zero-amount bond denomination.
DEFAULT_MIN_GAS_PRICES: tuple[DecCoin, ...] = ()

DEFAULT_BYPASS_MIN_FEE_MSG_TYPES: tuple[str, ...] = (
    "/xion.v1.MsgSend",
    "/xion.v1.MsgMultiSend",
    "/xion.jwk.v1.MsgDeleteAudience",
    "/xion.jwk.v1.MsgDeleteAudienceClaim",
    "/cosmos.authz.v1beta1.MsgRevoke",
    "/cosmos.feegrant.v1beta1.MsgRevokeAllowance",
)

DEFAULT_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE = 1_000_000

_MSG_TYPE_URL_PREFIX = "/"
_UINT64_MAX = 2**64 - 1


class InvalidParamError(ValueError):
    """Raised when a parameter value or genesis document is invalid."""


class ParamSetPair(NamedTuple):
    key: bytes
    field: str
    validator: Callable[[Any], None]


def validate_dec_coins(coins) -> None:
    """Check coins are sorted, unique, well named and not negative."""
    low_denom = ""
    seen: set[str] = set()
    for position, coin in enumerate(coins):
        if coin.denom in seen:
            raise InvalidParamError(f"duplicate denomination {coin.denom}")
        try:
            validate_denom(coin.denom)
        except CoinError as exc:
            raise InvalidParamError(str(exc)) from exc
        if position and coin.denom <= low_denom:
            raise InvalidParamError(f"denomination {coin.denom} is not sorted")
        if coin.is_negative():
            raise InvalidParamError(f"coin {coin.amount} amount is negative")
        low_denom = coin.denom
        seen.add(coin.denom)


def validate_minimum_gas_prices(value) -> None:
    if not isinstance(value, (list, tuple)) or not all(isinstance(c, DecCoin) for c in value):
        raise InvalidParamError(f"type: {type(value).__name__}, expected DecCoins: invalid type")
    validate_dec_coins(value)


def validate_bypass_min_fee_msg_types(value) -> None:
    if not isinstance(value, (list, tuple)) or not all(isinstance(t, str) for t in value):
        raise InvalidParamError(f"type: {type(value).__name__}, expected list of msg types: invalid type")
    for msg_type in value:
        if msg_type == "":
            raise InvalidParamError("invalid empty bypass msg type")
        if not msg_type.startswith(_MSG_TYPE_URL_PREFIX):
            raise InvalidParamError(f"invalid bypass msg type name {msg_type}")


def validate_max_total_bypass_min_fee_msg_gas_usage(value) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _UINT64_MAX:
        raise InvalidParamError(f"type: {type(value).__name__}, expected uint64: invalid type")


def _format_dec(amount: Decimal) -> str:
    return f"{amount:.18f}"


@dataclass
class Params:
    """Global fee parameters; the zero value mirrors an unset parameter set."""

    minimum_gas_prices: list[DecCoin] = field(default_factory=list)
    bypass_min_fee_msg_types: list[str] = field(default_factory=list)
    max_total_bypass_min_fee_msg_gas_usage: int = 0

    def validate_basic(self) -> None:
        validate_minimum_gas_prices(self.minimum_gas_prices)
        validate_bypass_min_fee_msg_types(self.bypass_min_fee_msg_types)
        validate_max_total_bypass_min_fee_msg_gas_usage(self.max_total_bypass_min_fee_msg_gas_usage)

    def param_set_pairs(self) -> tuple[ParamSetPair, ...]:
        return (
            ParamSetPair(PARAM_STORE_KEY_MIN_GAS_PRICES, "minimum_gas_prices", validate_minimum_gas_prices),
            ParamSetPair(
                PARAM_STORE_KEY_BYPASS_MIN_FEE_MSG_TYPES,
                "bypass_min_fee_msg_types",
                validate_bypass_min_fee_msg_types,
            ),
            ParamSetPair(
                PARAM_STORE_KEY_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE,
                "max_total_bypass_min_fee_msg_gas_usage",
                validate_max_total_bypass_min_fee_msg_gas_usage,
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "minimum_gas_prices": [
                {"denom": coin.denom, "amount": _format_dec(coin.amount)} for coin in self.minimum_gas_prices
            ],
            "bypass_min_fee_msg_types": list(self.bypass_min_fee_msg_types),
            "max_total_bypass_min_fee_msg_gas_usage": str(self.max_total_bypass_min_fee_msg_gas_usage),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Params:
        try:
            prices = [
                DecCoin(entry["denom"], Decimal(str(entry["amount"])))
                for entry in data.get("minimum_gas_prices") or []
            ]
            msg_types = [str(t) for t in data.get("bypass_min_fee_msg_types") or []]
            gas_usage = int(data.get("max_total_bypass_min_fee_msg_gas_usage") or 0)
        except (KeyError, TypeError, ValueError, InvalidOperation, AttributeError) as exc:
            raise InvalidParamError(f"malformed globalfee params: {exc}") from exc
        return cls(prices, msg_types, gas_usage)


def default_params() -> Params:
    return Params(
        minimum_gas_prices=list(DEFAULT_MIN_GAS_PRICES),
        bypass_min_fee_msg_types=list(DEFAULT_BYPASS_MIN_FEE_MSG_TYPES),
        max_total_bypass_min_fee_msg_gas_usage=DEFAULT_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE,
    )


def param_key_table() -> Mapping[bytes, Callable[[Any], None]]:
    """Return the registered parameter keys with their validators."""
    return MappingProxyType({pair.key: pair.validator for pair in Params().param_set_pairs()})


@dataclass
class GenesisState:
    params: Params = field(default_factory=Params)

    def to_dict(self) -> dict[str, Any]:
        return {"params": self.params.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GenesisState:
        if not isinstance(data, Mapping):
            raise InvalidParamError("malformed globalfee genesis")
        return cls(Params.from_dict(data.get("params") or {}))


def default_genesis_state() -> GenesisState:
    return GenesisState(default_params())


def validate_genesis(state: GenesisState) -> None:
    try:
        state.params.validate_basic()
    except InvalidParamError as exc:
        raise InvalidParamError(f"globalfee params: {exc}") from exc


def genesis_state_from_app_state(app_state: Mapping[str, Any]) -> GenesisState:
    """Extract this module's genesis from the application state, if present."""
    raw = app_state.get(MODULE_NAME)
    if raw is None:
        return GenesisState()
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise InvalidParamError(f"malformed globalfee genesis: {exc}") from exc
    return GenesisState.from_dict(raw)


def _copy(value):
    return list(value) if isinstance(value, (list, tuple)) else value


class ParamSubspace:
    """An in-memory parameter store keyed by registered parameter keys."""

    def __init__(self, name: str = MODULE_NAME, key_table: Mapping[bytes, Callable] | None = None):
        self.name = name
        self._table: dict[bytes, Callable] = dict(key_table or {})
        self._store: dict[bytes, Any] = {}

    def has_key_table(self) -> bool:
        return bool(self._table)

    def with_key_table(self, key_table: Mapping[bytes, Callable]) -> ParamSubspace:
        if self._table:
            raise RuntimeError(f"key table already set for subspace {self.name}")
        self._table.update(key_table)
        return self

    def _check_registered(self, key: bytes) -> bytes:
        key = bytes(key)
        if key not in self._table:
            raise KeyError(f"parameter {key.decode()} not registered")
        return key

    def has(self, key: bytes) -> bool:
        return bytes(key) in self._store

    def get(self, key: bytes):
        key = self._check_registered(key)
        if key not in self._store:
            raise KeyError(f"parameter {key.decode()} not set")
        return _copy(self._store[key])

    def set(self, key: bytes, value) -> None:
        key = self._check_registered(key)
        self._store[key] = _copy(value)

    def set_param_set(self, params: Params) -> None:
        for pair in params.param_set_pairs():
            value = getattr(params, pair.field)
            try:
                pair.validator(value)
            except InvalidParamError as exc:
                raise InvalidParamError(f"value from ParamSetPair is invalid: {exc}") from exc
            self.set(pair.key, value)

    def get_param_set(self) -> Params:
        return Params(**{pair.field: self.get(pair.key) for pair in Params().param_set_pairs()})
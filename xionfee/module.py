"""The global fee application module: genesis handling, queries and migrations."""

from __future__ import annotations

import json
from typing import Any, Callable, Mapping

from xionfee.migrations import Migrator
from xionfee.params import (
    MODULE_NAME,
    QUERIER_ROUTE,
    GenesisState,
    InvalidParamError,
    ParamSubspace,
    default_genesis_state,
    param_key_table,
)
from xionfee.querier import GrpcQuerier

_CONSENSUS_VERSION = 2


def _decode_genesis(data: Any) -> GenesisState:
    if isinstance(data, GenesisState):
        return data
    if isinstance(data, (str, bytes, bytearray)):
        try:
            data = json.loads(data)
        except ValueError as exc:
            raise InvalidParamError(f"malformed globalfee genesis: {exc}") from exc
    return GenesisState.from_dict(data)


class AppModule:
    """Wires the global fee parameter subspace into the application."""

    def __init__(self, subspace: ParamSubspace):
        if not subspace.has_key_table():
            subspace = subspace.with_key_table(param_key_table())
        self.subspace = subspace
        self.querier = GrpcQuerier(subspace)

    def name(self) -> str:
        return MODULE_NAME

    def default_genesis(self) -> dict[str, Any]:
        return default_genesis_state().to_dict()

    def validate_genesis(self, data: Any) -> None:
        state = _decode_genesis(data)
        try:
            state.params.validate_basic()
        except InvalidParamError as exc:
            raise InvalidParamError(f"params: {exc}") from exc

    def init_genesis(self, data: Any) -> None:
        self.subspace.set_param_set(_decode_genesis(data).params)

    def export_genesis(self) -> dict[str, Any]:
        return GenesisState(self.subspace.get_param_set()).to_dict()

    def querier_route(self) -> str:
        return QUERIER_ROUTE

    def migrations(self) -> Mapping[int, Callable[[], None]]:
        """Migrations keyed by the consensus version they start from."""
        return {1: Migrator(self.subspace).migrate_1_to_2}

    def consensus_version(self) -> int:
        return _CONSENSUS_VERSION
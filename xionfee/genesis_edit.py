"""Editing genesis documents held as JSON bytes."""

from __future__ import annotations

import json
from typing import Any, Callable, Sequence

GenesisFn = Callable[..., bytes]


class GenesisModifyError(ValueError):
    """Raised when a genesis document cannot be read, edited or written."""


def _step(container: Any, key: Any) -> Any:
    if isinstance(key, str):
        if not isinstance(container, dict):
            raise GenesisModifyError(f"expected a map at key {key!r}, got {type(container).__name__}")
        if key not in container:
            raise GenesisModifyError(f"missing key: {key!r}")
        return container[key]
    if isinstance(key, int) and not isinstance(key, bool):
        if not isinstance(container, list):
            raise GenesisModifyError(f"expected a list at index {key}, got {type(container).__name__}")
        if not 0 <= key < len(container):
            raise GenesisModifyError(f"index out of range: {key} (length: {len(container)})")
        return container[key]
    raise GenesisModifyError(f"invalid path element: {key!r}")


def set_path(document: Any, value: Any, *args: Any) -> None:
    """Set ``value`` at the path ``args`` inside ``document``.

    String elements address map keys, integer elements address list
    indices. Every element but the last must already exist; the last may
    add a new map key but must name an existing list index.
    """
    if not args:
        raise GenesisModifyError("path cannot be empty")
    *parents, last = args
    container = document
    for key in parents:
        container = _step(container, key)
    if isinstance(last, str):
        if not isinstance(container, dict):
            raise GenesisModifyError(f"expected a map at key {last!r}, got {type(container).__name__}")
        container[last] = value
    elif isinstance(last, int) and not isinstance(last, bool):
        if not isinstance(container, list):
            raise GenesisModifyError(f"expected a list at index {last}, got {type(container).__name__}")
        if not 0 <= last < len(container):
            raise GenesisModifyError(f"index out of range: {last} (length: {len(container)})")
        container[last] = value
    else:
        raise GenesisModifyError(f"invalid path element: {last!r}")


def _load(genesis: bytes | str) -> dict[str, Any]:
    try:
        document = json.loads(genesis)
    except (TypeError, ValueError) as exc:
        raise GenesisModifyError(f"failed to unmarshal genesis file: {exc}") from exc
    if not isinstance(document, dict):
        raise GenesisModifyError("failed to unmarshal genesis file: not a JSON object")
    return document


def _dump(document: dict[str, Any]) -> bytes:
    try:
        return json.dumps(document, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode()
    except (TypeError, ValueError) as exc:
        raise GenesisModifyError(f"failed to marshal genesis bytes to json: {exc}") from exc


def _set(document: dict[str, Any], value: Any, path: Sequence[Any], message: str) -> None:
    try:
        set_path(document, value, *path)
    except GenesisModifyError as exc:
        raise GenesisModifyError(f"{message}: {exc}") from exc


def _need(args: Sequence[str], count: int, name: str) -> None:
    if len(args) < count:
        raise GenesisModifyError(f"{name} needs {count} parameters, got {len(args)}")


def modify_inter_chain_genesis(
    fns: Sequence[GenesisFn], params: Sequence[Sequence[str]]
) -> Callable[[str, bytes], bytes]:
    """Chain genesis edits; ``params[i]`` holds the extra arguments of ``fns[i]``."""
    if len(params) < len(fns):
        raise GenesisModifyError(f"{len(fns)} genesis functions but only {len(params)} parameter lists")

    def modify(denom: str, genesis: bytes) -> bytes:
        result = genesis
        for fn, args in zip(fns, params):
            try:
                result = fn(denom, result, *args)
            except GenesisModifyError as exc:
                raise GenesisModifyError(f"failed to modify genesis: {exc}") from exc
        return result

    return modify


def modify_genesis_short_proposals(denom: str, genesis: bytes, *args: str) -> bytes:
    """Set the governance voting and deposit periods and a 100-unit minimum deposit."""
    _need(args, 2, "short proposals")
    document = _load(genesis)
    message = "failed to set voting period in genesis json"
    gov_params = ("app_state", "gov", "params")
    _set(document, args[0], (*gov_params, "voting_period"), message)
    _set(document, args[1], (*gov_params, "max_deposit_period"), message)
    _set(document, denom, (*gov_params, "min_deposit", 0, "denom"), message)
    _set(document, "100", (*gov_params, "min_deposit", 0, "amount"), message)
    return _dump(document)


def modify_genesis_packet_forward_middleware(denom: str, genesis: bytes, *args: str) -> bytes:
    """Set the packet-forward fee percentage to zero."""
    document = _load(genesis)
    _set(
        document,
        "0.0",
        ("app_state", "packetfowardmiddleware", "params", "fee_percentage"),
        "failed to set voting period in genesis json",
    )
    return _dump(document)


def modify_genesis_inflation(denom: str, genesis: bytes, *args: str) -> bytes:
    """Set the mint module's minimum, maximum and rate of change of inflation."""
    _need(args, 3, "inflation")
    document = _load(genesis)
    mint_params = ("app_state", "mint", "params")
    _set(document, args[0], (*mint_params, "inflation_min"), "failed to set inflation in genesis json")
    _set(document, args[1], (*mint_params, "inflation_max"), "failed to set inflation in genesis json")
    _set(
        document,
        args[2],
        (*mint_params, "inflation_rate_change"),
        "failed to set rate of inflation change in genesis json",
    )
    return _dump(document)


def modify_genesis_aa_allowed_code_ids(denom: str, genesis: bytes, *args: str) -> bytes:
    """Allow only code id 1 for abstract accounts."""
    document = _load(genesis)
    aa_params = ("app_state", "abstractaccount", "params")
    _set(document, [1], (*aa_params, "allowed_code_ids"), "failed to set allowed code ids in genesis json")
    _set(document, False, (*aa_params, "allow_all_code_ids"), "failed to set allow all code ids in genesis json")
    return _dump(document)
"""Unsigned transaction documents and command lines for chain operations."""

from __future__ import annotations

import json
from typing import Any

_UINT64_MAX = 2**64 - 1
_DEFAULT_GAS_LIMIT = "200000"
_SEND_AMOUNT = "100000"
_KEYRING_BACKEND = "test"


def _unsigned_tx(messages: list[dict[str, Any]]) -> bytes:
    document = {
        "body": {
            "messages": messages,
            "memo": "",
            "timeout_height": "0",
            "extension_options": [],
            "non_critical_extension_options": [],
        },
        "auth_info": {
            "signer_infos": [],
            "fee": {
                "amount": [],
                "gas_limit": _DEFAULT_GAS_LIMIT,
                "payer": "",
                "granter": "",
            },
            "tip": None,
        },
        "signatures": [],
    }
    return json.dumps(document, indent=2).encode()


def raw_json_msg_send(from_address: str, to_address: str, denom: str) -> bytes:
    """An unsigned bank send of 100000 units of ``denom``."""
    return _unsigned_tx(
        [
            {
                "@type": "/cosmos.bank.v1beta1.MsgSend",
                "from_address": from_address,
                "to_address": to_address,
                "amount": [{"denom": denom, "amount": _SEND_AMOUNT}],
            }
        ]
    )


def raw_json_msg_exec_contract_remove_authenticator(sender: str, contract: str, index: int) -> bytes:
    """An unsigned contract execution removing the authenticator ``index``."""
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= _UINT64_MAX:
        raise ValueError(f"authenticator index must be an unsigned 64-bit integer, got {index!r}")
    return _unsigned_tx(
        [
            {
                "@type": "/cosmwasm.wasm.v1.MsgExecuteContract",
                "sender": sender,
                "contract": contract,
                "msg": {"remove_auth_method": {"id": index}},
                "funds": [],
            }
        ]
    )


def raw_json_msg_migrate_contract(sender: str, code_id: str) -> bytes:
    """An unsigned migration of the sender's own contract to ``code_id``."""
    return _unsigned_tx(
        [
            {
                "@type": "/cosmwasm.wasm.v1.MsgMigrateContract",
                "sender": sender,
                "contract": sender,
                "code_id": str(code_id),
                "msg": {},
            }
        ]
    )


def param_change_proposal(
    subspace: str, key: str, value: str, title: str, description: str, deposit: str
) -> dict[str, Any]:
    """A legacy parameter-change proposal with a single string-valued change."""
    return {
        "title": title,
        "description": description,
        "changes": [{"subspace": subspace, "key": key, "value": value}],
        "deposit": deposit,
    }


def _format_number(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def tx_command(key_name: str, gas_prices: str, gas_adjustment: float, *args: str) -> list[str]:
    """Arguments for a signed, auto-gassed transaction sent from ``key_name``."""
    return [
        "tx",
        *args,
        "--from",
        key_name,
        "--gas-prices",
        gas_prices,
        "--gas-adjustment",
        _format_number(gas_adjustment),
        "--gas",
        "auto",
        "--keyring-backend",
        _KEYRING_BACKEND,
        "--output",
        "json",
        "-y",
    ]
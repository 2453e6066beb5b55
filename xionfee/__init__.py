"""Global minimum-fee rules, fee parameters, genesis editing and mint checks."""

__version__ = "0.1.0"

__all__ = [
    "ante",
    "coins",
    "fee_utils",
    "genesis_edit",
    "messages",
    "migrations",
    "mint_check",
    "module",
    "params",
    "querier",
]
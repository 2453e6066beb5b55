# xionfee

Global minimum-fee logic for a Cosmos-style chain: decimal coin handling,
fee parameters and their validation, an ante-handler fee decorator, a
parameter query service, parameter migration, and helpers for building
transaction JSON, editing genesis documents and checking mint results.

## Installation

```
pip install xionfee
pip install "xionfee[test]"   # with pytest for running the test suite
```

## Modules

- `xionfee.coins`: `DecCoin` (with `is_negative` and `is_zero`),
  `CoinError`, `validate_denom`, `sorted_coins`, `amount_of`, `all_zero`,
  `coins_equal`.
- `xionfee.params`: `Params` (with `validate_basic`, `param_set_pairs`,
  `to_dict`, `from_dict`), `default_params`, `validate_minimum_gas_prices`,
  `validate_bypass_min_fee_msg_types`,
  `validate_max_total_bypass_min_fee_msg_gas_usage`, `validate_dec_coins`,
  `InvalidParamError`, `GenesisState`, `default_genesis_state`,
  `validate_genesis`, `genesis_state_from_app_state`, and the in-memory
  `ParamSubspace` store together with `param_key_table`.
- `xionfee.fee_utils`: `combined_fee_requirement`, `find`, `max_coins`,
  `is_all_gt`, `denoms_subset_of`, `GlobalFeeNotFoundError`.
- `xionfee.ante`: `Context`, `FeeTx`, `FeeDecorator`, `new_fee_decorator`,
  `get_min_gas_price`. The decorator passes simulations and transactions
  made only of bypass message types through unchanged; otherwise it sets
  the context's minimum gas prices to the global fee (in delivery) or to
  the larger of the local and global fees (in CheckTx).
- `xionfee.querier`: `GrpcQuerier`, whose `params()` returns the stored
  parameters with zero values for unset ones.
- `xionfee.migrations`: `migrate_store` and `Migrator.migrate_1_to_2`,
  which keep the stored minimum gas prices and add the default bypass
  message types and gas limit.
- `xionfee.module`: `AppModule` for default, validated, imported and
  exported genesis, its querier route, migrations and consensus version.
- `xionfee.messages`: `raw_json_msg_send`,
  `raw_json_msg_exec_contract_remove_authenticator`,
  `raw_json_msg_migrate_contract`, `param_change_proposal`, `tx_command`.
- `xionfee.genesis_edit`: `set_path`, `modify_inter_chain_genesis`,
  `modify_genesis_short_proposals`,
  `modify_genesis_packet_forward_middleware`, `modify_genesis_inflation`,
  `modify_genesis_aa_allowed_code_ids`, `GenesisModifyError`.
- `xionfee.mint_check`: `block_provision`, `classify_mint`, `verify_mint`,
  `MintOutcome`, `MintCheckError`.

## Example

```python
from decimal import Decimal

from xionfee.coins import DecCoin
from xionfee.fee_utils import combined_fee_requirement

global_fees = [DecCoin("photon", Decimal(1)), DecCoin("stake", Decimal(2))]
local_prices = [DecCoin("photon", Decimal(10))]

print(combined_fee_requirement(global_fees, local_prices))
# photon at 10 (the higher local price), stake at 2
```

An empty global fee list raises `GlobalFeeNotFoundError`, because the
global fee always has at least a zero-amount coin in the bond denomination.

## What it does not do

The package is a library only: it has no command-line tool and does not
talk to a running node. `ParamSubspace` keeps parameters in memory; there
is no persistent storage. `messages.tx_command` only builds an argument
list, and the `messages` builders only produce unsigned JSON; nothing is
signed or broadcast. There is no dispatch of contract queries to chain
query routes.

## Running the tests

```
pytest
```
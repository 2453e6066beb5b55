import json
from decimal import Decimal

import pytest

from xionfee.coins import DecCoin
from xionfee.params import (
    DEFAULT_BYPASS_MIN_FEE_MSG_TYPES,
    DEFAULT_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE,
    MODULE_NAME,
    PARAM_STORE_KEY_MIN_GAS_PRICES,
    GenesisState,
    InvalidParamError,
    Params,
    ParamSubspace,
    default_genesis_state,
    default_params,
    genesis_state_from_app_state,
    param_key_table,
    validate_bypass_min_fee_msg_types,
    validate_dec_coins,
    validate_genesis,
    validate_max_total_bypass_min_fee_msg_gas_usage,
    validate_minimum_gas_prices,
)


def test_default_params():
    p = default_params()
    assert p.minimum_gas_prices == []
    assert p.bypass_min_fee_msg_types == list(DEFAULT_BYPASS_MIN_FEE_MSG_TYPES)
    assert p.max_total_bypass_min_fee_msg_gas_usage == DEFAULT_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE
    assert DEFAULT_MAX_TOTAL_BYPASS_MIN_FEE_MSG_GAS_USAGE == 1_000_000


@pytest.mark.parametrize(
    "coins, expect_err",
    [
        (default_params().minimum_gas_prices, False),
        ([("photon", 1)], True),
        ([DecCoin("atom", 0), DecCoin("photon", 0)], False),
        ([DecCoin("photon", 1), DecCoin("photon", 1)], True),
        ([DecCoin("photon", 1), DecCoin("atom", 1)], True),
        ([DecCoin("photon", -1)], True),
        ([DecCoin("photon!", -1)], True),
    ],
)
def test_validate_min_gas_prices(coins, expect_err):
    if expect_err:
        with pytest.raises(InvalidParamError):
            validate_minimum_gas_prices(coins)
    else:
        assert validate_minimum_gas_prices(coins) is None


@pytest.mark.parametrize(
    "msg_types, expect_err",
    [
        (default_params().bypass_min_fee_msg_types, False),
        ([0, 1, 2, 3], True),
        ([], False),
        ([""], True),
        (["ibc.core.channel.v1.MsgRecvPacket"], True),
        (["/ibc.core.channel.v1.MsgRecvPacket", ""], True),
    ],
)
def test_validate_bypass_min_fee_msg_types(msg_types, expect_err):
    if expect_err:
        with pytest.raises(InvalidParamError):
            validate_bypass_min_fee_msg_types(msg_types)
    else:
        assert validate_bypass_min_fee_msg_types(msg_types) is None


@pytest.mark.parametrize(
    "value, expect_err",
    [
        (default_params().max_total_bypass_min_fee_msg_gas_usage, False),
        (0, False),
        (-1, True),
        ("5", True),
    ],
)
def test_validate_max_total_bypass_min_fee_msg_gas_usage(value, expect_err):
    if expect_err:
        with pytest.raises(InvalidParamError):
            validate_max_total_bypass_min_fee_msg_gas_usage(value)
    else:
        assert validate_max_total_bypass_min_fee_msg_gas_usage(value) is None


def test_validate_dec_coins_messages():
    with pytest.raises(InvalidParamError, match="duplicate denomination photon"):
        validate_dec_coins([DecCoin("photon", 1), DecCoin("photon", 1)])
    with pytest.raises(InvalidParamError, match="not sorted"):
        validate_dec_coins([DecCoin("photon", 1), DecCoin("atom", 1)])
    with pytest.raises(InvalidParamError, match="negative"):
        validate_dec_coins([DecCoin("photon", -1)])


def test_validate_basic_default_and_invalid():
    assert default_params().validate_basic() is None
    bad = Params(bypass_min_fee_msg_types=["no-slash"])
    with pytest.raises(InvalidParamError, match="invalid bypass msg type name no-slash"):
        bad.validate_basic()


def test_genesis_validation_wraps_error():
    assert validate_genesis(default_genesis_state()) is None
    state = GenesisState(Params(minimum_gas_prices=[DecCoin("photon", -1)]))
    with pytest.raises(InvalidParamError, match="^globalfee params: "):
        validate_genesis(state)


def test_genesis_dict_round_trip():
    state = GenesisState(
        Params(
            minimum_gas_prices=[DecCoin("uxion", "0.025")],
            bypass_min_fee_msg_types=["/xion.v1.MsgSend"],
            max_total_bypass_min_fee_msg_gas_usage=1_000_000,
        )
    )
    encoded = json.dumps(state.to_dict())
    assert GenesisState.from_dict(json.loads(encoded)) == state
    assert state.to_dict()["params"]["max_total_bypass_min_fee_msg_gas_usage"] == "1000000"


def test_genesis_state_from_app_state():
    assert genesis_state_from_app_state({}) == GenesisState()
    raw = json.dumps(default_genesis_state().to_dict())
    assert genesis_state_from_app_state({MODULE_NAME: raw}) == default_genesis_state()
    with pytest.raises(InvalidParamError):
        genesis_state_from_app_state({MODULE_NAME: "{not json"})


def test_subspace_param_set_round_trip():
    subspace = ParamSubspace().with_key_table(param_key_table())
    assert subspace.has_key_table()
    assert not subspace.has(PARAM_STORE_KEY_MIN_GAS_PRICES)
    params = Params([DecCoin("uxion", Decimal("0.5"))], ["/xion.v1.MsgSend"], 7)
    subspace.set_param_set(params)
    assert subspace.has(PARAM_STORE_KEY_MIN_GAS_PRICES)
    assert subspace.get_param_set() == params
    assert subspace.get(PARAM_STORE_KEY_MIN_GAS_PRICES) == params.minimum_gas_prices


def test_subspace_errors():
    subspace = ParamSubspace()
    assert not subspace.has_key_table()
    with pytest.raises(KeyError):
        subspace.set(PARAM_STORE_KEY_MIN_GAS_PRICES, [])
    subspace.with_key_table(param_key_table())
    with pytest.raises(KeyError):
        subspace.get(PARAM_STORE_KEY_MIN_GAS_PRICES)
    with pytest.raises(RuntimeError):
        subspace.with_key_table(param_key_table())
    with pytest.raises(InvalidParamError):
        subspace.set_param_set(Params(bypass_min_fee_msg_types=[""]))
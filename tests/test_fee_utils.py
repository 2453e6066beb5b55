import pytest

from xionfee.coins import DecCoin, sorted_coins
from xionfee.fee_utils import (
    GlobalFeeNotFoundError,
    combined_fee_requirement,
    denoms_subset_of,
    find,
    is_all_gt,
    max_coins,
)

zero_coin1 = DecCoin("photon", 0)
zero_coin2 = DecCoin("stake", 0)
zero_coin3 = DecCoin("quark", 0)
coin1 = DecCoin("photon", 1)
coin2 = DecCoin("stake", 2)
coin1_high = DecCoin("photon", 10)
coin2_high = DecCoin("stake", 20)
coin_new_denom1 = DecCoin("Newphoton", 1)
coin_new_denom2 = DecCoin("Newstake", 1)

coins_non_empty = sorted_coins([coin1, coin2])
coins_non_empty_high = sorted_coins([coin1_high, coin2_high])
coins_non_empty_one_high = sorted_coins([coin1_high, coin2])
coins_new_denom = sorted_coins([coin_new_denom1, coin_new_denom2])
coins_new_old_denom = sorted_coins([coin1, coin_new_denom1])
coins_new_old_denom_high = sorted_coins([coin1_high, coin_new_denom1])
coins_contain_zero = sorted_coins([coin1, zero_coin2])
coins_contain_zero_new_denom = sorted_coins([coin1, zero_coin3])
coins_all_zero = sorted_coins([zero_coin1, zero_coin2])


def test_empty_global_fee_raises():
    with pytest.raises(GlobalFeeNotFoundError):
        combined_fee_requirement([], [])


@pytest.mark.parametrize(
    "global_fees, min_fees, combined",
    [
        (coins_non_empty, coins_non_empty, coins_non_empty),
        (coins_non_empty, coins_non_empty_high, coins_non_empty_high),
        (coins_non_empty, coins_non_empty_one_high, coins_non_empty_one_high),
        (coins_non_empty, coins_new_denom, coins_non_empty),
        (coins_non_empty, coins_new_old_denom, coins_non_empty),
        (coins_non_empty, coins_new_old_denom_high, [coin1_high, coin2]),
        (coins_contain_zero, coins_non_empty, [coin1, coin2]),
        (coins_contain_zero, coins_contain_zero, coins_contain_zero),
        (coins_contain_zero, coins_contain_zero_new_denom, coins_contain_zero),
        (coins_all_zero, coins_all_zero, coins_all_zero),
        (coins_all_zero, coins_contain_zero_new_denom, [coin1, zero_coin2]),
        (coins_all_zero, coins_contain_zero, coins_contain_zero),
    ],
)
def test_combined_fee_requirement(global_fees, min_fees, combined):
    assert combined_fee_requirement(global_fees, min_fees) == combined


def test_combined_with_empty_min_gas_prices_is_global():
    assert combined_fee_requirement(coins_non_empty, []) == coins_non_empty


def test_find():
    coins = sorted_coins([coin1, coin2, coin_new_denom1, coin_new_denom2, zero_coin3])
    for coin in coins:
        assert find(coins, coin.denom) == coin
    assert find(coins, "atom") is None
    assert find([], "photon") is None


def test_is_all_gt_and_max_coins():
    assert is_all_gt(coins_non_empty_high, coins_non_empty)
    assert not is_all_gt(coins_non_empty_one_high, coins_non_empty)
    assert not is_all_gt([], coins_non_empty)
    assert is_all_gt(coins_non_empty, [])
    assert not is_all_gt([coin1_high], coins_non_empty)
    assert max_coins(coins_non_empty_high, coins_non_empty) == coins_non_empty_high
    assert max_coins(coins_non_empty_one_high, coins_non_empty) == coins_non_empty


def test_denoms_subset_of():
    assert denoms_subset_of([coin1], coins_non_empty)
    assert not denoms_subset_of(coins_non_empty, [coin1])
    assert not denoms_subset_of([coin1], coins_all_zero)
    assert not denoms_subset_of([coin_new_denom1], coins_non_empty)
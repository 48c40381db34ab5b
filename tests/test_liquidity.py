"""
Tests for src.math.liquidity: add_delta и расчёт ликвидности позиции.
"""

import pytest

from src.errors import MathOverflowError
from src.math.full_math import MAX_UINT128
from src.math.liquidity import (
    LiquidityAmounts,
    add_delta,
    get_amount0_for_liquidity,
    get_amount1_for_liquidity,
    get_amounts_for_liquidity,
    max_liquidity_for_amount0,
    max_liquidity_for_amount1,
    max_liquidity_for_amounts,
)
from src.math.tick_math import get_sqrt_ratio_at_tick
from src.math.ticks import encode_sqrt_ratio_x96


# ===================================================================
# add_delta
# ===================================================================
class TestAddDelta:
    """Tests for add_delta(x, y)."""

    def test_positive(self):
        assert add_delta(1, 1) == 2

    def test_negative(self):
        assert add_delta(10, -3) == 7

    def test_to_zero(self):
        assert add_delta(5, -5) == 0

    def test_underflow_raises(self):
        with pytest.raises(MathOverflowError):
            add_delta(1, -2)

    def test_overflow_raises(self):
        with pytest.raises(MathOverflowError):
            add_delta(MAX_UINT128, 1)

    def test_max_uint128_ok(self):
        assert add_delta(MAX_UINT128 - 1, 1) == MAX_UINT128


# ===================================================================
# max_liquidity_for_amounts
# ===================================================================
class TestMaxLiquidityForAmounts:
    """Tests for max_liquidity_for_amounts (price 1:1 и диапазон 100/110 .. 110/100)."""

    def setup_method(self):
        self.lower = encode_sqrt_ratio_x96(100, 110)
        self.upper = encode_sqrt_ratio_x96(110, 100)

    def test_price_inside_range(self):
        current = encode_sqrt_ratio_x96(1, 1)
        liquidity = max_liquidity_for_amounts(current, self.lower, self.upper, 100, 200)
        assert liquidity == 2148

    def test_price_inside_range_imprecise(self):
        current = encode_sqrt_ratio_x96(1, 1)
        liquidity = max_liquidity_for_amounts(current, self.lower, self.upper, 100, 200, False)
        assert liquidity == 2148

    def test_price_below_range_uses_amount0(self):
        current = encode_sqrt_ratio_x96(99, 110)
        liquidity = max_liquidity_for_amounts(current, self.lower, self.upper, 100, 200)
        assert liquidity == 1048

    def test_price_above_range_uses_amount1(self):
        current = encode_sqrt_ratio_x96(111, 100)
        liquidity = max_liquidity_for_amounts(current, self.lower, self.upper, 100, 200)
        assert liquidity == 2097

    def test_bounds_order_does_not_matter(self):
        current = encode_sqrt_ratio_x96(1, 1)
        assert max_liquidity_for_amounts(current, self.upper, self.lower, 100, 200) == \
            max_liquidity_for_amounts(current, self.lower, self.upper, 100, 200)

    def test_empty_range_raises(self):
        with pytest.raises(ValueError):
            max_liquidity_for_amount0(self.lower, self.lower, 100)
        with pytest.raises(ValueError):
            max_liquidity_for_amount1(self.lower, self.lower, 100)

    def test_min_of_both_sides_inside_range(self):
        current = encode_sqrt_ratio_x96(1, 1)
        liquidity0 = max_liquidity_for_amount0(current, self.upper, 100)
        liquidity1 = max_liquidity_for_amount1(self.lower, current, 200)
        assert max_liquidity_for_amounts(current, self.lower, self.upper, 100, 200) == \
            min(liquidity0, liquidity1)


# ===================================================================
# get_amounts_for_liquidity
# ===================================================================
class TestGetAmountsForLiquidity:
    """Tests for get_amounts_for_liquidity."""

    def setup_method(self):
        self.lower = encode_sqrt_ratio_x96(100, 110)
        self.upper = encode_sqrt_ratio_x96(110, 100)

    def test_price_inside_range(self):
        current = encode_sqrt_ratio_x96(1, 1)
        amounts = get_amounts_for_liquidity(current, self.lower, self.upper, 2148)
        assert isinstance(amounts, LiquidityAmounts)
        assert amounts.amount0 == 99
        assert amounts.amount1 == 99
        assert amounts.liquidity == 2148

    def test_price_below_range(self):
        current = encode_sqrt_ratio_x96(99, 110)
        amounts = get_amounts_for_liquidity(current, self.lower, self.upper, 1048)
        assert amounts.amount0 == 99
        assert amounts.amount1 == 0

    def test_price_above_range(self):
        current = encode_sqrt_ratio_x96(111, 100)
        amounts = get_amounts_for_liquidity(current, self.lower, self.upper, 2097)
        assert amounts.amount0 == 0
        assert amounts.amount1 == 199

    def test_price_on_lower_bound_is_all_token0(self):
        amounts = get_amounts_for_liquidity(self.lower, self.lower, self.upper, 1048)
        assert amounts.amount1 == 0
        assert amounts.amount0 == get_amount0_for_liquidity(self.lower, self.upper, 1048)

    def test_price_on_upper_bound_is_all_token1(self):
        amounts = get_amounts_for_liquidity(self.upper, self.lower, self.upper, 2097)
        assert amounts.amount0 == 0
        assert amounts.amount1 == get_amount1_for_liquidity(self.lower, self.upper, 2097)

    def test_amounts_never_exceed_deposit(self):
        """Ликвидность из сумм -> суммы обратно: округление только вниз."""
        current = get_sqrt_ratio_at_tick(-120)
        lower = get_sqrt_ratio_at_tick(-600)
        upper = get_sqrt_ratio_at_tick(600)
        amount0 = 10 ** 18
        amount1 = 3 * 10 ** 18
        liquidity = max_liquidity_for_amounts(current, lower, upper, amount0, amount1)
        amounts = get_amounts_for_liquidity(current, lower, upper, liquidity)
        assert amounts.amount0 <= amount0
        assert amounts.amount1 <= amount1

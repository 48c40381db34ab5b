from .full_math import Q96, Q128, Q192, mul_div, mul_div_rounding_up, div_rounding_up
from .tick_math import (
    MIN_TICK,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MAX_SQRT_RATIO,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
)
from .swap_math import SwapStep, compute_swap_step
from .liquidity import (
    LiquidityAmounts,
    add_delta,
    max_liquidity_for_amounts,
    get_amounts_for_liquidity,
)

"""
Uniswap V3 Liquidity Mathematics (целочисленная, Q64.96)

Формулы из whitepaper:
- L = amount0 * (sqrt(upper) * sqrt(lower)) / (sqrt(upper) - sqrt(lower))
- L = amount1 / (sqrt(upper) - sqrt(lower))

Когда текущая цена в диапазоне:
- L = amount0 * (sqrt(upper) * sqrt(current)) / (sqrt(upper) - sqrt(current))
- L = amount1 / (sqrt(current) - sqrt(lower))

Все цены здесь в формате sqrtPriceX96, все суммы в wei. Без float.
"""

from dataclasses import dataclass

from ..errors import MathOverflowError
from .full_math import MAX_UINT128, Q96, mul_div


@dataclass
class LiquidityAmounts:
    """Результат расчёта количества токенов."""
    amount0: int  # В wei/smallest unit
    amount1: int  # В wei/smallest unit
    liquidity: int


def add_delta(x: int, y: int) -> int:
    """
    Прибавление знаковой дельты к uint128 ликвидности.

    Raises:
        MathOverflowError: Результат < 0 или > uint128
    """
    z = x + y
    if z < 0:
        raise MathOverflowError(f"Liquidity underflow: {x} + ({y})")
    if z > MAX_UINT128:
        raise MathOverflowError(f"Liquidity overflow: {x} + ({y})")
    return z


def _sort(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int) -> tuple[int, int]:
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        return sqrt_ratio_b_x96, sqrt_ratio_a_x96
    return sqrt_ratio_a_x96, sqrt_ratio_b_x96


def max_liquidity_for_amount0(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int,
    use_full_precision: bool = True
) -> int:
    """
    Liquidity по количеству token0.

    Используется когда текущая цена НИЖЕ диапазона (позиция полностью в token0).
    use_full_precision=False повторяет промежуточное округление контракта
    LiquidityAmounts.sol (вариант "imprecise").
    """
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _sort(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    if sqrt_ratio_b_x96 == sqrt_ratio_a_x96:
        raise ValueError("sqrt_ratio_b must be > sqrt_ratio_a")

    if use_full_precision:
        numerator = amount0 * sqrt_ratio_a_x96 * sqrt_ratio_b_x96
        denominator = Q96 * (sqrt_ratio_b_x96 - sqrt_ratio_a_x96)
        return numerator // denominator

    intermediate = mul_div(sqrt_ratio_a_x96, sqrt_ratio_b_x96, Q96)
    return mul_div(amount0, intermediate, sqrt_ratio_b_x96 - sqrt_ratio_a_x96)


def max_liquidity_for_amount1(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, amount1: int) -> int:
    """
    Liquidity по количеству token1.

    Используется когда текущая цена ВЫШЕ диапазона (позиция полностью в token1).
    """
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _sort(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    if sqrt_ratio_b_x96 == sqrt_ratio_a_x96:
        raise ValueError("sqrt_ratio_b must be > sqrt_ratio_a")
    return mul_div(amount1, Q96, sqrt_ratio_b_x96 - sqrt_ratio_a_x96)


def max_liquidity_for_amounts(
    sqrt_ratio_current_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int,
    amount1: int,
    use_full_precision: bool = True
) -> int:
    """
    Максимальная ликвидность, которую можно получить из amount0 и amount1
    для диапазона [a, b] при текущей цене.
    """
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _sort(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    if sqrt_ratio_current_x96 <= sqrt_ratio_a_x96:
        return max_liquidity_for_amount0(
            sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount0, use_full_precision
        )
    if sqrt_ratio_current_x96 < sqrt_ratio_b_x96:
        liquidity0 = max_liquidity_for_amount0(
            sqrt_ratio_current_x96, sqrt_ratio_b_x96, amount0, use_full_precision
        )
        liquidity1 = max_liquidity_for_amount1(sqrt_ratio_a_x96, sqrt_ratio_current_x96, amount1)
        return min(liquidity0, liquidity1)
    return max_liquidity_for_amount1(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount1)


def get_amount0_for_liquidity(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity: int) -> int:
    """amount0 = L * (sqrt_upper - sqrt_lower) / (sqrt_upper * sqrt_lower), округление вниз."""
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _sort(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    return mul_div(
        liquidity << 96, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, sqrt_ratio_b_x96
    ) // sqrt_ratio_a_x96


def get_amount1_for_liquidity(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity: int) -> int:
    """amount1 = L * (sqrt_upper - sqrt_lower), округление вниз."""
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _sort(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    return mul_div(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)


def get_amounts_for_liquidity(
    sqrt_ratio_current_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int
) -> LiquidityAmounts:
    """
    Количество токенов, соответствующее ликвидности позиции при текущей цене.

    Returns:
        LiquidityAmounts(amount0, amount1, liquidity)
    """
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _sort(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    if sqrt_ratio_current_x96 <= sqrt_ratio_a_x96:
        amount0 = get_amount0_for_liquidity(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity)
        amount1 = 0
    elif sqrt_ratio_current_x96 < sqrt_ratio_b_x96:
        amount0 = get_amount0_for_liquidity(sqrt_ratio_current_x96, sqrt_ratio_b_x96, liquidity)
        amount1 = get_amount1_for_liquidity(sqrt_ratio_a_x96, sqrt_ratio_current_x96, liquidity)
    else:
        amount0 = 0
        amount1 = get_amount1_for_liquidity(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity)

    return LiquidityAmounts(amount0=amount0, amount1=amount1, liquidity=liquidity)

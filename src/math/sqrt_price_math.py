"""
SqrtPriceMath: количества токенов между двумя ценами и сдвиг цены на
заданное количество токена при фиксированной ликвидности.

Округление повторяет контракт: вход всегда округляется вверх, выход вниз,
цена сдвигается так, чтобы пул никогда не отдал больше, чем получил.
"""

from typing import Tuple

from ..errors import MathOverflowError
from .full_math import (
    Q96,
    MAX_UINT160,
    MAX_UINT256,
    div_rounding_up,
    mul_div,
    mul_div_rounding_up,
)


def _sorted(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int) -> Tuple[int, int]:
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        return sqrt_ratio_b_x96, sqrt_ratio_a_x96
    return sqrt_ratio_a_x96, sqrt_ratio_b_x96


def _to_uint160(value: int) -> int:
    if value < 0 or value > MAX_UINT160:
        raise MathOverflowError(f"Sqrt price {value} does not fit in uint160")
    return value


def get_amount0_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool
) -> int:
    """
    amount0 = L * (sqrt_b - sqrt_a) / (sqrt_a * sqrt_b).

    Используется для token0 между двумя ценами (порядок цен не важен).
    """
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _sorted(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    if sqrt_ratio_a_x96 <= 0:
        raise MathOverflowError("get_amount0_delta: sqrt price must be positive")

    numerator1 = liquidity << 96
    numerator2 = sqrt_ratio_b_x96 - sqrt_ratio_a_x96

    if round_up:
        return div_rounding_up(
            mul_div_rounding_up(numerator1, numerator2, sqrt_ratio_b_x96),
            sqrt_ratio_a_x96
        )
    return mul_div(numerator1, numerator2, sqrt_ratio_b_x96) // sqrt_ratio_a_x96


def get_amount1_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool
) -> int:
    """amount1 = L * (sqrt_b - sqrt_a)."""
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _sorted(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    if round_up:
        return mul_div_rounding_up(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)
    return mul_div(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)


def get_amount0_delta_signed(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity: int) -> int:
    """Знаковый вариант: отрицательная ликвидность -> отрицательная сумма, округление вниз."""
    if liquidity < 0:
        return -get_amount0_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, -liquidity, False)
    return get_amount0_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, True)


def get_amount1_delta_signed(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity: int) -> int:
    if liquidity < 0:
        return -get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, -liquidity, False)
    return get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, True)


def get_next_sqrt_price_from_amount0_rounding_up(
    sqrt_price_x96: int,
    liquidity: int,
    amount: int,
    add: bool
) -> int:
    # amount == 0 обрабатывается отдельно: иначе результат не обязан совпасть с входной ценой
    if amount == 0:
        return sqrt_price_x96
    numerator1 = liquidity << 96
    product = amount * sqrt_price_x96

    if add:
        if product <= MAX_UINT256:
            denominator = numerator1 + product
            if denominator <= MAX_UINT256:
                # всегда помещается в 160 бит
                return mul_div_rounding_up(numerator1, sqrt_price_x96, denominator)
        return _to_uint160(div_rounding_up(numerator1, numerator1 // sqrt_price_x96 + amount))

    # переполнение product означает, что знаменатель ушёл бы в минус
    if product > MAX_UINT256 or numerator1 <= product:
        raise MathOverflowError("get_next_sqrt_price_from_amount0: denominator underflow")
    denominator = numerator1 - product
    return _to_uint160(mul_div_rounding_up(numerator1, sqrt_price_x96, denominator))


def get_next_sqrt_price_from_amount1_rounding_down(
    sqrt_price_x96: int,
    liquidity: int,
    amount: int,
    add: bool
) -> int:
    if add:
        quotient = mul_div(amount, Q96, liquidity)
        return _to_uint160(sqrt_price_x96 + quotient)

    quotient = mul_div_rounding_up(amount, Q96, liquidity)
    if sqrt_price_x96 <= quotient:
        raise MathOverflowError("get_next_sqrt_price_from_amount1: price underflow")
    # всегда помещается в 160 бит
    return sqrt_price_x96 - quotient


def _check_price_and_liquidity(sqrt_price_x96: int, liquidity: int) -> None:
    if sqrt_price_x96 <= 0:
        raise MathOverflowError("Sqrt price must be positive")
    if liquidity <= 0:
        raise MathOverflowError("Liquidity must be positive")


def get_next_sqrt_price_from_input(
    sqrt_price_x96: int,
    liquidity: int,
    amount_in: int,
    zero_for_one: bool
) -> int:
    """Цена после добавления amount_in; округление не даёт перескочить целевую цену."""
    _check_price_and_liquidity(sqrt_price_x96, liquidity)
    if zero_for_one:
        return get_next_sqrt_price_from_amount0_rounding_up(sqrt_price_x96, liquidity, amount_in, True)
    return get_next_sqrt_price_from_amount1_rounding_down(sqrt_price_x96, liquidity, amount_in, True)


def get_next_sqrt_price_from_output(
    sqrt_price_x96: int,
    liquidity: int,
    amount_out: int,
    zero_for_one: bool
) -> int:
    """Цена после изъятия amount_out; округление гарантирует, что целевая цена пройдена."""
    _check_price_and_liquidity(sqrt_price_x96, liquidity)
    if zero_for_one:
        return get_next_sqrt_price_from_amount1_rounding_down(sqrt_price_x96, liquidity, amount_out, False)
    return get_next_sqrt_price_from_amount0_rounding_up(sqrt_price_x96, liquidity, amount_out, False)

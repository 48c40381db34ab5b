"""
Uniswap V3 Tick <-> Price

Основные формулы:
- price(i) = 1.0001^i  (token1 за token0, в минимальных единицах)
- sqrtPriceX96 = sqrt(price) * 2^96

Все преобразования точные: цена — рациональное число (Price),
тик — через TickMath. Никакого float.

Tick spacing по fee tier:
- 0.01% (100) -> spacing 1
- 0.05% (500) -> spacing 10
- 0.30% (3000) -> spacing 60
- 1.00% (10000) -> spacing 200
"""

from math import isqrt

from config import TICK_SPACING
from ..entities.token import Price, Token
from .full_math import Q192
from .tick_math import (
    MAX_TICK,
    MIN_TICK,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
)


def get_tick_spacing(fee: int) -> int:
    """
    Получение tick_spacing по fee tier.

    Raises:
        ValueError: Если fee не найден
    """
    if fee not in TICK_SPACING:
        valid_fees = sorted(TICK_SPACING.keys())
        raise ValueError(f"Unknown fee tier: {fee}. Valid fee tiers are: {valid_fees}")
    return TICK_SPACING[fee]


def nearest_usable_tick(tick: int, tick_spacing: int) -> int:
    """
    Ближайший к tick тик, кратный tick_spacing и лежащий в [MIN_TICK, MAX_TICK].

    Половина округляется вверх (к +inf).
    """
    if tick_spacing <= 0:
        raise ValueError("tick_spacing must be positive")
    if not MIN_TICK <= tick <= MAX_TICK:
        raise ValueError(f"Tick {tick} is outside [{MIN_TICK}, {MAX_TICK}]")

    rounded = (2 * tick + tick_spacing) // (2 * tick_spacing) * tick_spacing
    if rounded < MIN_TICK:
        return rounded + tick_spacing
    if rounded > MAX_TICK:
        return rounded - tick_spacing
    return rounded


def encode_sqrt_ratio_x96(amount1: int, amount0: int) -> int:
    """
    sqrtPriceX96 для цены amount1 / amount0.

    sqrtPriceX96 = sqrt(amount1 / amount0) * 2^96 = isqrt((amount1 << 192) / amount0)
    """
    if amount0 <= 0 or amount1 < 0:
        raise ValueError("amount0 must be positive and amount1 non-negative")
    return isqrt((amount1 << 192) // amount0)


def tick_to_price(base_token: Token, quote_token: Token, tick: int) -> Price:
    """
    Цена quote_token за base_token на данном тике.

    Протокол всегда хранит цену как token1/token0; ориентация результата
    определяется тем, какой из токенов сортируется первым.
    """
    sqrt_ratio_x96 = get_sqrt_ratio_at_tick(tick)
    ratio_x192 = sqrt_ratio_x96 * sqrt_ratio_x96

    if base_token.sorts_before(quote_token):
        return Price(base_token, quote_token, denominator=Q192, numerator=ratio_x192)
    return Price(base_token, quote_token, denominator=ratio_x192, numerator=Q192)


def price_to_closest_tick(price: Price) -> int:
    """
    Наибольший тик, цена которого <= price (в ориентации price).

    Рациональная цена кодируется в sqrtPriceX96 с округлением, поэтому
    результат TickMath сверяется с точной ценой соседнего тика.
    """
    base = price.base_currency
    quote = price.quote_currency
    sorted_ = base.sorts_before(quote)

    if sorted_:
        sqrt_ratio_x96 = encode_sqrt_ratio_x96(price.numerator, price.denominator)
    else:
        sqrt_ratio_x96 = encode_sqrt_ratio_x96(price.denominator, price.numerator)

    tick = get_tick_at_sqrt_ratio(sqrt_ratio_x96)
    next_tick_price = tick_to_price(base, quote, tick + 1)

    if sorted_:
        return tick + 1 if price >= next_tick_price else tick
    return tick + 1 if price <= next_tick_price else tick

"""
Swap engine: пошаговое движение цены по кривой с пересечением тиков.

Повторяет цикл UniswapV3Pool.swap:
1. найти следующий инициализированный тик в пределах слова
2. шаг compute_swap_step до этого тика (или до лимита цены)
3. если цена дошла до тика — пересечь его и поправить ликвидность
4. повторять, пока сумма не исчерпана и лимит не достигнут

swap_step — чистая функция: получает состояние и возвращает новое, ничего
не мутируя. Pool использует один и тот же цикл и для котировок, и для
мутирующих вызовов.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from ..errors import InvalidSqrtPriceLimitError
from ..math.liquidity import add_delta
from ..math.swap_math import compute_swap_step
from ..math.tick_math import (
    MAX_SQRT_RATIO,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MIN_TICK,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
)
from .tick import TickDataProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwapState:
    """Состояние свапа между шагами."""
    amount_specified_remaining: int  # > 0 остаток входа, < 0 остаток выхода
    amount_calculated: int           # exact in: -выход, exact out: +вход
    sqrt_price_x96: int
    tick: int
    liquidity: int


def resolve_sqrt_price_limit(
    zero_for_one: bool,
    sqrt_price_x96: int,
    sqrt_price_limit_x96: Optional[int]
) -> int:
    """
    Лимит цены по умолчанию — край допустимого диапазона.

    Явный лимит должен лежать строго внутри (MIN_SQRT_RATIO, MAX_SQRT_RATIO)
    и со стороны движения цены. Лимит, равный текущей цене, допустим:
    свап тогда ничего не делает.

    Raises:
        InvalidSqrtPriceLimitError
    """
    if sqrt_price_limit_x96 is None:
        return MIN_SQRT_RATIO + 1 if zero_for_one else MAX_SQRT_RATIO - 1

    if zero_for_one:
        if sqrt_price_limit_x96 <= MIN_SQRT_RATIO:
            raise InvalidSqrtPriceLimitError(
                f"Price limit {sqrt_price_limit_x96} must be above MIN_SQRT_RATIO"
            )
        if sqrt_price_limit_x96 > sqrt_price_x96:
            raise InvalidSqrtPriceLimitError(
                f"Price limit {sqrt_price_limit_x96} must not be above current price {sqrt_price_x96}"
            )
    else:
        if sqrt_price_limit_x96 >= MAX_SQRT_RATIO:
            raise InvalidSqrtPriceLimitError(
                f"Price limit {sqrt_price_limit_x96} must be below MAX_SQRT_RATIO"
            )
        if sqrt_price_limit_x96 < sqrt_price_x96:
            raise InvalidSqrtPriceLimitError(
                f"Price limit {sqrt_price_limit_x96} must not be below current price {sqrt_price_x96}"
            )
    return sqrt_price_limit_x96


def swap_step(
    state: SwapState,
    *,
    zero_for_one: bool,
    exact_input: bool,
    sqrt_price_limit_x96: int,
    fee: int,
    tick_spacing: int,
    tick_data_provider: TickDataProvider
) -> SwapState:
    """Один шаг цикла свапа. Возвращает новое состояние."""
    sqrt_price_start_x96 = state.sqrt_price_x96

    tick_next, initialized = tick_data_provider.next_initialized_tick_within_one_word(
        state.tick, zero_for_one, tick_spacing
    )
    # bitmap не знает о границах диапазона тиков
    tick_next = max(MIN_TICK, min(MAX_TICK, tick_next))
    sqrt_price_next_x96 = get_sqrt_ratio_at_tick(tick_next)

    if zero_for_one:
        sqrt_price_target_x96 = max(sqrt_price_next_x96, sqrt_price_limit_x96)
    else:
        sqrt_price_target_x96 = min(sqrt_price_next_x96, sqrt_price_limit_x96)

    step = compute_swap_step(
        state.sqrt_price_x96,
        sqrt_price_target_x96,
        state.liquidity,
        state.amount_specified_remaining,
        fee,
    )

    if exact_input:
        amount_specified_remaining = state.amount_specified_remaining - (step.amount_in + step.fee_amount)
        amount_calculated = state.amount_calculated - step.amount_out
    else:
        amount_specified_remaining = state.amount_specified_remaining + step.amount_out
        amount_calculated = state.amount_calculated + step.amount_in + step.fee_amount

    liquidity = state.liquidity
    tick = state.tick
    sqrt_price_x96 = step.sqrt_ratio_next_x96

    if sqrt_price_x96 == sqrt_price_next_x96:
        # дошли до границы: пересекаем, если тик инициализирован
        if initialized:
            liquidity_net = tick_data_provider.get_tick(tick_next).liquidity_net
            # при движении вниз знак liquidity_net меняется
            if zero_for_one:
                liquidity_net = -liquidity_net
            liquidity = add_delta(liquidity, liquidity_net)
            logger.debug(f"Crossed tick {tick_next}: liquidity {state.liquidity} -> {liquidity}")
        tick = tick_next - 1 if zero_for_one else tick_next
    elif sqrt_price_x96 != sqrt_price_start_x96:
        # цена между границами: тик пересчитывается по цене
        tick = get_tick_at_sqrt_ratio(sqrt_price_x96)

    return replace(
        state,
        amount_specified_remaining=amount_specified_remaining,
        amount_calculated=amount_calculated,
        sqrt_price_x96=sqrt_price_x96,
        tick=tick,
        liquidity=liquidity,
    )


def v3_swap(
    fee: int,
    sqrt_price_x96: int,
    tick_current: int,
    liquidity: int,
    tick_spacing: int,
    tick_data_provider: TickDataProvider,
    zero_for_one: bool,
    amount_specified: int,
    sqrt_price_limit_x96: Optional[int] = None
) -> SwapState:
    """
    Полный свап по состоянию пула. Ничего не мутирует.

    Args:
        fee: Fee в сотых долях bip
        sqrt_price_x96, tick_current, liquidity: Текущее состояние пула
        tick_spacing: Шаг тиков пула
        tick_data_provider: Источник тиков
        zero_for_one: True — продаём token0, цена падает
        amount_specified: > 0 exact input, < 0 exact output
        sqrt_price_limit_x96: Лимит цены или None

    Returns:
        Итоговое SwapState. Ненулевой amount_specified_remaining значит, что
        цикл упёрся в лимит (или край диапазона).
    """
    limit = resolve_sqrt_price_limit(zero_for_one, sqrt_price_x96, sqrt_price_limit_x96)
    exact_input = amount_specified >= 0

    state = SwapState(
        amount_specified_remaining=amount_specified,
        amount_calculated=0,
        sqrt_price_x96=sqrt_price_x96,
        tick=tick_current,
        liquidity=liquidity,
    )

    steps = 0
    while state.amount_specified_remaining != 0 and state.sqrt_price_x96 != limit:
        state = swap_step(
            state,
            zero_for_one=zero_for_one,
            exact_input=exact_input,
            sqrt_price_limit_x96=limit,
            fee=fee,
            tick_spacing=tick_spacing,
            tick_data_provider=tick_data_provider,
        )
        steps += 1

    logger.debug(
        f"Swap done in {steps} steps: zero_for_one={zero_for_one}, specified={amount_specified}, "
        f"remaining={state.amount_specified_remaining}, calculated={state.amount_calculated}"
    )
    return state

"""
Uniswap V3 TickMath

Точное (bit-for-bit) преобразование tick <-> sqrtPriceX96:
- sqrtPriceX96 = sqrt(1.0001^tick) * 2^96, вычисляется через
  произведение заранее посчитанных констант Q128.128 по битам |tick|
- обратное преобразование через log2 с фиксированной точкой

Никакого float и итеративного поиска: стоимость ограничена, результат
совпадает с контрактом TickMath.sol.
"""

from ..errors import InvalidSqrtRatioError, InvalidTickError

MIN_TICK = -887272
MAX_TICK = -MIN_TICK
MIN_SQRT_RATIO = 4295128739
MAX_SQRT_RATIO = 1461446703485210103287273052203988822378723970342

# sqrt(1.0001)^-(2^i) в формате Q128.128, i = 1..19
_RATIO_FACTORS = (
    (0x2, 0xfff97272373d413259a46990580e213a),
    (0x4, 0xfff2e50f5f656932ef12357cf3c7fdcc),
    (0x8, 0xffe5caca7e10e4e61c3624eaa0941cd0),
    (0x10, 0xffcb9843d60f6159c9db58835c926644),
    (0x20, 0xff973b41fa98c081472e6896dfb254c0),
    (0x40, 0xff2ea16466c96a3843ec78b326b52861),
    (0x80, 0xfe5dee046a99a2a811c461f1969c3053),
    (0x100, 0xfcbe86c7900a88aedcffc83b479aa3a4),
    (0x200, 0xf987a7253ac413176f2b074cf7815e54),
    (0x400, 0xf3392b0822b70005940c7a398e4b70f3),
    (0x800, 0xe7159475a2c29b7443b29c7fa6e889d9),
    (0x1000, 0xd097f3bdfd2022b8845ad8f792aa5825),
    (0x2000, 0xa9f746462d870fdf8a65dc1f90e061e5),
    (0x4000, 0x70d869a156d2a1b890bb3df62baf32f7),
    (0x8000, 0x31be135f97d08fd981231505542fcfa6),
    (0x10000, 0x9aa508b5b7a84e1c677de54f3e99bc9),
    (0x20000, 0x5d6af8dedb81196699c329225ee604),
    (0x40000, 0x2216e584f5fa1ea926041bedfe98),
    (0x80000, 0x48a170391f7dc42444e8fa2),
)

_MAX_UINT256 = 2 ** 256 - 1


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """
    sqrt(1.0001^tick) * 2^96.

    Args:
        tick: Тик в диапазоне [MIN_TICK, MAX_TICK]

    Returns:
        sqrtPriceX96 (Q64.96)

    Raises:
        InvalidTickError: Тик вне диапазона
    """
    abs_tick = -tick if tick < 0 else tick
    if abs_tick > MAX_TICK:
        raise InvalidTickError(tick, f"Tick {tick} is outside [{MIN_TICK}, {MAX_TICK}]")

    if abs_tick & 0x1:
        ratio = 0xfffcb933bd6fad37aa2d162d1a594001
    else:
        ratio = 0x100000000000000000000000000000000
    for bit, factor in _RATIO_FACTORS:
        if abs_tick & bit:
            ratio = (ratio * factor) >> 128

    if tick > 0:
        ratio = _MAX_UINT256 // ratio

    # Q128.128 -> Q128.96 с округлением вверх, чтобы get_tick_at_sqrt_ratio
    # от результата всегда возвращал исходный тик
    return (ratio >> 32) + (0 if ratio % (1 << 32) == 0 else 1)


def _most_significant_bit(x: int) -> int:
    msb = 0
    for shift, threshold in ((7, 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF),
                             (6, 0xFFFFFFFFFFFFFFFF),
                             (5, 0xFFFFFFFF),
                             (4, 0xFFFF),
                             (3, 0xFF),
                             (2, 0xF),
                             (1, 0x3)):
        f = (1 if x > threshold else 0) << shift
        msb |= f
        x >>= f
    return msb | (1 if x > 0x1 else 0)


def get_tick_at_sqrt_ratio(sqrt_price_x96: int) -> int:
    """
    Наибольший тик t такой, что get_sqrt_ratio_at_tick(t) <= sqrt_price_x96.

    Args:
        sqrt_price_x96: Цена в диапазоне [MIN_SQRT_RATIO, MAX_SQRT_RATIO)

    Raises:
        InvalidSqrtRatioError: Цена вне диапазона
    """
    # второе неравенство строгое: цена никогда не достигает цены MAX_TICK
    if sqrt_price_x96 < MIN_SQRT_RATIO or sqrt_price_x96 >= MAX_SQRT_RATIO:
        raise InvalidSqrtRatioError(sqrt_price_x96)

    ratio = sqrt_price_x96 << 32
    msb = _most_significant_bit(ratio)

    if msb >= 128:
        r = ratio >> (msb - 127)
    else:
        r = ratio << (127 - msb)

    log_2 = (msb - 128) << 64
    for bit in range(63, 49, -1):
        r = (r * r) >> 127
        f = r >> 128
        log_2 |= f << bit
        r >>= f

    # 128.128
    log_sqrt10001 = log_2 * 255738958999603826347141

    tick_low = (log_sqrt10001 - 3402992956809132418596140100660247210) >> 128
    tick_hi = (log_sqrt10001 + 291339464771989622907027621153398088495) >> 128

    if tick_low == tick_hi:
        return tick_low
    return tick_hi if get_sqrt_ratio_at_tick(tick_hi) <= sqrt_price_x96 else tick_low

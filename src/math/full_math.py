"""
FullMath: 512-bit mul/div с контролем переполнения uint256.

Python int не ограничен по разрядности, поэтому произведение считается
напрямую, без трюка с китайской теоремой об остатках из Solidity. Результат
при этом обязан помещаться в uint256, как и on-chain.
"""

from ..errors import MathOverflowError

Q96 = 2 ** 96
Q128 = 2 ** 128
Q192 = 2 ** 192

MAX_UINT128 = 2 ** 128 - 1
MAX_UINT160 = 2 ** 160 - 1
MAX_UINT256 = 2 ** 256 - 1


def mul_div(a: int, b: int, denominator: int) -> int:
    """floor(a * b / denominator), результат должен помещаться в uint256."""
    if denominator <= 0:
        raise MathOverflowError("mul_div: denominator must be positive")
    result = (a * b) // denominator
    if result > MAX_UINT256:
        raise MathOverflowError("mul_div: result overflows uint256")
    return result


def mul_div_rounding_up(a: int, b: int, denominator: int) -> int:
    """ceil(a * b / denominator)."""
    result = mul_div(a, b, denominator)
    if (a * b) % denominator > 0:
        if result >= MAX_UINT256:
            raise MathOverflowError("mul_div_rounding_up: result overflows uint256")
        result += 1
    return result


def div_rounding_up(x: int, y: int) -> int:
    """ceil(x / y) для неотрицательных x и положительных y."""
    if y <= 0:
        raise MathOverflowError("div_rounding_up: division by zero")
    return x // y + (1 if x % y > 0 else 0)

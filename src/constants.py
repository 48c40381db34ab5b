"""
V3 Constants: fee tiers и tick spacing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from config import TICK_SPACING


class FeeAmount(Enum):
    """Стандартные fee tiers Uniswap V3 (в сотых долях bip)."""
    LOWEST = 100    # 0.01%
    LOW = 500       # 0.05%
    MEDIUM = 3000   # 0.30%
    HIGH = 10000    # 1.00%

    @property
    def fee(self) -> int:
        return self.value

    @property
    def tick_spacing(self) -> int:
        return TICK_SPACING[self.value]


@dataclass(frozen=True)
class CustomFeeAmount:
    """Нестандартный fee tier (форки, PancakeSwap 0.25% и т.п.)."""
    fee: int
    tick_spacing: int

    def __post_init__(self):
        if not 0 <= self.fee < 1_000_000:
            raise ValueError(f"Fee must be in [0, 1000000), got {self.fee}")
        if self.tick_spacing <= 0:
            raise ValueError(f"Tick spacing must be positive, got {self.tick_spacing}")


Fee = Union[FeeAmount, CustomFeeAmount]


def fee_to_percent(fee: Fee) -> float:
    """500 -> 0.05"""
    return fee.fee / 10000

"""
Entities: токены, тики, хранилища тиков и пул.
"""

from .token import Token, CurrencyAmount, Price
from .tick import Tick, TickDataProvider, NoTickDataProvider, validate_ticks, ticks_from_snapshot
from .tick_list import TickList
from .tick_bitmap import TickBitMap
from .tick_map import TickMap
from .swap import SwapState, v3_swap
from .pool import Pool

__all__ = [
    'Token',
    'CurrencyAmount',
    'Price',
    'Tick',
    'TickDataProvider',
    'NoTickDataProvider',
    'validate_ticks',
    'ticks_from_snapshot',
    'TickList',
    'TickBitMap',
    'TickMap',
    'SwapState',
    'v3_swap',
    'Pool',
]

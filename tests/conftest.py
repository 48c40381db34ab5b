"""
Shared fixtures for all tests.
"""

import pytest

from config import get_token
from src.constants import FeeAmount
from src.entities.pool import Pool
from src.entities.tick import Tick
from src.entities.tick_list import TickList
from src.entities.tick_map import TickMap
from src.entities.token import Token
from src.math.tick_math import MAX_TICK, MIN_TICK
from src.math.ticks import encode_sqrt_ratio_x96, nearest_usable_tick


ONE_ETHER = 10 ** 18


def make_token(symbol: str, name: str, chain_id: int = 1) -> Token:
    """Token из config (TOKENS_ETHEREUM / TOKENS_BASE)."""
    cfg = get_token(symbol, chain_id)
    return Token(chain_id, cfg.address, cfg.decimals, cfg.symbol, name)


@pytest.fixture
def usdc():
    return make_token("USDC", "USD Coin")


@pytest.fixture
def dai():
    return make_token("DAI", "DAI Stablecoin")


@pytest.fixture
def weth():
    return make_token("WETH", "Wrapped Ether")


@pytest.fixture
def full_range_ticks():
    """Одна позиция на весь диапазон при spacing 10."""
    spacing = FeeAmount.LOW.tick_spacing
    return [
        Tick(nearest_usable_tick(MIN_TICK, spacing), ONE_ETHER, ONE_ETHER),
        Tick(nearest_usable_tick(MAX_TICK, spacing), ONE_ETHER, -ONE_ETHER),
    ]


@pytest.fixture
def tick_list(full_range_ticks):
    return TickList(full_range_ticks, FeeAmount.LOW.tick_spacing)


@pytest.fixture
def tick_map(full_range_ticks):
    return TickMap(full_range_ticks, FeeAmount.LOW.tick_spacing)


@pytest.fixture
def pool(usdc, dai, tick_list):
    """USDC/DAI 0.05%, цена 1:1, ликвидность 1e18 на весь диапазон."""
    return Pool(usdc, dai, FeeAmount.LOW, encode_sqrt_ratio_x96(1, 1), ONE_ETHER, tick_list)


@pytest.fixture
def map_pool(usdc, dai, tick_map):
    return Pool(usdc, dai, FeeAmount.LOW, encode_sqrt_ratio_x96(1, 1), ONE_ETHER, tick_map)

"""
Tests for ticks_from_snapshot: сырые строки снапшота -> Tick -> провайдер -> Pool.
"""

import pytest

from src.constants import FeeAmount
from src.entities.pool import Pool
from src.entities.tick import Tick, ticks_from_snapshot
from src.entities.tick_list import TickList
from src.entities.tick_map import TickMap
from src.entities.token import CurrencyAmount
from src.errors import InvalidTickError, ZeroNetError
from src.math.ticks import encode_sqrt_ratio_x96


# Формат subgraph: значения — строки
SUBGRAPH_ROWS = [
    {"tickIdx": "-887270", "liquidityGross": "1000000000000000000", "liquidityNet": "1000000000000000000"},
    {"tickIdx": "887270", "liquidityGross": "1000000000000000000", "liquidityNet": "-1000000000000000000"},
]


class TestTicksFromSnapshot:
    """Tests for ticks_from_snapshot."""

    def test_subgraph_rows(self):
        ticks = list(ticks_from_snapshot(SUBGRAPH_ROWS))
        assert ticks == [
            Tick(-887270, 10 ** 18, 10 ** 18),
            Tick(887270, 10 ** 18, -10 ** 18),
        ]

    def test_snake_case_rows(self):
        rows = [{"index": -10, "liquidity_gross": 5, "liquidity_net": 5}]
        assert list(ticks_from_snapshot(rows)) == [Tick(-10, 5, 5)]

    def test_tick_key(self):
        rows = [{"tick": 60, "liquidityGross": 2, "liquidityNet": -2}]
        assert list(ticks_from_snapshot(rows)) == [Tick(60, 2, -2)]

    def test_tuples(self):
        rows = [(-1, 1, 1), ("1", "1", "-1")]
        assert list(ticks_from_snapshot(rows)) == [Tick(-1, 1, 1), Tick(1, 1, -1)]

    def test_missing_key_raises(self):
        with pytest.raises(KeyError):
            list(ticks_from_snapshot([{"tickIdx": 0, "liquidityGross": 1}]))

    def test_out_of_range_index_raises(self):
        with pytest.raises(InvalidTickError):
            list(ticks_from_snapshot([(900000, 1, 1)]))

    def test_is_lazy(self):
        rows = iter([(0, 1, 1), (900000, 1, 1)])
        ticks = ticks_from_snapshot(rows)
        assert next(ticks) == Tick(0, 1, 1)

    def test_unbalanced_snapshot_rejected_by_provider(self):
        rows = [(-10, 1, 1)]
        with pytest.raises(ZeroNetError):
            TickList(ticks_from_snapshot(rows), 10)

    @pytest.mark.parametrize("provider_cls", [TickList, TickMap])
    def test_snapshot_to_pool(self, usdc, dai, provider_cls):
        provider = provider_cls(ticks_from_snapshot(SUBGRAPH_ROWS), FeeAmount.LOW.tick_spacing)
        pool = Pool(usdc, dai, FeeAmount.LOW, encode_sqrt_ratio_x96(1, 1), 10 ** 18, provider)
        assert pool.get_output_amount(CurrencyAmount(usdc, 100)).quotient == 98

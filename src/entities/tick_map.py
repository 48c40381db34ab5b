"""
TickMap — dict индекс -> Tick плюс TickBitMap поверх тех же тиков.

Построение O(n), зато get_tick за O(1) и поиск следующего тика по словам
bitmap. Выгодно, когда один снапшот используется для многих котировок.
"""

import logging
from typing import Dict, Iterable, Iterator, Optional, Tuple

from config import ENGINE
from ..errors import InvalidTickError
from .tick import Tick, validate_ticks
from .tick_bitmap import TickBitMap

logger = logging.getLogger(__name__)


class TickMap:
    """bitmap и inner всегда согласованы: строятся вместе из одного снапшота."""

    def __init__(
        self,
        ticks: Iterable[Tick],
        tick_spacing: int,
        validate: Optional[bool] = None
    ):
        ticks = sorted(ticks, key=lambda t: t.index)
        if ENGINE.validate_ticks if validate is None else validate:
            validate_ticks(ticks, tick_spacing)

        self.tick_spacing = tick_spacing
        self.inner: Dict[int, Tick] = {tick.index: tick for tick in ticks}
        # из inner, а не из ticks: дубликат индекса не должен сбросить бит
        self.bitmap = TickBitMap.from_ticks(self.inner.values(), tick_spacing)
        logger.debug(
            f"TickMap built: {len(self.inner)} ticks in {len(self.bitmap.words)} words, "
            f"spacing={tick_spacing}"
        )

    def __len__(self) -> int:
        return len(self.inner)

    def __contains__(self, index: int) -> bool:
        return index in self.inner

    def __iter__(self) -> Iterator[Tick]:
        return iter(sorted(self.inner.values(), key=lambda t: t.index))

    def __repr__(self) -> str:
        return f"TickMap(ticks={len(self.inner)}, tick_spacing={self.tick_spacing})"

    def copy(self) -> "TickMap":
        clone = TickMap.__new__(TickMap)
        clone.tick_spacing = self.tick_spacing
        clone.bitmap = self.bitmap.copy()
        clone.inner = dict(self.inner)
        return clone

    def get_tick(self, index: int) -> Tick:
        """
        Raises:
            InvalidTickError: Тик не инициализирован
        """
        tick = self.inner.get(index)
        if tick is None:
            raise InvalidTickError(index, f"Tick {index} is not in the map")
        return tick

    def next_initialized_tick_within_one_word(
        self,
        tick: int,
        lte: bool,
        tick_spacing: int
    ) -> Tuple[int, bool]:
        return self.bitmap.next_initialized_tick_within_one_word(tick, lte, tick_spacing)

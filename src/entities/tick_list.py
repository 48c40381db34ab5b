"""
TickList — источник данных о тиках на отсортированном списке.

Поиск тика бинарный (O(log n)), построение дешёвое. Подходит, когда
снапшот используется один-два раза.
"""

import bisect
import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from config import ENGINE
from ..errors import InvalidTickError
from .tick import Tick, validate_ticks

logger = logging.getLogger(__name__)


class TickList:
    """
    Отсортированный по индексу список инициализированных тиков.

    Инварианты (проверяются при validate=True): индексы строго возрастают,
    кратны tick_spacing, сумма liquidity_net равна нулю.

    Мутации (push / update / remove) применяются к копии, копия
    проверяется, и только потом подменяет список. При ошибке список
    остаётся прежним.
    """

    def __init__(
        self,
        ticks: Iterable[Tick] = (),
        tick_spacing: int = 1,
        validate: Optional[bool] = None
    ):
        self.tick_spacing = tick_spacing
        self.validate_enabled = ENGINE.validate_ticks if validate is None else validate
        self._ticks: List[Tick] = sorted(ticks, key=lambda t: t.index)
        self._indices: List[int] = [t.index for t in self._ticks]

        if self.validate_enabled:
            self.validate()
        logger.debug(f"TickList built: {len(self._ticks)} ticks, spacing={tick_spacing}")

    # ── Validation ──

    def validate(self) -> None:
        """Проверка инвариантов; см. validate_ticks."""
        validate_ticks(self._ticks, self.tick_spacing)

    # ── Sequence protocol ──

    def __len__(self) -> int:
        return len(self._ticks)

    def __iter__(self) -> Iterator[Tick]:
        return iter(self._ticks)

    def __getitem__(self, position: int) -> Tick:
        return self._ticks[position]

    def __repr__(self) -> str:
        return f"TickList(ticks={len(self._ticks)}, tick_spacing={self.tick_spacing})"

    @property
    def ticks(self) -> Tuple[Tick, ...]:
        return tuple(self._ticks)

    def copy(self) -> "TickList":
        clone = TickList.__new__(TickList)
        clone.tick_spacing = self.tick_spacing
        clone.validate_enabled = self.validate_enabled
        clone._ticks = list(self._ticks)
        clone._indices = list(self._indices)
        return clone

    # ── Lookup ──

    def is_below_smallest(self, tick: int) -> bool:
        return not self._ticks or tick < self._indices[0]

    def is_at_or_above_largest(self, tick: int) -> bool:
        return not self._ticks or tick >= self._indices[-1]

    def _binary_search(self, tick: int) -> int:
        """Позиция наибольшего тика с index <= tick."""
        if self.is_below_smallest(tick):
            raise InvalidTickError(tick, f"Tick {tick} is below the smallest initialized tick")
        return bisect.bisect_right(self._indices, tick) - 1

    def find_tick(self, index: int) -> Optional[int]:
        """Позиция тика с данным индексом или None."""
        position = bisect.bisect_left(self._indices, index)
        if position < len(self._indices) and self._indices[position] == index:
            return position
        return None

    def has_tick(self, index: int) -> bool:
        return self.find_tick(index) is not None

    def get_tick(self, index: int) -> Tick:
        """
        Тик по индексу.

        Raises:
            InvalidTickError: Тика нет в списке
        """
        position = self.find_tick(index)
        if position is None:
            raise InvalidTickError(index, f"Tick {index} is not in the list")
        return self._ticks[position]

    def next_initialized_tick(self, tick: int, lte: bool) -> Tick:
        """
        Ближайший инициализированный тик: <= tick (lte) или > tick.

        Raises:
            InvalidTickError: В этом направлении тиков нет
        """
        if lte:
            if self.is_below_smallest(tick):
                raise InvalidTickError(tick, f"No initialized tick at or below {tick}")
            if self.is_at_or_above_largest(tick):
                return self._ticks[-1]
            return self._ticks[self._binary_search(tick)]

        if self.is_at_or_above_largest(tick):
            raise InvalidTickError(tick, f"No initialized tick above {tick}")
        if self.is_below_smallest(tick):
            return self._ticks[0]
        return self._ticks[self._binary_search(tick) + 1]

    def next_initialized_tick_within_one_word(
        self,
        tick: int,
        lte: bool,
        tick_spacing: int
    ) -> Tuple[int, bool]:
        """
        Следующий инициализированный тик в пределах слова (256 сжатых тиков).

        Если в слове ничего нет, возвращается граница слова и False.
        Граница слова никогда не пересекается; цикл по словам — у вызывающего.
        """
        compressed = tick // tick_spacing

        if lte:
            word_pos = compressed >> 8
            minimum = (word_pos << 8) * tick_spacing
            if self.is_below_smallest(tick):
                return minimum, False
            index = self.next_initialized_tick(tick, True).index
            next_tick = max(minimum, index)
            return next_tick, next_tick == index

        word_pos = (compressed + 1) >> 8
        maximum = (((word_pos + 1) << 8) - 1) * tick_spacing
        if self.is_at_or_above_largest(tick):
            return maximum, False
        index = self.next_initialized_tick(tick, False).index
        next_tick = min(maximum, index)
        return next_tick, next_tick == index

    # ── Mutation ──

    def _commit(self, ticks: List[Tick]) -> None:
        if self.validate_enabled:
            validate_ticks(ticks, self.tick_spacing)
        self._ticks = ticks
        self._indices = [t.index for t in ticks]

    def push(self, tick: Tick) -> None:
        """
        Вставка нового тика с сохранением сортировки.

        Raises:
            InvalidTickError: Тик с таким индексом уже есть
        """
        if self.has_tick(tick.index):
            raise InvalidTickError(tick.index, f"Tick {tick.index} is already in the list")
        ticks = list(self._ticks)
        ticks.insert(bisect.bisect_left(self._indices, tick.index), tick)
        self._commit(ticks)
        logger.debug(f"Pushed tick {tick.index}")

    def update_many(self, ticks: Iterable[Tick]) -> None:
        """
        Атомарное обновление нескольких тиков с одной проверкой в конце.

        Тик с liquidity_net == 0 удаляет запись, отсутствующий тик вставляется.
        Нужно, когда инвариант сохраняется только для пары изменений
        (например, две границы одной позиции).
        """
        by_index = {t.index: t for t in self._ticks}
        for tick in ticks:
            if tick.liquidity_net == 0:
                by_index.pop(tick.index, None)
            else:
                by_index[tick.index] = tick
        self._commit(sorted(by_index.values(), key=lambda t: t.index))

    def update(self, tick: Tick) -> None:
        """Замена тика с тем же индексом (или вставка); нейтральный liquidity_net удаляет тик."""
        self.update_many([tick])

    def remove(self, index: int) -> Tick:
        """
        Удаление тика по индексу.

        Raises:
            InvalidTickError: Тика нет в списке
        """
        position = self.find_tick(index)
        if position is None:
            raise InvalidTickError(index, f"Tick {index} is not in the list")
        ticks = list(self._ticks)
        removed = ticks.pop(position)
        self._commit(ticks)
        logger.debug(f"Removed tick {index}")
        return removed

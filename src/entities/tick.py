"""
Tick и общий интерфейс источника данных о тиках.

TickDataProvider реализуют:
- TickList — отсортированный список, бинарный поиск
- TickMap — dict + bitmap, O(1) поиск
- NoTickDataProvider — заглушка для пулов, свапы в которых не пересекают тики
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Protocol, Sequence, Tuple, Union

from ..errors import (
    InvalidSpacingError,
    InvalidTickError,
    NoTickDataError,
    UnsortedTicksError,
    ZeroNetError,
)
from ..math.tick_math import MAX_TICK, MIN_TICK


@dataclass(frozen=True)
class Tick:
    """Граница диапазона ликвидности."""
    index: int
    liquidity_gross: int  # Суммарная ликвидность, ссылающаяся на тик
    liquidity_net: int    # Изменение активной ликвидности при пересечении тика вверх

    def __post_init__(self):
        if not MIN_TICK <= self.index <= MAX_TICK:
            raise InvalidTickError(self.index, f"Tick {self.index} is outside [{MIN_TICK}, {MAX_TICK}]")
        if self.liquidity_gross < 0:
            raise ValueError(f"liquidity_gross must be non-negative, got {self.liquidity_gross}")


class TickDataProvider(Protocol):
    """Всё, что нужно движку свапа от хранилища тиков."""

    def get_tick(self, index: int) -> Tick:
        ...

    def next_initialized_tick_within_one_word(
        self,
        tick: int,
        lte: bool,
        tick_spacing: int
    ) -> Tuple[int, bool]:
        ...

    def copy(self) -> "TickDataProvider":
        ...


class NoTickDataProvider:
    """Источник без данных: любой запрос — NoTickDataError."""

    def get_tick(self, index: int) -> Tick:
        raise NoTickDataError(f"No tick data provider was given (requested tick {index})")

    def next_initialized_tick_within_one_word(
        self,
        tick: int,
        lte: bool,
        tick_spacing: int
    ) -> Tuple[int, bool]:
        raise NoTickDataError(f"No tick data provider was given (searching from tick {tick})")

    def copy(self) -> "NoTickDataProvider":
        return self


def validate_ticks(ticks: Sequence[Tick], tick_spacing: int) -> None:
    """
    Проверка снапшота тиков.

    Raises:
        InvalidSpacingError: spacing <= 0 или индекс не кратен spacing
        UnsortedTicksError: Индексы не строго возрастают
        ZeroNetError: Сумма liquidity_net != 0
    """
    if tick_spacing <= 0:
        raise InvalidSpacingError(None, tick_spacing)
    for tick in ticks:
        if tick.index % tick_spacing != 0:
            raise InvalidSpacingError(tick.index, tick_spacing)
    for prev, cur in zip(ticks, ticks[1:]):
        if prev.index >= cur.index:
            raise UnsortedTicksError(f"Ticks must be strictly increasing: {prev.index} >= {cur.index}")
    total = sum(tick.liquidity_net for tick in ticks)
    if total != 0:
        raise ZeroNetError(total)


RawTick = Union[Mapping[str, int], Sequence[int]]

_INDEX_KEYS = ("index", "tick", "tickIdx")
_GROSS_KEYS = ("liquidity_gross", "liquidityGross")
_NET_KEYS = ("liquidity_net", "liquidityNet")


def _pick(row: Mapping[str, int], keys: Tuple[str, ...]) -> int:
    for key in keys:
        if key in row:
            return int(row[key])
    raise KeyError(f"Snapshot row {dict(row)} has none of {keys}")


def ticks_from_snapshot(rows: Iterable[RawTick]) -> Iterator[Tick]:
    """
    Превращает уже полученные сырые строки снапшота в Tick.

    Поддерживаются dict с ключами tick/tickIdx/index, liquidityGross,
    liquidityNet (формат subgraph и lens-контрактов; значения могут быть
    строками) и кортежи (index, liquidity_gross, liquidity_net).
    """
    for row in rows:
        if isinstance(row, Mapping):
            yield Tick(
                index=_pick(row, _INDEX_KEYS),
                liquidity_gross=_pick(row, _GROSS_KEYS),
                liquidity_net=_pick(row, _NET_KEYS),
            )
        else:
            index, gross, net = row
            yield Tick(index=int(index), liquidity_gross=int(gross), liquidity_net=int(net))

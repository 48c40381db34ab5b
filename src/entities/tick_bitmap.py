"""
TickBitMap — двухуровневый разреженный bitmap инициализированных тиков.

Индекс тика сжимается делением на tick_spacing (с округлением к -inf),
затем делится на слово (compressed >> 8) и бит внутри слова
(compressed & 0xff). Бит установлен <=> тик инициализирован.
"""

from typing import Dict, Iterable, Tuple

from ..errors import InvalidSpacingError
from .tick import Tick

WORD_BITS = 256
_WORD_MASK = (1 << WORD_BITS) - 1


def position(compressed: int) -> Tuple[int, int]:
    """(word_pos, bit_pos) для сжатого тика."""
    return compressed >> 8, compressed & 0xff


def most_significant_bit(x: int) -> int:
    return x.bit_length() - 1


def least_significant_bit(x: int) -> int:
    return (x & -x).bit_length() - 1


class TickBitMap:
    """word_pos -> 256-битное слово."""

    def __init__(self, words: Dict[int, int] = None):
        self.words: Dict[int, int] = dict(words or {})

    @classmethod
    def from_ticks(cls, ticks: Iterable[Tick], tick_spacing: int) -> "TickBitMap":
        bitmap = cls()
        for tick in ticks:
            bitmap.flip_tick(tick.index, tick_spacing)
        return bitmap

    def __eq__(self, other) -> bool:
        if not isinstance(other, TickBitMap):
            return NotImplemented
        return {k: v for k, v in self.words.items() if v} == {k: v for k, v in other.words.items() if v}

    def copy(self) -> "TickBitMap":
        return TickBitMap(self.words)

    def flip_tick(self, tick: int, tick_spacing: int) -> None:
        """Переключить бит тика (тик должен быть кратен tick_spacing)."""
        if tick_spacing <= 0 or tick % tick_spacing != 0:
            raise InvalidSpacingError(tick, tick_spacing)
        word_pos, bit_pos = position(tick // tick_spacing)
        word = self.words.get(word_pos, 0) ^ (1 << bit_pos)
        if word:
            self.words[word_pos] = word
        else:
            self.words.pop(word_pos, None)

    def is_initialized(self, tick: int, tick_spacing: int) -> bool:
        if tick % tick_spacing != 0:
            return False
        word_pos, bit_pos = position(tick // tick_spacing)
        return bool(self.words.get(word_pos, 0) & (1 << bit_pos))

    def next_initialized_tick_within_one_word(
        self,
        tick: int,
        lte: bool,
        tick_spacing: int
    ) -> Tuple[int, bool]:
        """
        Следующий инициализированный тик в том же слове, что и tick.

        lte=True: бит сжатого тика и все младшие (к -inf).
        lte=False: строго старшие биты, т.е. начиная с compressed + 1 (к +inf).

        Returns:
            (tick, initialized); при пустом слове — граница слова и False
        """
        compressed = tick // tick_spacing

        if lte:
            word_pos, bit_pos = position(compressed)
            # все биты на позиции bit_pos и правее
            mask = (1 << bit_pos) - 1 + (1 << bit_pos)
            masked = self.words.get(word_pos, 0) & mask
            if masked:
                return (compressed - (bit_pos - most_significant_bit(masked))) * tick_spacing, True
            return (compressed - bit_pos) * tick_spacing, False

        word_pos, bit_pos = position(compressed + 1)
        # все биты на позиции bit_pos и левее
        mask = ~((1 << bit_pos) - 1) & _WORD_MASK
        masked = self.words.get(word_pos, 0) & mask
        if masked:
            return (compressed + 1 + (least_significant_bit(masked) - bit_pos)) * tick_spacing, True
        return (compressed + 1 + (0xff - bit_pos)) * tick_spacing, False

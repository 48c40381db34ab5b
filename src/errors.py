"""
Исключения движка свапов.

Все ошибки наследуются от AmmError, чтобы вызывающий код мог перехватить
любую ошибку движка одним except.
"""

from typing import Optional


class AmmError(Exception):
    """Базовая ошибка движка."""
    pass


# ── Tokens / pool construction ──

class InvalidTokenError(AmmError):
    """Валюта суммы не является ни token0, ни token1 пула."""
    pass


class TokenMismatchError(AmmError):
    """Оба токена пула имеют одинаковый адрес."""
    pass


class ChainMismatchError(AmmError):
    """Токены пула из разных сетей."""
    def __init__(self, chain_a: int, chain_b: int):
        self.chain_a = chain_a
        self.chain_b = chain_b
        super().__init__(f"Tokens are on different chains: {chain_a} != {chain_b}")


# ── Tick / price domain ──

class InvalidTickError(AmmError):
    """Тик вне диапазона [MIN_TICK, MAX_TICK] или отсутствует в индексе."""
    def __init__(self, tick: Optional[int], message: str = ""):
        self.tick = tick
        super().__init__(message or f"Invalid tick: {tick}")


class InvalidSqrtRatioError(AmmError):
    """sqrtPriceX96 вне глобального диапазона."""
    def __init__(self, sqrt_ratio_x96: int):
        self.sqrt_ratio_x96 = sqrt_ratio_x96
        super().__init__(f"Invalid sqrt ratio: {sqrt_ratio_x96}")


class InvalidSqrtPriceLimitError(AmmError):
    """Ценовой лимит свапа по неправильную сторону от текущей цены."""
    pass


class MathOverflowError(AmmError):
    """Результат вышел за пределы uint256/uint160/uint128."""
    pass


# ── Tick snapshot validation ──

class TickValidationError(AmmError):
    """Снапшот тиков нарушает инварианты."""
    pass


class ZeroNetError(TickValidationError):
    """Сумма liquidity_net по всем тикам не равна нулю."""
    def __init__(self, total: int):
        self.total = total
        super().__init__(f"Sum of liquidity_net must be zero, got {total}")


class InvalidSpacingError(TickValidationError):
    """Индекс тика не кратен tick_spacing (или spacing <= 0)."""
    def __init__(self, tick: Optional[int], tick_spacing: int):
        self.tick = tick
        self.tick_spacing = tick_spacing
        if tick is None:
            message = f"Tick spacing must be positive, got {tick_spacing}"
        else:
            message = f"Tick {tick} is not a multiple of tick spacing {tick_spacing}"
        super().__init__(message)


class UnsortedTicksError(TickValidationError):
    """Тики не отсортированы строго по возрастанию индекса."""
    pass


# ── Swap ──

class InsufficientLiquidityError(AmmError):
    """Диапазон исчерпан, а запрошенная сумма не набрана."""
    def __init__(self, amount_remaining: int):
        self.amount_remaining = amount_remaining
        super().__init__(f"Insufficient liquidity: {amount_remaining} left unfilled")


class NoTickDataError(AmmError):
    """У пула нет данных о тиках, а свап пытается пересечь тик."""
    pass


class InvalidAmountError(AmmError, ValueError):
    """Сумма свапа отрицательная: вход/выход задаются только модулем."""
    def __init__(self, amount: int):
        self.amount = amount
        super().__init__(f"Swap amount must be non-negative, got {amount}")

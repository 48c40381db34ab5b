"""
Pool — состояние V3 пула и точки входа для свапов.

Состояние: token0/token1 (отсортированы по адресу), fee, sqrt_ratio_x96,
liquidity, tick_current и источник данных о тиках.

Котировки (get_output_amount / get_input_amount) не меняют пул.
Мутирующие версии (*_mut) записывают итоговые цену, тик и ликвидность
обратно в пул, но только если свап завершился без ошибки.
"""

import logging
from typing import Optional

from ..constants import Fee, fee_to_percent
from ..contracts.pool_factory import get_pool_address
from ..errors import (
    InsufficientLiquidityError,
    InvalidAmountError,
    InvalidTokenError,
    MathOverflowError,
)
from ..math.full_math import MAX_UINT128, Q192
from ..math.tick_math import get_tick_at_sqrt_ratio
from .swap import SwapState, v3_swap
from .tick import NoTickDataProvider, TickDataProvider
from .token import CurrencyAmount, Price, Token

logger = logging.getLogger(__name__)


class Pool:
    """
    V3 пул.

    Example:
        >>> pool = Pool(usdc, dai, FeeAmount.LOW, encode_sqrt_ratio_x96(1, 1), 10**18, ticks)
        >>> pool.get_output_amount(CurrencyAmount(usdc, 100))
    """

    def __init__(
        self,
        token_a: Token,
        token_b: Token,
        fee: Fee,
        sqrt_ratio_x96: int,
        liquidity: int,
        tick_data_provider: Optional[TickDataProvider] = None
    ):
        """
        Raises:
            ChainMismatchError: Токены из разных сетей
            TokenMismatchError: token_a == token_b
            InvalidSqrtRatioError: Цена вне диапазона TickMath
            MathOverflowError: liquidity вне uint128
        """
        if token_a.sorts_before(token_b):
            self.token0, self.token1 = token_a, token_b
        else:
            self.token0, self.token1 = token_b, token_a

        if not 0 <= liquidity <= MAX_UINT128:
            raise MathOverflowError(f"Liquidity {liquidity} is outside uint128")

        self.fee = fee
        self.sqrt_ratio_x96 = sqrt_ratio_x96
        self.liquidity = liquidity
        self.tick_current = get_tick_at_sqrt_ratio(sqrt_ratio_x96)

        if tick_data_provider is None:
            tick_data_provider = NoTickDataProvider()
        elif hasattr(tick_data_provider, "__len__") and len(tick_data_provider) == 0:
            logger.warning(f"Pool {self.token0}/{self.token1} built with an empty tick snapshot")
        self.tick_data_provider = tick_data_provider

        logger.info(
            f"Pool {self.token0}/{self.token1} fee={fee_to_percent(fee)}%: "
            f"tick={self.tick_current}, liquidity={liquidity}, provider={tick_data_provider!r}"
        )

    def __repr__(self) -> str:
        return (
            f"Pool({self.token0}/{self.token1}, fee={self.fee.fee}, "
            f"tick={self.tick_current}, liquidity={self.liquidity})"
        )

    # ── Pool info ──

    @property
    def chain_id(self) -> int:
        return self.token0.chain_id

    @property
    def tick_spacing(self) -> int:
        return self.fee.tick_spacing

    @property
    def token0_price(self) -> Price:
        """Цена token0 в token1."""
        return Price(
            self.token0,
            self.token1,
            denominator=Q192,
            numerator=self.sqrt_ratio_x96 * self.sqrt_ratio_x96,
        )

    @property
    def token1_price(self) -> Price:
        """Цена token1 в token0."""
        return self.token0_price.invert()

    def involves_token(self, token: Token) -> bool:
        return token == self.token0 or token == self.token1

    def price_of(self, token: Token) -> Price:
        """
        Raises:
            InvalidTokenError: Токен не из пула
        """
        self._check_token(token)
        return self.token0_price if token == self.token0 else self.token1_price

    def get_address(self, dex: str = "uniswap") -> str:
        """CREATE2 адрес пула для DEX из config."""
        return get_pool_address(
            self.chain_id,
            self.token0.address,
            self.token1.address,
            self.fee.fee,
            dex,
        )

    def copy(self) -> "Pool":
        """Независимая копия: мутации копии не затрагивают оригинал."""
        clone = Pool.__new__(Pool)
        clone.token0 = self.token0
        clone.token1 = self.token1
        clone.fee = self.fee
        clone.sqrt_ratio_x96 = self.sqrt_ratio_x96
        clone.liquidity = self.liquidity
        clone.tick_current = self.tick_current
        clone.tick_data_provider = self.tick_data_provider.copy()
        return clone

    # ── Swaps ──

    def get_output_amount(
        self,
        input_amount: CurrencyAmount,
        sqrt_price_limit_x96: Optional[int] = None
    ) -> CurrencyAmount:
        """
        Сколько получим за input_amount (exact input). Пул не меняется.

        Пул без источника тиков (NoTickDataProvider) бросает NoTickDataError
        даже при нулевой ликвидности: движок сначала запрашивает следующий
        тик, до проверки остатка.

        Raises:
            InvalidTokenError, InvalidAmountError, InvalidSqrtPriceLimitError,
            InsufficientLiquidityError, NoTickDataError
        """
        output, _ = self._exact_input(input_amount, sqrt_price_limit_x96)
        return output

    def get_output_amount_mut(
        self,
        input_amount: CurrencyAmount,
        sqrt_price_limit_x96: Optional[int] = None
    ) -> CurrencyAmount:
        """Как get_output_amount, но итоговое состояние записывается в пул."""
        output, state = self._exact_input(input_amount, sqrt_price_limit_x96)
        self._commit(state)
        return output

    def get_input_amount(
        self,
        output_amount: CurrencyAmount,
        sqrt_price_limit_x96: Optional[int] = None
    ) -> CurrencyAmount:
        """
        Сколько нужно отдать, чтобы получить output_amount (exact output).
        Пул не меняется.
        """
        input_, _ = self._exact_output(output_amount, sqrt_price_limit_x96)
        return input_

    def get_input_amount_mut(
        self,
        output_amount: CurrencyAmount,
        sqrt_price_limit_x96: Optional[int] = None
    ) -> CurrencyAmount:
        """Как get_input_amount, но итоговое состояние записывается в пул."""
        input_, state = self._exact_output(output_amount, sqrt_price_limit_x96)
        self._commit(state)
        return input_

    # ── Internal ──

    def _check_token(self, token: Token) -> None:
        if not self.involves_token(token):
            raise InvalidTokenError(
                f"Token {token} is not in pool {self.token0}/{self.token1}"
            )

    def _exact_input(self, input_amount: CurrencyAmount, sqrt_price_limit_x96: Optional[int]):
        self._check_token(input_amount.currency)
        if input_amount.quotient < 0:
            raise InvalidAmountError(input_amount.quotient)
        zero_for_one = input_amount.currency == self.token0

        state = self.swap(zero_for_one, input_amount.quotient, sqrt_price_limit_x96)
        output_token = self.token1 if zero_for_one else self.token0
        return CurrencyAmount(output_token, -state.amount_calculated), state

    def _exact_output(self, output_amount: CurrencyAmount, sqrt_price_limit_x96: Optional[int]):
        self._check_token(output_amount.currency)
        if output_amount.quotient < 0:
            raise InvalidAmountError(output_amount.quotient)
        zero_for_one = output_amount.currency == self.token1

        state = self.swap(zero_for_one, -output_amount.quotient, sqrt_price_limit_x96)
        input_token = self.token0 if zero_for_one else self.token1
        return CurrencyAmount(input_token, state.amount_calculated), state

    def swap(
        self,
        zero_for_one: bool,
        amount_specified: int,
        sqrt_price_limit_x96: Optional[int] = None
    ) -> SwapState:
        """
        Свап по текущему состоянию пула; сам пул не меняется.

        Raises:
            InsufficientLiquidityError: Лимит не задан, а диапазон исчерпан
            NoTickDataError: У пула нет данных о тиках; приоритетнее
                InsufficientLiquidityError, даже при нулевой ликвидности
        """
        state = v3_swap(
            self.fee.fee,
            self.sqrt_ratio_x96,
            self.tick_current,
            self.liquidity,
            self.tick_spacing,
            self.tick_data_provider,
            zero_for_one,
            amount_specified,
            sqrt_price_limit_x96,
        )
        if sqrt_price_limit_x96 is None and state.amount_specified_remaining != 0:
            raise InsufficientLiquidityError(state.amount_specified_remaining)
        return state

    def _commit(self, state: SwapState) -> None:
        logger.debug(
            f"Pool {self.token0}/{self.token1} updated: tick {self.tick_current} -> {state.tick}, "
            f"liquidity {self.liquidity} -> {state.liquidity}"
        )
        self.sqrt_ratio_x96 = state.sqrt_price_x96
        self.tick_current = state.tick
        self.liquidity = state.liquidity

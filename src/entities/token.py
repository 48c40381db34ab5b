"""
Token, CurrencyAmount и Price — минимальные value-объекты для котировок.

Адреса нормализуются через Web3.to_checksum_address; порядок токенов в пуле
определяется числовым значением адреса (token0 < token1).
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP, localcontext
from fractions import Fraction
from typing import Optional

from web3 import Web3

from ..errors import ChainMismatchError, TokenMismatchError

MAX_UINT256 = 2 ** 256 - 1


@dataclass(frozen=True)
class Token:
    """ERC20 токен. Равенство определяется только сетью и адресом."""
    chain_id: int
    address: str
    decimals: int = field(compare=False)
    symbol: Optional[str] = field(default=None, compare=False)
    name: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if not 0 <= self.decimals < 255:
            raise ValueError(f"Invalid decimals: {self.decimals}")
        object.__setattr__(self, "address", Web3.to_checksum_address(self.address))

    def equals(self, other: "Token") -> bool:
        return self == other

    def sorts_before(self, other: "Token") -> bool:
        """
        True если адрес этого токена меньше адреса other.

        Raises:
            ChainMismatchError: Токены из разных сетей
            TokenMismatchError: Один и тот же токен
        """
        if self.chain_id != other.chain_id:
            raise ChainMismatchError(self.chain_id, other.chain_id)
        if self.address == other.address:
            raise TokenMismatchError(f"Token {self.address} cannot be paired with itself")
        return int(self.address, 16) < int(other.address, 16)

    def __str__(self) -> str:
        return self.symbol or self.address


@dataclass(frozen=True)
class CurrencyAmount:
    """Сумма в минимальных единицах токена (wei)."""
    currency: Token
    quotient: int

    def __post_init__(self):
        if self.quotient > MAX_UINT256:
            raise ValueError(f"Amount {self.quotient} exceeds uint256")

    @classmethod
    def from_raw_amount(cls, currency: Token, raw_amount: int) -> "CurrencyAmount":
        return cls(currency=currency, quotient=int(raw_amount))

    def to_exact(self) -> Decimal:
        """Сумма в человекочитаемом виде (с учётом decimals)."""
        with localcontext() as ctx:
            ctx.prec = 78
            return Decimal(self.quotient) / (Decimal(10) ** self.currency.decimals)

    def __str__(self) -> str:
        return f"{self.to_exact()} {self.currency}"


@dataclass(frozen=True)
class Price:
    """
    Цена quote_currency за одну base_currency.

    raw = numerator / denominator в минимальных единицах;
    adjusted_for_decimals учитывает decimals обоих токенов.
    """
    base_currency: Token
    quote_currency: Token
    denominator: int
    numerator: int

    def __post_init__(self):
        if self.denominator == 0:
            raise ZeroDivisionError("Price denominator must be non-zero")

    @property
    def raw(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    @property
    def adjusted_for_decimals(self) -> Fraction:
        scalar = Fraction(10 ** self.base_currency.decimals, 10 ** self.quote_currency.decimals)
        return self.raw * scalar

    def invert(self) -> "Price":
        return Price(
            base_currency=self.quote_currency,
            quote_currency=self.base_currency,
            denominator=self.numerator,
            numerator=self.denominator,
        )

    def quote(self, amount: CurrencyAmount) -> CurrencyAmount:
        """Перевод суммы base_currency в quote_currency (округление вниз)."""
        if amount.currency != self.base_currency:
            raise ValueError(f"Amount currency {amount.currency} is not the base currency")
        return CurrencyAmount(
            currency=self.quote_currency,
            quotient=amount.quotient * self.numerator // self.denominator,
        )

    def to_significant(self, significant_digits: int = 6) -> str:
        """Цена с учётом decimals, округлённая до significant_digits значащих цифр."""
        value = self.adjusted_for_decimals
        with localcontext() as ctx:
            ctx.prec = significant_digits
            ctx.rounding = ROUND_HALF_UP
            quotient = Decimal(value.numerator) / Decimal(value.denominator)
        return format(quotient.normalize(), "f")

    def _check_comparable(self, other: "Price") -> None:
        if (self.base_currency != other.base_currency
                or self.quote_currency != other.quote_currency):
            raise ValueError("Cannot compare prices of different currency pairs")

    def __lt__(self, other: "Price") -> bool:
        self._check_comparable(other)
        return self.raw < other.raw

    def __le__(self, other: "Price") -> bool:
        self._check_comparable(other)
        return self.raw <= other.raw

    def __gt__(self, other: "Price") -> bool:
        self._check_comparable(other)
        return self.raw > other.raw

    def __ge__(self, other: "Price") -> bool:
        self._check_comparable(other)
        return self.raw >= other.raw

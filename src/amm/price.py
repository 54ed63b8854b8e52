from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import Optional

from .config import get_settings
from .errors import InvalidAmountError, InvalidTokenError
from .token import Token, TokenAmount
from .utils import exact_decimal, format_significant


class Price:
    """
    Price of ``base_token`` in units of ``quote_token``.

    Stored as the raw integer ratio ``numerator / denominator`` so that
    quoting stays exact; decimals only matter for display (``adjusted``).
    """

    def __init__(
        self,
        base_token: Token,
        quote_token: Token,
        denominator: int,
        numerator: int,
    ):
        if denominator == 0:
            raise InvalidAmountError(
                f"Price of {base_token.symbol} in {quote_token.symbol} has a zero denominator"
            )
        self.base_token = base_token
        self.quote_token = quote_token
        self.denominator = denominator
        self.numerator = numerator

    @property
    def raw(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    @property
    def scalar(self) -> Fraction:
        return Fraction(10**self.base_token.decimals, 10**self.quote_token.decimals)

    @property
    def adjusted(self) -> Fraction:
        """Price in human units (quote per one whole base token)."""
        return self.raw * self.scalar

    def invert(self) -> Price:
        return Price(self.quote_token, self.base_token, self.numerator, self.denominator)

    def multiply(self, other: Price) -> Price:
        """Chain ``base -> quote`` with ``quote -> other.quote``."""
        if self.quote_token != other.base_token:
            raise InvalidTokenError(
                f"Cannot chain {self.quote_token.symbol} price with "
                f"{other.base_token.symbol} price"
            )
        return Price(
            self.base_token,
            other.quote_token,
            self.denominator * other.denominator,
            self.numerator * other.numerator,
        )

    def quote(self, amount: TokenAmount) -> TokenAmount:
        """Convert a base token amount into quote token (rounded down)."""
        if amount.token != self.base_token:
            raise InvalidTokenError(
                f"Expected {self.base_token.symbol}, got {amount.token.symbol}"
            )
        return TokenAmount(
            self.quote_token, amount.raw * self.numerator // self.denominator
        )

    def to_decimal(self) -> Decimal:
        adjusted = self.adjusted
        return exact_decimal(adjusted.numerator, adjusted.denominator)

    def to_significant(self, digits: Optional[int] = None) -> str:
        if digits is None:
            digits = get_settings().significant_digits
        return format_significant(self.to_decimal(), digits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Price):
            return NotImplemented
        return (
            self.base_token == other.base_token
            and self.quote_token == other.quote_token
            and self.raw == other.raw
        )

    def __hash__(self) -> int:
        return hash((self.base_token, self.quote_token, self.raw))

    def __repr__(self) -> str:
        return (
            f"Price({self.base_token.symbol}/{self.quote_token.symbol} "
            f"= {self.numerator}/{self.denominator})"
        )

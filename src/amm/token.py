from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from eth_utils import is_address, to_checksum_address

from .config import get_settings
from .errors import InvalidAmountError, InvalidAssetError, InvalidTokenError
from .utils import exact_decimal, format_significant, parse_bigint_ish


@dataclass(frozen=True, eq=False)
class Token:
    """
    ERC-20 style token identity.
    Two tokens are equal when chain id and address match; symbol, name and
    decimals are display metadata only.
    """

    chain_id: int
    address: str
    decimals: int
    symbol: str
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if not is_address(self.address):
            raise InvalidAssetError(f"Invalid token address: {self.address!r}")
        if not 0 <= self.decimals < 256:
            raise InvalidAssetError(f"Invalid decimals: {self.decimals}")
        object.__setattr__(self, "address", to_checksum_address(self.address))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.chain_id == other.chain_id and self.address == other.address

    def __hash__(self) -> int:
        return hash((self.chain_id, self.address))

    def __repr__(self) -> str:
        return f"Token({self.symbol}, chain={self.chain_id}, {self.address})"

    def sorts_before(self, other: Token) -> bool:
        """True if this token is token0 of a pair with *other*."""
        if self.chain_id != other.chain_id:
            raise InvalidTokenError("Tokens are on different chains")
        if self == other:
            raise InvalidTokenError("Tokens are identical")
        return self.address.lower() < other.address.lower()


@dataclass(frozen=True)
class TokenAmount:
    """Raw integer amount (smallest unit) of a token."""

    token: Token
    raw: int

    def __post_init__(self) -> None:
        if isinstance(self.raw, int) and not isinstance(self.raw, bool) and self.raw < 0:
            raise InvalidAmountError(f"Negative amount: {self.raw}")
        object.__setattr__(self, "raw", parse_bigint_ish(self.raw))

    def _check_token(self, other: TokenAmount) -> None:
        if self.token != other.token:
            raise InvalidTokenError(
                f"Token mismatch: {self.token.symbol} vs {other.token.symbol}"
            )

    def add(self, other: TokenAmount) -> TokenAmount:
        self._check_token(other)
        return TokenAmount(self.token, self.raw + other.raw)

    def subtract(self, other: TokenAmount) -> TokenAmount:
        self._check_token(other)
        if other.raw > self.raw:
            raise InvalidAmountError(
                f"Cannot subtract {other.raw} from {self.raw} {self.token.symbol}"
            )
        return TokenAmount(self.token, self.raw - other.raw)

    __add__ = add
    __sub__ = subtract

    def to_exact(self) -> Decimal:
        """Human units, e.g. 1500000 raw USDC (6 decimals) -> Decimal('1.5')."""
        return exact_decimal(self.raw, 10**self.token.decimals)

    def to_significant(self, digits: Optional[int] = None) -> str:
        if digits is None:
            digits = get_settings().significant_digits
        return format_significant(self.to_exact(), digits)

    def __str__(self) -> str:
        return f"{self.to_exact()} {self.token.symbol}"

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from .constants import (
    FEE_DENOMINATOR,
    FEE_NUMERATOR,
    LIQUIDITY_NAME_PREFIX,
    LIQUIDITY_SYMBOL_PREFIX,
    LIQUIDITY_TOKEN_DECIMALS,
    MINIMUM_LIQUIDITY,
    PROTOCOL_FEE_MULTIPLIER,
)
from .errors import (
    InsufficientInputAmountError,
    InsufficientReservesError,
    InvalidAmountError,
    InvalidAssetError,
    InvalidTokenError,
    MissingParameterError,
)
from .price import Price
from .token import Token, TokenAmount
from .utils import BigintIsh, exact_decimal, parse_bigint_ish, sqrt

logger = logging.getLogger(__name__)


class Pair:
    """
    Snapshot of a constant-product liquidity pair.
    All math uses integers only, with the same multiply/divide order as the
    on-chain contract. Swaps return a NEW pair and never modify this one.
    """

    __slots__ = ("_reserves", "pool_address", "liquidity_token")

    def __init__(
        self, token_amount_a: TokenAmount, token_amount_b: TokenAmount, pool_address: str
    ):
        # Amounts must already be sorted (token0 first); order is not checked.
        token_a, token_b = token_amount_a.token, token_amount_b.token
        if token_a == token_b:
            raise InvalidTokenError(f"Pair tokens must differ, got {token_a.symbol} twice")
        symbols = f"{token_a.symbol}-{token_b.symbol}"
        liquidity_token = Token(
            chain_id=token_a.chain_id,
            address=pool_address,
            decimals=LIQUIDITY_TOKEN_DECIMALS,
            symbol=f"{LIQUIDITY_SYMBOL_PREFIX}-{symbols}",
            name=f"{LIQUIDITY_NAME_PREFIX} ({symbols})",
        )
        object.__setattr__(self, "_reserves", (token_amount_a, token_amount_b))
        object.__setattr__(self, "pool_address", liquidity_token.address)
        object.__setattr__(self, "liquidity_token", liquidity_token)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        # copy, deepcopy and pickle rebuild through __init__
        return (type(self), (self.reserve0, self.reserve1, self.pool_address))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pair):
            return NotImplemented
        return self.pool_address == other.pool_address and self._reserves == other._reserves

    def __hash__(self) -> int:
        return hash((self.pool_address, self._reserves))

    def __repr__(self) -> str:
        return (
            f"Pair({self.token0.symbol}/{self.token1.symbol} @ {self.pool_address}, "
            f"reserves={self.reserve0.raw}/{self.reserve1.raw})"
        )

    # ── identity ──────────────────────────────────────────────

    @property
    def chain_id(self) -> int:
        return self.token0.chain_id

    @property
    def token0(self) -> Token:
        return self._reserves[0].token

    @property
    def token1(self) -> Token:
        return self._reserves[1].token

    @property
    def reserve0(self) -> TokenAmount:
        return self._reserves[0]

    @property
    def reserve1(self) -> TokenAmount:
        return self._reserves[1]

    def involves_token(self, token: Token) -> bool:
        return token == self.token0 or token == self.token1

    def _require_token(self, token: Token) -> None:
        if not self.involves_token(token):
            raise InvalidAssetError(
                f"{token.symbol} is not part of pair {self.token0.symbol}/{self.token1.symbol}"
            )

    def other_token(self, token: Token) -> Token:
        self._require_token(token)
        return self.token1 if token == self.token0 else self.token0

    def reserve_of(self, token: Token) -> TokenAmount:
        self._require_token(token)
        return self.reserve0 if token == self.token0 else self.reserve1

    # ── prices ────────────────────────────────────────────────

    @property
    def token0_price(self) -> Price:
        """Mid price of token0 in token1, i.e. reserve1 / reserve0."""
        if self._has_empty_reserve():
            raise InsufficientReservesError("Pair has an empty reserve")
        return Price(self.token0, self.token1, self.reserve0.raw, self.reserve1.raw)

    @property
    def token1_price(self) -> Price:
        """Mid price of token1 in token0, i.e. reserve0 / reserve1."""
        if self._has_empty_reserve():
            raise InsufficientReservesError("Pair has an empty reserve")
        return Price(self.token1, self.token0, self.reserve1.raw, self.reserve0.raw)

    def price_of(self, token: Token) -> Price:
        """Price of *token* in terms of the other token of the pair."""
        self._require_token(token)
        return self.token0_price if token == self.token0 else self.token1_price

    # ── swaps ─────────────────────────────────────────────────

    def _has_empty_reserve(self) -> bool:
        return self.reserve0.raw == 0 or self.reserve1.raw == 0

    def get_output_amount(self, input_amount: TokenAmount) -> tuple[TokenAmount, Pair]:
        """
        Output received for *input_amount*, and the pair after the swap.

        amount_in_with_fee = amount_in * 997
        numerator = amount_in_with_fee * reserve_out
        denominator = reserve_in * 1000 + amount_in_with_fee
        amount_out = numerator // denominator
        """
        self._require_token(input_amount.token)
        if self._has_empty_reserve():
            raise InsufficientReservesError("Pair has an empty reserve")

        input_reserve = self.reserve_of(input_amount.token)
        output_reserve = self.reserve_of(self.other_token(input_amount.token))

        amount_in_with_fee = input_amount.raw * FEE_NUMERATOR
        numerator = amount_in_with_fee * output_reserve.raw
        denominator = input_reserve.raw * FEE_DENOMINATOR + amount_in_with_fee
        output_amount = TokenAmount(output_reserve.token, numerator // denominator)
        if output_amount.raw == 0:
            raise InsufficientInputAmountError(
                f"{input_amount.raw} {input_amount.token.symbol} yields zero output"
            )

        logger.debug(
            "Swap %s %s -> %s %s on %s",
            input_amount.raw,
            input_amount.token.symbol,
            output_amount.raw,
            output_amount.token.symbol,
            self.pool_address,
        )
        next_pair = self._with_reserves(
            input_reserve.add(input_amount), output_reserve.subtract(output_amount)
        )
        return output_amount, next_pair

    def get_input_amount(self, output_amount: TokenAmount) -> tuple[TokenAmount, Pair]:
        """
        Input required to receive *output_amount*, and the pair after the swap.
        (Inverse of get_output_amount, rounded up by one unit.)
        """
        self._require_token(output_amount.token)
        output_reserve = self.reserve_of(output_amount.token)
        if self._has_empty_reserve() or output_amount.raw >= output_reserve.raw:
            raise InsufficientReservesError(
                f"Cannot take {output_amount.raw} {output_amount.token.symbol} "
                f"from reserve {output_reserve.raw}"
            )

        input_reserve = self.reserve_of(self.other_token(output_amount.token))

        numerator = input_reserve.raw * output_amount.raw * FEE_DENOMINATOR
        denominator = (output_reserve.raw - output_amount.raw) * FEE_NUMERATOR
        input_amount = TokenAmount(input_reserve.token, numerator // denominator + 1)

        logger.debug(
            "Reverse swap %s %s <- %s %s on %s",
            output_amount.raw,
            output_amount.token.symbol,
            input_amount.raw,
            input_amount.token.symbol,
            self.pool_address,
        )
        next_pair = self._with_reserves(
            input_reserve.add(input_amount), output_reserve.subtract(output_amount)
        )
        return input_amount, next_pair

    def _with_reserves(self, amount_x: TokenAmount, amount_y: TokenAmount) -> Pair:
        if amount_x.token == self.token0:
            return Pair(amount_x, amount_y, self.pool_address)
        return Pair(amount_y, amount_x, self.pool_address)

    def get_execution_price(self, input_amount: TokenAmount) -> Price:
        """Average price actually paid for a swap of *input_amount*."""
        output_amount, _ = self.get_output_amount(input_amount)
        return Price(
            input_amount.token, output_amount.token, input_amount.raw, output_amount.raw
        )

    def get_price_impact(self, input_amount: TokenAmount) -> Decimal:
        """
        Returns price impact as a decimal (0.01 = 1%), fee included.
        """
        output_amount, _ = self.get_output_amount(input_amount)
        mid_price = self.price_of(input_amount.token)
        # exact quote at mid price, kept as a fraction to avoid rounding
        exact_numerator = input_amount.raw * mid_price.numerator
        exact_denominator = mid_price.denominator
        shortfall = exact_numerator - output_amount.raw * exact_denominator
        return exact_decimal(shortfall, exact_numerator)

    # ── liquidity ─────────────────────────────────────────────

    def _require_liquidity_token(self, amount: TokenAmount, label: str) -> None:
        if amount.token != self.liquidity_token:
            raise InvalidTokenError(
                f"{label} must be in {self.liquidity_token.symbol}, got {amount.token.symbol}"
            )

    def get_liquidity_minted(
        self,
        total_supply: TokenAmount,
        token_amount_a: TokenAmount,
        token_amount_b: TokenAmount,
    ) -> TokenAmount:
        """Liquidity tokens minted for depositing the two amounts (token0 first)."""
        self._require_liquidity_token(total_supply, "Total supply")
        if token_amount_a.token != self.token0 or token_amount_b.token != self.token1:
            raise InvalidTokenError(
                f"Deposit must be {self.token0.symbol} then {self.token1.symbol}"
            )

        if total_supply.raw == 0:
            liquidity = sqrt(token_amount_a.raw * token_amount_b.raw) - MINIMUM_LIQUIDITY
        else:
            if self._has_empty_reserve():
                raise InsufficientReservesError(
                    "Pair has supply outstanding but an empty reserve"
                )
            amount0 = token_amount_a.raw * total_supply.raw // self.reserve0.raw
            amount1 = token_amount_b.raw * total_supply.raw // self.reserve1.raw
            liquidity = amount0 if amount0 <= amount1 else amount1

        if liquidity <= 0:
            raise InsufficientInputAmountError(
                f"Deposit too small to mint liquidity (got {liquidity})"
            )
        return TokenAmount(self.liquidity_token, liquidity)

    def get_liquidity_value(
        self,
        token: Token,
        total_supply: TokenAmount,
        liquidity: TokenAmount,
        fee_on: bool = False,
        k_last: Optional[BigintIsh] = None,
    ) -> TokenAmount:
        """
        Amount of *token* redeemable for *liquidity*.
        With ``fee_on`` the supply is first diluted by the protocol fee that
        would be minted for the growth of sqrt(k) since ``k_last``.
        """
        self._require_token(token)
        self._require_liquidity_token(total_supply, "Total supply")
        self._require_liquidity_token(liquidity, "Liquidity")
        if liquidity.raw > total_supply.raw:
            raise InvalidAmountError(
                f"Liquidity {liquidity.raw} exceeds total supply {total_supply.raw}"
            )

        adjusted_supply = total_supply
        if fee_on:
            if k_last is None:
                raise MissingParameterError("k_last is required when fee_on is set")
            k_last_parsed = parse_bigint_ish(k_last)
            if k_last_parsed != 0:
                root_k = sqrt(self.reserve0.raw * self.reserve1.raw)
                root_k_last = sqrt(k_last_parsed)
                if root_k > root_k_last:
                    numerator = total_supply.raw * (root_k - root_k_last)
                    denominator = root_k * PROTOCOL_FEE_MULTIPLIER + root_k_last
                    fee_liquidity = TokenAmount(
                        self.liquidity_token, numerator // denominator
                    )
                    logger.debug(
                        "Protocol fee dilutes supply by %s on %s",
                        fee_liquidity.raw,
                        self.pool_address,
                    )
                    adjusted_supply = total_supply.add(fee_liquidity)

        if adjusted_supply.raw == 0:
            raise InvalidAmountError("Total supply is zero")
        return TokenAmount(
            token, liquidity.raw * self.reserve_of(token).raw // adjusted_supply.raw
        )

"""Fixed protocol constants for constant-product pair math."""

from typing import Final

# 0.30% swap fee taken from the input side.
FEE_NUMERATOR: Final[int] = 997
FEE_DENOMINATOR: Final[int] = 1000

# Burned on the first deposit so the share price can never be pushed to zero.
MINIMUM_LIQUIDITY: Final[int] = 1000

# rootK * 5 + rootKLast mints 1/6 of the growth in sqrt(k) to the protocol.
PROTOCOL_FEE_MULTIPLIER: Final[int] = 5

LIQUIDITY_TOKEN_DECIMALS: Final[int] = 18
LIQUIDITY_SYMBOL_PREFIX: Final[str] = "MOON-V1"
LIQUIDITY_NAME_PREFIX: Final[str] = "Mooniswap V1"

from .constants import FEE_DENOMINATOR, FEE_NUMERATOR, MINIMUM_LIQUIDITY
from .errors import (
    AmmError,
    ErrorKind,
    InsufficientInputAmountError,
    InsufficientReservesError,
    InvalidAmountError,
    InvalidAssetError,
    InvalidTokenError,
    MissingParameterError,
    NoRouteError,
    ParseError,
)
from .outcome import Outcome, attempt
from .pair import Pair
from .price import Price
from .route import Route, RouteFinder
from .token import Token, TokenAmount
from .utils import parse_bigint_ish, sqrt

__all__ = [
    "Pair",
    "Token",
    "TokenAmount",
    "Price",
    "Route",
    "RouteFinder",
    "Outcome",
    "attempt",
    "parse_bigint_ish",
    "sqrt",
    "FEE_NUMERATOR",
    "FEE_DENOMINATOR",
    "MINIMUM_LIQUIDITY",
    "AmmError",
    "ErrorKind",
    "InvalidAssetError",
    "InvalidTokenError",
    "InsufficientReservesError",
    "InsufficientInputAmountError",
    "InvalidAmountError",
    "MissingParameterError",
    "ParseError",
    "NoRouteError",
]

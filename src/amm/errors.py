"""Error types raised by pair, token and routing operations."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_ASSET = "invalid_asset"
    INSUFFICIENT_RESERVES = "insufficient_reserves"
    INSUFFICIENT_INPUT_AMOUNT = "insufficient_input_amount"
    INVALID_AMOUNT = "invalid_amount"
    MISSING_PARAMETER = "missing_parameter"
    PARSE = "parse"
    NO_ROUTE = "no_route"


class AmmError(Exception):
    """Base class for every expected failure of the pair math."""

    kind: ErrorKind

    def __init__(self, message: str | None = None):
        super().__init__(message or self.__class__.__doc__)


class InvalidAssetError(AmmError):
    """Token does not belong to this pair."""

    kind = ErrorKind.INVALID_ASSET


class InvalidTokenError(InvalidAssetError):
    """Amount is denominated in the wrong token."""


class InsufficientReservesError(AmmError):
    """Pair reserves are too small for the requested operation."""

    kind = ErrorKind.INSUFFICIENT_RESERVES


class InsufficientInputAmountError(AmmError):
    """Input amount is too small to produce a non-zero result."""

    kind = ErrorKind.INSUFFICIENT_INPUT_AMOUNT


class InvalidAmountError(AmmError):
    """Amount is out of range."""

    kind = ErrorKind.INVALID_AMOUNT


class MissingParameterError(AmmError):
    """A required parameter was not supplied."""

    kind = ErrorKind.MISSING_PARAMETER


class ParseError(AmmError, ValueError):
    """Value could not be parsed as a non-negative integer."""

    kind = ErrorKind.PARSE


class NoRouteError(AmmError):
    """No route connects the requested tokens."""

    kind = ErrorKind.NO_ROUTE

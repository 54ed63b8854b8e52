from __future__ import annotations

import math
import operator
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Union

from .errors import ParseError

BigintIsh = Union[int, str]

_DECIMAL_RE = re.compile(r"^[0-9]+$")
_PREFIXED_RE = re.compile(r"^0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")


def parse_bigint_ish(value: object) -> int:
    """
    Normalise an integer-like value to a non-negative ``int``.

    Accepts ints, anything implementing ``__index__`` (numpy / ctypes style
    fixed-width integers), decimal strings and 0x / 0o / 0b prefixed strings.
    """
    if isinstance(value, bool):
        raise ParseError(f"Cannot parse bool {value!r} as integer")
    if isinstance(value, str):
        text = value.strip()
        if _DECIMAL_RE.match(text):
            parsed = int(text, 10)
        elif _PREFIXED_RE.match(text):
            parsed = int(text, 0)
        else:
            raise ParseError(f"Cannot parse {value!r} as integer")
    else:
        try:
            parsed = operator.index(value)
        except TypeError as exc:
            raise ParseError(
                f"Cannot parse {type(value).__name__} {value!r} as integer"
            ) from exc
    if parsed < 0:
        raise ParseError(f"Expected non-negative integer, got {parsed}")
    return parsed


def sqrt(value: int) -> int:
    """Floor of the square root, exact for arbitrarily large ints."""
    if value < 0:
        raise ValueError("sqrt of negative value")
    return math.isqrt(value)


def format_significant(value: Decimal, digits: int) -> str:
    """Render *value* rounded half-up to *digits* significant digits."""
    if digits <= 0:
        raise ValueError(f"digits must be positive, got {digits}")
    with localcontext() as ctx:
        ctx.prec = digits
        ctx.rounding = ROUND_HALF_UP
        rounded = +value
    return format(rounded, "f")


def exact_decimal(numerator: int, denominator: int) -> Decimal:
    """Decimal for numerator / denominator, wide enough for both operands."""
    with localcontext() as ctx:
        ctx.prec = max(28, len(str(numerator)) + len(str(denominator)) + 10)
        return Decimal(numerator) / Decimal(denominator)

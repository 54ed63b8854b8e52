"""Explicit success / failure results for pair operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from .errors import AmmError, ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Result of an operation that may fail for an expected reason
    (empty reserves, dust input, wrong token...).
    """

    success: bool
    value: Optional[T] = None
    error: Optional[AmmError] = None

    def __post_init__(self) -> None:
        if self.success == (self.error is not None):
            raise ValueError("Outcome needs an error exactly when it failed")

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    @classmethod
    def ok(cls, value: T) -> Outcome[T]:
        return cls(success=True, value=value)

    @classmethod
    def failed(cls, error: AmmError) -> Outcome[T]:
        return cls(success=False, error=error)

    def unwrap(self) -> T:
        """Return the value, re-raising the captured error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def attempt(fn: Callable[..., T], *args, **kwargs) -> Outcome[T]:
    """
    Run *fn* and capture expected pair errors as a failed Outcome.
    Anything that is not an AmmError propagates unchanged.

        outcome = attempt(pair.get_output_amount, amount_in)
        if outcome.error_kind is ErrorKind.INSUFFICIENT_RESERVES: ...
    """
    try:
        return Outcome.ok(fn(*args, **kwargs))
    except AmmError as exc:
        return Outcome.failed(exc)

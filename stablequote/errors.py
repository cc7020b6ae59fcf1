"""Quote error classes.

Every error is terminal for the quote call. The zero-amount sentinel returned
for lending shortfalls is not an error and has no class here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stablequote.quoter import QuoteStage


class QuoteError(Exception):
    """Base error for quote operations.

    Attributes:
        stage: Pipeline stage that failed, when raised from the quoter
    """

    def __init__(self, message: str, stage: QuoteStage | None = None) -> None:
        super().__init__(message)
        self.stage = stage

    @property
    def code(self) -> str:
        """Stable snake_case identifier for logs."""
        name = type(self).__name__
        return "".join(f"_{c.lower()}" if c.isupper() else c for c in name).lstrip("_")


class InvalidInput(QuoteError):
    """Input amount is not positive or the request is malformed."""

    pass


class InvalidPool(QuoteError):
    """Pool is missing, has the wrong shape, or does not match the pair."""

    pass


class InvalidFeeRate(InvalidPool):
    """Fee rate is not a whole number of basis points in [0, 10000)."""

    pass


class EmptyReserves(QuoteError):
    """One of the two reserves is zero."""

    pass


class ZeroBalanceError(EmptyReserves):
    """A solver was handed a zero balance."""

    pass


class InsufficientLiquidity(QuoteError):
    """The solver produced a non-positive output amount."""

    pass


class NonPositiveOutput(InsufficientLiquidity):
    """Output is not positive once the fee has been deducted."""

    pass


class Overflow(QuoteError):
    """An amount or intermediate exceeded its integer width."""

    pass


class InvalidPrecision(QuoteError):
    """Target precision is below an asset's native precision."""

    pass

"""Fee unit conventions.

Pools have stored their fee rate in two ways over time: as an integer number
of basis points, and as a real-valued ratio kept for display. Both are
resolved to integer basis points before any arithmetic.
"""

from decimal import Decimal, InvalidOperation
from enum import Enum

from stablequote.constants import FEE_DENOMINATOR
from stablequote.errors import InvalidFeeRate


class FeeUnit(str, Enum):
    """How a pool's fee_rate is expressed."""

    BASIS_POINTS = "bps"
    RATIO = "ratio"


def to_basis_points(fee_rate: int | Decimal | str, unit: FeeUnit) -> int:
    """Resolve a stored fee rate to integer basis points.

    Args:
        fee_rate: Stored rate; an int for BASIS_POINTS, a Decimal (or decimal
            string) fraction such as Decimal("0.0005") for RATIO
        unit: Convention the rate is stored in

    Returns:
        Fee in basis points, in [0, FEE_DENOMINATOR)

    Raises:
        InvalidFeeRate: If the rate is not a whole number of basis points or
            is out of range
    """
    if isinstance(fee_rate, (bool, float)):
        raise InvalidFeeRate(f"Fee rate must be int or Decimal, got {type(fee_rate).__name__}")

    try:
        rate = Decimal(fee_rate)
    except (InvalidOperation, TypeError, ValueError) as err:
        raise InvalidFeeRate(f"Unparseable fee rate: {fee_rate!r}") from err

    bps = rate * FEE_DENOMINATOR if unit is FeeUnit.RATIO else rate
    if not bps.is_finite() or bps != bps.to_integral_value():
        raise InvalidFeeRate(f"Fee rate {fee_rate} ({unit.value}) is not a whole number of bps")

    result = int(bps)
    if result < 0 or result >= FEE_DENOMINATOR:
        raise InvalidFeeRate(f"Fee rate {result} bps outside [0, {FEE_DENOMINATOR})")
    return result

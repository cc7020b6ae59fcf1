"""Fixed-point scaling between native and working precision.

Amounts are integers scaled by 10^precision. Before pricing, both reserves
and the input amount are scaled up to a shared working precision (the larger
of the two asset precisions); the output is scaled back down, rounding in the
pool's favor.
"""

from stablequote.constants import MAX_AMOUNT
from stablequote.errors import InvalidPrecision, Overflow


def working_precision(*precisions: int) -> int:
    """Working precision for a set of assets: the widest native precision.

    Raises:
        ValueError: If no precision is given
    """
    if not precisions:
        raise ValueError("working_precision requires at least one precision")
    return max(precisions)


def normalize(amount: int, native_precision: int, target_precision: int) -> int:
    """Scale an amount from its native precision up to target precision.

    Args:
        amount: Amount in the asset's native precision
        native_precision: Decimals of the asset
        target_precision: Working precision (must be >= native_precision)

    Returns:
        amount * 10^(target_precision - native_precision)

    Raises:
        InvalidPrecision: If target_precision < native_precision
        Overflow: If the result is negative or exceeds MAX_AMOUNT
    """
    if target_precision < native_precision:
        raise InvalidPrecision(
            f"normalize: target precision {target_precision} below native {native_precision}"
        )
    result = amount * 10 ** (target_precision - native_precision)
    if result < 0 or result > MAX_AMOUNT:
        raise Overflow(f"normalize: {amount} at precision {target_precision} overflows")
    return result


def denormalize(amount: int, working: int, native_precision: int) -> int:
    """Scale a working-precision amount down to native precision, rounding down.

    Args:
        amount: Amount in working precision
        working: Working precision the amount is expressed in
        native_precision: Decimals of the target asset

    Returns:
        amount // 10^(working - native_precision)

    Raises:
        InvalidPrecision: If working < native_precision
    """
    if working < native_precision:
        raise InvalidPrecision(
            f"denormalize: working precision {working} below native {native_precision}"
        )
    return amount // 10 ** (working - native_precision)

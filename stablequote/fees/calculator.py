"""Proportional output fee."""

from stablequote.constants import FEE_DENOMINATOR
from stablequote.errors import NonPositiveOutput
from stablequote.safe_int import S


def apply_fee(amount_out_raw: int, fee_bps: int) -> int:
    """Deduct a basis-point fee from a computed output amount.

    The fee is rounded down, so the pool keeps at most the exact fee:
    net = raw - raw * fee_bps // 10000.

    Args:
        amount_out_raw: Output before fee (normalized)
        fee_bps: Fee rate in basis points

    Returns:
        Output after fee

    Raises:
        NonPositiveOutput: If the net output is not strictly positive
        ValueError: If fee_bps is outside [0, FEE_DENOMINATOR)
    """
    if fee_bps < 0 or fee_bps >= FEE_DENOMINATOR:
        raise ValueError(f"fee_bps must be in [0, {FEE_DENOMINATOR}), got {fee_bps}")
    if amount_out_raw <= 0:
        raise NonPositiveOutput(f"Non-positive output before fee: {amount_out_raw}")

    raw = S(amount_out_raw)
    fee = raw * S(fee_bps) // S(FEE_DENOMINATOR)
    net = raw - fee
    if net <= 0:
        raise NonPositiveOutput(f"Non-positive output after fee: {amount_out_raw} - {fee.value}")
    return net.value

"""Fee conventions and fee application for quotes."""

from stablequote.fees.calculator import apply_fee
from stablequote.fees.config import FeeUnit, to_basis_points

__all__ = [
    "FeeUnit",
    "apply_fee",
    "to_basis_points",
]

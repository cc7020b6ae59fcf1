"""Quote pipeline configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from stablequote.constants import AMP_PRECISION
from stablequote.fees.config import FeeUnit

_TRUE_VALUES = ("true", "1", "yes")


class EmptyReservesPolicy(str, Enum):
    """What a quote against a pool with a zero reserve returns."""

    ABORT = "abort"  # raise EmptyReserves
    ZERO_QUOTE = "zero"  # return the zero-amount sentinel


@dataclass(frozen=True)
class QuoteConfig:
    """Centralized configuration for the quote pipeline.

    The three pool revisions (fixed coefficient, ramped coefficient, lending
    aware) differ only in these flags; the solvers are shared.

    Attributes:
        fee_unit: How pools store their fee_rate
        lending_enabled: Unwrap wrapped reserves before pricing and check
            redeemability of wrapped outputs. When False, wrapped reserves
            are priced at their stored balance.
        ramp_enabled: Apply amplifier schedules. When False the base
            coefficient is always used.
        empty_reserves: Behavior on a zero reserve. None picks ZERO_QUOTE
            for lending-aware pricing and ABORT otherwise.
        amp_precision: Scale applied to amplification coefficients
    """

    fee_unit: FeeUnit = FeeUnit.BASIS_POINTS
    lending_enabled: bool = False
    ramp_enabled: bool = True
    empty_reserves: EmptyReservesPolicy | None = None
    amp_precision: int = AMP_PRECISION

    def __post_init__(self) -> None:
        if self.amp_precision <= 0:
            raise ValueError(f"amp_precision must be positive, got {self.amp_precision}")

    @property
    def empty_reserves_policy(self) -> EmptyReservesPolicy:
        if self.empty_reserves is not None:
            return self.empty_reserves
        if self.lending_enabled:
            return EmptyReservesPolicy.ZERO_QUOTE
        return EmptyReservesPolicy.ABORT

    @classmethod
    def from_env(cls, prefix: str = "STABLEQUOTE_") -> QuoteConfig:
        """Build a config from environment variables with defaults.

        Variables: {prefix}FEE_UNIT (bps|ratio), {prefix}LENDING,
        {prefix}RAMP (true/false), {prefix}EMPTY_RESERVES (abort|zero),
        {prefix}AMP_PRECISION (int).

        Raises:
            ValueError: If a variable holds an unknown value
        """
        env = os.environ
        empty_reserves = env.get(f"{prefix}EMPTY_RESERVES")
        return cls(
            fee_unit=FeeUnit(env.get(f"{prefix}FEE_UNIT", FeeUnit.BASIS_POINTS.value).lower()),
            lending_enabled=env.get(f"{prefix}LENDING", "false").lower() in _TRUE_VALUES,
            ramp_enabled=env.get(f"{prefix}RAMP", "true").lower() in _TRUE_VALUES,
            empty_reserves=EmptyReservesPolicy(empty_reserves.lower()) if empty_reserves else None,
            amp_precision=int(env.get(f"{prefix}AMP_PRECISION", str(AMP_PRECISION))),
        )


# Default configuration instance
DEFAULT_QUOTE_CONFIG = QuoteConfig()

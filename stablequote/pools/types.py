"""Pool dataclasses.

Data structures for two-asset StableSwap pools as read from external
storage. Reserves are a tagged variant: a DirectReserve is priced as-is, a
WrappedReserve holds a yield-bearing balance that the lending adapter turns
into an underlying amount before pricing.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from stablequote.constants import MAX_PRECISION


@dataclass(frozen=True)
class Asset:
    """Asset identity.

    Attributes:
        symbol: Symbol code (e.g. "USDT")
        precision: Native decimal places
        contract: Issuing account; empty when not tracked
    """

    symbol: str
    precision: int
    contract: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.precision <= MAX_PRECISION:
            raise ValueError(f"Asset precision must be in [0, {MAX_PRECISION}], got {self.precision}")

    def __str__(self) -> str:
        if self.contract:
            return f"{self.precision},{self.symbol}@{self.contract}"
        return f"{self.precision},{self.symbol}"


@dataclass(frozen=True)
class DirectReserve:
    """Plain reserve balance, in the asset's native precision."""

    asset: Asset
    amount: int

    @property
    def lendable(self) -> bool:
        return False


@dataclass(frozen=True)
class WrappedReserve:
    """Yield-bearing reserve.

    Attributes:
        asset: Underlying asset the reserve is quoted in
        amount: Wrapped balance held by the pool (the handle passed to the
            lending adapter), not the underlying amount
    """

    asset: Asset
    amount: int

    @property
    def lendable(self) -> bool:
        return True


Reserve = DirectReserve | WrappedReserve


@dataclass(frozen=True)
class PoolConfig:
    """Pool pricing parameters.

    Attributes:
        leverage: Base amplification coefficient A (whole units)
        fee_rate: Fee as stored; integer bps or a Decimal ratio depending on
            the configured FeeUnit
    """

    leverage: int
    fee_rate: int | Decimal


@dataclass(frozen=True)
class Pool:
    """Two-asset StableSwap pool.

    Attributes:
        lptoken: Liquidity-token identifier the pool is keyed by
        reserves: Reserves in storage order
        config: Pricing parameters
    """

    lptoken: str
    reserves: tuple[Reserve, ...]
    config: PoolConfig

    @property
    def lendables(self) -> tuple[bool, ...]:
        """Per-reserve lendable flags, in storage order."""
        return tuple(reserve.lendable for reserve in self.reserves)

    @property
    def assets(self) -> tuple[Asset, ...]:
        return tuple(reserve.asset for reserve in self.reserves)

    def get_reserve(self, asset: Asset) -> Reserve | None:
        """Get the reserve for a specific asset."""
        for reserve in self.reserves:
            if reserve.asset == asset:
                return reserve
        return None

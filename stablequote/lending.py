"""Lending integration boundary.

Wrapped reserves are lent out to an external lending protocol. Before
pricing they are converted to underlying amounts; after pricing, an output
drawn from a wrapped reserve must be redeemable from the protocol right now.
The adapter is read-only and synchronous; nothing here caches its answers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import structlog

from stablequote.errors import InvalidPool
from stablequote.pools.types import Asset, DirectReserve, WrappedReserve

if TYPE_CHECKING:
    from collections.abc import Iterable

    from stablequote.models.records import PoolSnapshot
    from stablequote.pools.types import Reserve

logger = structlog.get_logger()


@runtime_checkable
class LendingAdapter(Protocol):
    """Read-only view of the lending protocol."""

    def unwrap(self, reserve: WrappedReserve) -> int:
        """Underlying amount of a wrapped reserve, in the asset's native precision."""
        ...

    def redeemable_amount(self, asset: Asset) -> int:
        """Amount of asset currently available for withdrawal."""
        ...


def unwrap_reserves(
    reserves: Iterable[Reserve],
    adapter: LendingAdapter,
) -> tuple[DirectReserve, ...]:
    """Resolve every reserve to its underlying balance.

    Each WrappedReserve is unwrapped exactly once; DirectReserves pass
    through unchanged.

    Raises:
        InvalidPool: If the adapter reports a negative underlying amount
    """
    resolved: list[DirectReserve] = []
    for reserve in reserves:
        if isinstance(reserve, DirectReserve):
            resolved.append(reserve)
            continue

        underlying = adapter.unwrap(reserve)
        if underlying < 0:
            raise InvalidPool(f"Lending adapter unwrapped {reserve.asset} to {underlying}")
        logger.debug(
            "reserve_unwrapped",
            asset=str(reserve.asset),
            wrapped=reserve.amount,
            underlying=underlying,
        )
        resolved.append(DirectReserve(asset=reserve.asset, amount=underlying))
    return tuple(resolved)


def is_redeemable(adapter: LendingAdapter, asset: Asset, amount: int) -> bool:
    """True if `amount` of `asset` can be withdrawn from the lending protocol now."""
    redeemable = adapter.redeemable_amount(asset)
    if amount > redeemable:
        logger.debug(
            "redemption_shortfall",
            asset=str(asset),
            amount=amount,
            redeemable=redeemable,
        )
        return False
    return True


class StaticLendingAdapter:
    """Lending adapter over fixed exchange rates and redeemable amounts.

    Args:
        rates: Underlying per wrapped unit as (numerator, denominator) per
            asset; assets without an entry unwrap 1:1
        redeemable: Redeemable amount per asset; missing assets have none
    """

    def __init__(
        self,
        rates: dict[Asset, tuple[int, int]] | None = None,
        redeemable: dict[Asset, int] | None = None,
    ) -> None:
        self._rates = dict(rates or {})
        self._redeemable = dict(redeemable or {})

    @classmethod
    def from_snapshot(cls, snapshot: PoolSnapshot) -> StaticLendingAdapter:
        rates: dict[Asset, tuple[int, int]] = {}
        redeemable: dict[Asset, int] = {}
        for record in snapshot.lending:
            asset = Asset(
                symbol=record.asset.symbol,
                precision=record.asset.precision,
                contract=record.asset.contract,
            )
            rates[asset] = (record.rate_numerator, record.rate_denominator)
            redeemable[asset] = record.redeemable
        return cls(rates=rates, redeemable=redeemable)

    def unwrap(self, reserve: WrappedReserve) -> int:
        numerator, denominator = self._rates.get(reserve.asset, (1, 1))
        return reserve.amount * numerator // denominator

    def redeemable_amount(self, asset: Asset) -> int:
        return self._redeemable.get(asset, 0)

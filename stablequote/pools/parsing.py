"""Pool record parsing.

Functions to turn validated storage records into pool dataclasses. Shape
checks that belong to pricing (reserve count, distinct assets) are left to
the quoter so a malformed stored pool surfaces as InvalidPool at quote time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from stablequote.amplifier import AmplifierSchedule
from stablequote.pools.types import Asset, DirectReserve, Pool, PoolConfig, Reserve, WrappedReserve

if TYPE_CHECKING:
    from stablequote.models.records import AssetRecord, MarketRecord, ScheduleRecord


def parse_asset(record: AssetRecord) -> Asset:
    return Asset(symbol=record.symbol, precision=record.precision, contract=record.contract)


def parse_market(record: MarketRecord) -> Pool:
    """Convert a market row into a Pool.

    A non-zero lendable flag makes the reserve a WrappedReserve; a missing
    lendables list means every reserve is direct.
    """
    lendables = record.lendables or [0] * len(record.reserves)
    reserves: list[Reserve] = []
    for sym, amount, lendable in zip(record.syms, record.reserves, lendables, strict=True):
        asset = parse_asset(sym)
        if lendable:
            reserves.append(WrappedReserve(asset=asset, amount=amount))
        else:
            reserves.append(DirectReserve(asset=asset, amount=amount))

    return Pool(
        lptoken=record.lptoken,
        reserves=tuple(reserves),
        config=PoolConfig(leverage=record.config.leverage, fee_rate=record.config.fee_rate),
    )


def parse_schedule(record: ScheduleRecord) -> AmplifierSchedule:
    return AmplifierSchedule(
        target_leverage=record.target_leverage,
        start_time=record.start_time,
        duration=record.duration,
    )

"""Pool data model and read-only stores."""

from stablequote.pools.parsing import parse_asset, parse_market, parse_schedule
from stablequote.pools.store import PoolRegistry, PoolStore, ScheduleStore
from stablequote.pools.types import Asset, DirectReserve, Pool, PoolConfig, Reserve, WrappedReserve

__all__ = [
    "Asset",
    "DirectReserve",
    "Pool",
    "PoolConfig",
    "PoolRegistry",
    "PoolStore",
    "Reserve",
    "ScheduleStore",
    "WrappedReserve",
    "parse_asset",
    "parse_market",
    "parse_schedule",
]

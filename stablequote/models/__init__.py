"""Pydantic models for externally stored pool data."""

from stablequote.models.records import (
    AssetRecord,
    LendingRecord,
    MarketConfigRecord,
    MarketRecord,
    PoolSnapshot,
    ScheduleRecord,
)

__all__ = [
    "AssetRecord",
    "LendingRecord",
    "MarketConfigRecord",
    "MarketRecord",
    "PoolSnapshot",
    "ScheduleRecord",
]

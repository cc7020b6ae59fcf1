"""Read-only pool and schedule lookups.

The quoter never owns pool state: it reads pools and amplifier schedules
through these interfaces, which the storage layer implements. PoolRegistry
is an in-memory implementation used for snapshots and tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import structlog

from stablequote.pools.parsing import parse_market, parse_schedule

if TYPE_CHECKING:
    from stablequote.amplifier import AmplifierSchedule
    from stablequote.models.records import PoolSnapshot
    from stablequote.pools.types import Pool

logger = structlog.get_logger()


@runtime_checkable
class PoolStore(Protocol):
    """Lookup of pools by liquidity-token identifier."""

    def get_pool(self, lptoken: str) -> Pool | None:
        """Return the pool keyed by lptoken, or None if it does not exist."""
        ...


@runtime_checkable
class ScheduleStore(Protocol):
    """Lookup of amplifier ramps by liquidity-token identifier."""

    def get_schedule(self, lptoken: str) -> AmplifierSchedule | None:
        """Return the pool's active ramp, or None for a constant coefficient."""
        ...


class PoolRegistry:
    """In-memory registry of pools and amplifier schedules.

    Implements both PoolStore and ScheduleStore.
    """

    def __init__(
        self,
        pools: list[Pool] | None = None,
        schedules: dict[str, AmplifierSchedule] | None = None,
    ) -> None:
        self._pools: dict[str, Pool] = {}
        self._schedules: dict[str, AmplifierSchedule] = dict(schedules or {})

        if pools:
            for pool in pools:
                self.add_pool(pool)

    @classmethod
    def from_snapshot(cls, snapshot: PoolSnapshot) -> PoolRegistry:
        """Build a registry from a validated storage snapshot."""
        registry = cls()
        for market in snapshot.markets:
            registry.add_pool(parse_market(market))
        for record in snapshot.schedules:
            registry.set_schedule(record.lptoken, parse_schedule(record))
        logger.debug(
            "registry_loaded",
            pool_count=registry.pool_count,
            schedule_count=len(registry._schedules),
        )
        return registry

    def add_pool(self, pool: Pool) -> None:
        """Add a pool, replacing any pool with the same lptoken."""
        if pool.lptoken in self._pools:
            logger.debug("registry_pool_replaced", lptoken=pool.lptoken)
        self._pools[pool.lptoken] = pool

    def set_schedule(self, lptoken: str, schedule: AmplifierSchedule | None) -> None:
        """Attach a ramp to a pool, or clear it with None."""
        if schedule is None:
            self._schedules.pop(lptoken, None)
        else:
            self._schedules[lptoken] = schedule

    def get_pool(self, lptoken: str) -> Pool | None:
        return self._pools.get(lptoken)

    def get_schedule(self, lptoken: str) -> AmplifierSchedule | None:
        return self._schedules.get(lptoken)

    @property
    def pool_count(self) -> int:
        return len(self._pools)

    def __contains__(self, lptoken: object) -> bool:
        return lptoken in self._pools

"""Time-ramped amplification coefficient.

A pool's amplification moves linearly from its base coefficient A0 to a
scheduled target A1 over [t0, t0 + duration]. Coefficients are resolved in
AMP_PRECISION units so intermediate steps of the ramp are not lost to
integer truncation.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from stablequote.constants import AMP_PRECISION

if TYPE_CHECKING:
    from stablequote.pools.store import ScheduleStore

logger = structlog.get_logger()

Clock = Callable[[], int]


def system_clock() -> int:
    """Current unix time in whole seconds."""
    return int(time.time())


@dataclass(frozen=True)
class AmplifierSchedule:
    """Scheduled change of a pool's amplification coefficient.

    Attributes:
        target_leverage: Coefficient A1 reached at the end of the ramp
        start_time: Ramp start t0 (unix seconds)
        duration: Ramp length in seconds; 0 switches to A1 at t0
    """

    target_leverage: int
    start_time: int
    duration: int

    def __post_init__(self) -> None:
        if self.target_leverage <= 0:
            raise ValueError(f"target_leverage must be positive, got {self.target_leverage}")
        if self.duration < 0:
            raise ValueError(f"duration must be non-negative, got {self.duration}")

    @property
    def end_time(self) -> int:
        return self.start_time + self.duration


def interpolate(a0: int, a1: int, t0: int, t1: int, now: int) -> int:
    """Linear interpolation between a0 at t0 and a1 at t1, truncating.

    Before t0 the coefficient stays at a0; from t1 on it is a1.
    """
    if now >= t1:
        return a1
    if now <= t0:
        return a0
    # Both branches keep the product non-negative
    if a1 > a0:
        return a0 + (a1 - a0) * (now - t0) // (t1 - t0)
    return a0 - (a0 - a1) * (now - t0) // (t1 - t0)


class AmplifierRamp:
    """Resolves the effective amplification coefficient of a pool.

    Args:
        schedules: Schedule lookup keyed by liquidity token. None means no
            pool ever ramps.
        clock: Zero-argument callable returning unix seconds. Defaults to
            the system clock.
        precision: Scale of the returned coefficient.
    """

    def __init__(
        self,
        schedules: ScheduleStore | None = None,
        clock: Clock | None = None,
        precision: int = AMP_PRECISION,
    ) -> None:
        if precision <= 0:
            raise ValueError(f"precision must be positive, got {precision}")
        self._schedules = schedules
        self._clock = clock if clock is not None else system_clock
        self.precision = precision

    def resolve(self, lptoken: str, base_leverage: int, now: int | None = None) -> int:
        """Effective coefficient for a pool at time `now`.

        Args:
            lptoken: Pool identifier used to look up its schedule
            base_leverage: Pool's base coefficient A0 (whole units)
            now: Unix seconds; read from the clock when omitted

        Returns:
            Coefficient scaled by self.precision
        """
        a0 = base_leverage * self.precision
        schedule = self._schedules.get_schedule(lptoken) if self._schedules is not None else None
        if schedule is None:
            return a0

        if now is None:
            now = self._clock()

        a1 = schedule.target_leverage * self.precision
        amp = interpolate(a0, a1, schedule.start_time, schedule.end_time, now)
        logger.debug(
            "amplifier_resolved",
            lptoken=lptoken,
            base=a0,
            target=a1,
            now=now,
            start_time=schedule.start_time,
            end_time=schedule.end_time,
            amp=amp,
        )
        return amp

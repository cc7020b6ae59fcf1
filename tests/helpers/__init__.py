"""Test helpers module for shared test utilities.

- constants: Assets and common amounts
- factories: Pool factories and collaborator fakes
"""

from tests.helpers.constants import (
    DAI,
    EOSDT,
    LPTOKEN,
    ONE_MILLION_6,
    ONE_THOUSAND_6,
    USDC,
    USDT,
    USDX,
)
from tests.helpers.factories import (
    FakeLendingAdapter,
    FixedClock,
    make_pool,
    make_registry,
    make_reserve,
)

__all__ = [
    # Constants
    "USDT",
    "USDC",
    "DAI",
    "USDX",
    "EOSDT",
    "ONE_MILLION_6",
    "ONE_THOUSAND_6",
    "LPTOKEN",
    # Factories
    "make_pool",
    "make_registry",
    "make_reserve",
    "FixedClock",
    "FakeLendingAdapter",
]

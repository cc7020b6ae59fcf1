"""Read-only quote engine for two-asset StableSwap pools."""

from stablequote.amplifier import AmplifierRamp, AmplifierSchedule
from stablequote.config import DEFAULT_QUOTE_CONFIG, EmptyReservesPolicy, QuoteConfig
from stablequote.errors import (
    EmptyReserves,
    InsufficientLiquidity,
    InvalidFeeRate,
    InvalidInput,
    InvalidPool,
    InvalidPrecision,
    NonPositiveOutput,
    Overflow,
    QuoteError,
    ZeroBalanceError,
)
from stablequote.fees import FeeUnit
from stablequote.lending import LendingAdapter, StaticLendingAdapter
from stablequote.pools import (
    Asset,
    DirectReserve,
    Pool,
    PoolConfig,
    PoolRegistry,
    PoolStore,
    ScheduleStore,
    WrappedReserve,
)
from stablequote.quoter import (
    QuoteRequest,
    QuoteResult,
    QuoteStage,
    Quoter,
    ZeroQuoteReason,
    get_amount_out,
)

__version__ = "0.1.0"

__all__ = [
    # Quoting
    "Quoter",
    "QuoteRequest",
    "QuoteResult",
    "QuoteStage",
    "ZeroQuoteReason",
    "get_amount_out",
    # Configuration
    "QuoteConfig",
    "DEFAULT_QUOTE_CONFIG",
    "EmptyReservesPolicy",
    "FeeUnit",
    # Pools
    "Asset",
    "DirectReserve",
    "WrappedReserve",
    "Pool",
    "PoolConfig",
    "PoolRegistry",
    "PoolStore",
    "ScheduleStore",
    # Amplifier
    "AmplifierRamp",
    "AmplifierSchedule",
    # Lending
    "LendingAdapter",
    "StaticLendingAdapter",
    # Errors
    "QuoteError",
    "InvalidInput",
    "InvalidPool",
    "InvalidFeeRate",
    "EmptyReserves",
    "ZeroBalanceError",
    "InsufficientLiquidity",
    "NonPositiveOutput",
    "Overflow",
    "InvalidPrecision",
]

"""StableSwap quote orchestration.

Composes normalization, the amplifier ramp, the two Newton-Raphson solvers,
the fee model and the lending boundary into a single read-only quote:

    Validate -> Unwrap -> Normalize -> RampAmplifier -> SolveInvariant
        -> SolveOutput -> Fee -> Denormalize -> LendingCheck -> Done

Every stage either advances or fails terminally. The one non-error early
exit is the zero-amount sentinel, returned when a pool cannot deliver right
now (empty reserves under the ZERO_QUOTE policy, or a wrapped output that
exceeds what the lending protocol can redeem).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import structlog

from stablequote.amplifier import AmplifierRamp
from stablequote.config import DEFAULT_QUOTE_CONFIG, EmptyReservesPolicy, QuoteConfig
from stablequote.constants import MAX_AMOUNT
from stablequote.errors import (
    EmptyReserves,
    InsufficientLiquidity,
    InvalidInput,
    InvalidPool,
    Overflow,
    QuoteError,
)
from stablequote.fees import apply_fee, to_basis_points
from stablequote.lending import is_redeemable, unwrap_reserves
from stablequote.math.scaling import denormalize, normalize, working_precision
from stablequote.math.stable_math import calculate_invariant, get_output_reserve
from stablequote.pools.types import DirectReserve, WrappedReserve
from stablequote.safe_int import SafeIntError, WidthOverflow

if TYPE_CHECKING:
    from stablequote.amplifier import Clock
    from stablequote.lending import LendingAdapter
    from stablequote.pools.store import PoolStore, ScheduleStore
    from stablequote.pools.types import Asset, Pool, Reserve

logger = structlog.get_logger()


class QuoteStage(str, Enum):
    """Pipeline stages, in execution order."""

    VALIDATE = "validate"
    UNWRAP = "unwrap"
    NORMALIZE = "normalize"
    RAMP_AMPLIFIER = "ramp_amplifier"
    SOLVE_INVARIANT = "solve_invariant"
    SOLVE_OUTPUT = "solve_output"
    FEE = "fee"
    DENORMALIZE = "denormalize"
    LENDING_CHECK = "lending_check"
    DONE = "done"


class ZeroQuoteReason(str, Enum):
    """Why a quote came back as the zero-amount sentinel."""

    EMPTY_RESERVES = "empty_reserves"
    REDEMPTION_LIMIT = "redemption_limit"


@dataclass(frozen=True)
class QuoteRequest:
    """Exact-input quote request.

    Attributes:
        amount: Input amount in the input asset's native precision
        asset: Input asset
        out_asset: Desired output asset
        lptoken: Pool identifier
    """

    amount: int
    asset: Asset
    out_asset: Asset
    lptoken: str


@dataclass(frozen=True)
class QuoteResult:
    """Result of a quote.

    A zero amount with a zero_reason is the "no liquidity deliverable right
    now" sentinel, not an error. Callers rejecting trades should treat it
    like InsufficientLiquidity; logs keep the two apart.

    Attributes:
        amount: Output amount in the output asset's native precision
        asset: Output asset
        zero_reason: Set only on the zero-amount sentinel
    """

    amount: int
    asset: Asset
    zero_reason: ZeroQuoteReason | None = None

    @property
    def is_available(self) -> bool:
        """True if the quote carries a deliverable amount."""
        return self.amount > 0

    @classmethod
    def zero(cls, asset: Asset, reason: ZeroQuoteReason) -> QuoteResult:
        """Create the zero-amount sentinel."""
        return cls(amount=0, asset=asset, zero_reason=reason)


class Quoter:
    """Read-only StableSwap quote engine.

    Holds only injected read-only collaborators, so a single instance can
    serve any number of independent quotes.

    Args:
        pools: Pool lookup.
        config: Pipeline flags. Defaults to DEFAULT_QUOTE_CONFIG.
        schedules: Amplifier ramp lookup. None means no pool ramps.
        clock: Unix-seconds clock for the ramp. Defaults to the system clock.
        lending: Lending adapter; required when config.lending_enabled.
    """

    def __init__(
        self,
        pools: PoolStore,
        config: QuoteConfig | None = None,
        schedules: ScheduleStore | None = None,
        clock: Clock | None = None,
        lending: LendingAdapter | None = None,
    ) -> None:
        self.config = config if config is not None else DEFAULT_QUOTE_CONFIG
        if self.config.lending_enabled and lending is None:
            raise ValueError("lending_enabled requires a lending adapter")
        self._pools = pools
        self._lending = lending
        self.ramp = AmplifierRamp(
            schedules=schedules if self.config.ramp_enabled else None,
            clock=clock,
            precision=self.config.amp_precision,
        )

    def get_amount_out(
        self,
        amount: int,
        asset: Asset,
        out_asset: Asset,
        lptoken: str,
    ) -> QuoteResult:
        """Maximum amount of out_asset received for `amount` of `asset`.

        Raises:
            QuoteError: Any terminal failure, tagged with its stage
        """
        return self.quote(QuoteRequest(amount=amount, asset=asset, out_asset=out_asset, lptoken=lptoken))

    def quote(self, request: QuoteRequest) -> QuoteResult:
        """Run the quote pipeline for a request.

        Raises:
            InvalidInput: Non-positive amount or missing pool identifier
            InvalidPool: Unknown pool, wrong shape, pair mismatch, bad config
            EmptyReserves: Zero reserve under the ABORT policy
            InsufficientLiquidity: Non-positive output (before or after fee)
            Overflow: An amount or intermediate exceeded its width
            InvalidPrecision: Precision contract violated
        """
        stage = QuoteStage.VALIDATE
        try:
            pool, stored_in, stored_out = self._validate(request)
            fee_bps = to_basis_points(pool.config.fee_rate, self.config.fee_unit)

            stage = QuoteStage.UNWRAP
            res_in, res_out = self._unwrap(stored_in, stored_out)
            if res_in.amount <= 0 or res_out.amount <= 0:
                if self.config.empty_reserves_policy is EmptyReservesPolicy.ZERO_QUOTE:
                    return self._unavailable(request, ZeroQuoteReason.EMPTY_RESERVES)
                raise EmptyReserves(
                    f"Empty reserves in {pool.lptoken}: ({res_in.amount}, {res_out.amount})",
                    QuoteStage.VALIDATE,
                )

            stage = QuoteStage.NORMALIZE
            precision = working_precision(res_in.asset.precision, res_out.asset.precision)
            reserve_in = normalize(res_in.amount, res_in.asset.precision, precision)
            reserve_out = normalize(res_out.amount, res_out.asset.precision, precision)
            amount_in = normalize(request.amount, request.asset.precision, precision)
            if reserve_in + amount_in > MAX_AMOUNT:
                raise Overflow(f"Input reserve after deposit overflows: {reserve_in} + {amount_in}")
            logger.debug(
                "quote_normalized",
                lptoken=pool.lptoken,
                precision=precision,
                reserve_in=reserve_in,
                reserve_out=reserve_out,
                amount_in=amount_in,
            )

            stage = QuoteStage.RAMP_AMPLIFIER
            amp = self.ramp.resolve(pool.lptoken, pool.config.leverage)

            stage = QuoteStage.SOLVE_INVARIANT
            invariant = calculate_invariant(amp, reserve_in, reserve_out, self.config.amp_precision)

            stage = QuoteStage.SOLVE_OUTPUT
            new_reserve_out = get_output_reserve(
                amp, invariant, reserve_in + amount_in, self.config.amp_precision
            )
            amount_out_raw = reserve_out - new_reserve_out
            if amount_out_raw <= 0:
                raise InsufficientLiquidity(
                    f"Non-positive output: reserve_out={reserve_out}, new_reserve_out={new_reserve_out}"
                )

            stage = QuoteStage.FEE
            amount_out_net = apply_fee(amount_out_raw, fee_bps)

            stage = QuoteStage.DENORMALIZE
            amount_out = denormalize(amount_out_net, precision, request.out_asset.precision)

            stage = QuoteStage.LENDING_CHECK
            if (
                self.config.lending_enabled
                and isinstance(stored_out, WrappedReserve)
                and not is_redeemable(self._lending, request.out_asset, amount_out)
            ):
                return self._unavailable(request, ZeroQuoteReason.REDEMPTION_LIMIT)

        except SafeIntError as err:
            error: QuoteError
            if isinstance(err, WidthOverflow):
                error = Overflow(str(err), stage)
            else:
                error = InsufficientLiquidity(str(err), stage)
            self._log_failure(request, error)
            raise error from err
        except QuoteError as err:
            if err.stage is None:
                err.stage = stage
            self._log_failure(request, err)
            raise

        logger.debug(
            "quote_computed",
            lptoken=request.lptoken,
            amp=amp,
            invariant=invariant,
            amount_in=request.amount,
            amount_out_raw=amount_out_raw,
            fee_bps=fee_bps,
            amount_out=amount_out,
        )
        return QuoteResult(amount=amount_out, asset=request.out_asset)

    def _validate(self, request: QuoteRequest) -> tuple[Pool, Reserve, Reserve]:
        """Check the request and orient the pool's reserves as (in, out)."""
        if isinstance(request.amount, bool) or not isinstance(request.amount, int):
            raise InvalidInput(f"Input amount must be an integer, got {type(request.amount).__name__}")
        if request.amount <= 0:
            raise InvalidInput(f"Input amount must be positive, got {request.amount}")
        if not request.lptoken:
            raise InvalidInput("Missing pool identifier")

        pool = self._pools.get_pool(request.lptoken)
        if pool is None:
            raise InvalidPool(f"Can't find pool {request.lptoken}")
        if len(pool.reserves) != 2:
            raise InvalidPool(f"Only 2-reserve pools supported, {pool.lptoken} has {len(pool.reserves)}")

        res_in, res_out = pool.reserves
        if res_in.asset == res_out.asset:
            raise InvalidPool(f"Pool {pool.lptoken} holds {res_in.asset} twice")
        if res_in.asset != request.asset:
            res_in, res_out = res_out, res_in
        if res_in.asset != request.asset or res_out.asset != request.out_asset:
            raise InvalidPool(
                f"Pool {pool.lptoken} does not trade {request.asset} -> {request.out_asset}"
            )
        if pool.config.leverage <= 0:
            raise InvalidPool(f"Pool {pool.lptoken} has non-positive leverage {pool.config.leverage}")
        return pool, res_in, res_out

    def _unwrap(self, res_in: Reserve, res_out: Reserve) -> tuple[DirectReserve, DirectReserve]:
        """Resolve both reserves to priceable balances.

        Without lending, wrapped reserves are priced at their stored balance.
        """
        if self.config.lending_enabled:
            unwrapped_in, unwrapped_out = unwrap_reserves((res_in, res_out), self._lending)
            return unwrapped_in, unwrapped_out
        return (
            DirectReserve(asset=res_in.asset, amount=res_in.amount),
            DirectReserve(asset=res_out.asset, amount=res_out.amount),
        )

    def _unavailable(self, request: QuoteRequest, reason: ZeroQuoteReason) -> QuoteResult:
        logger.info(
            "quote_unavailable",
            lptoken=request.lptoken,
            asset=str(request.asset),
            out_asset=str(request.out_asset),
            amount_in=request.amount,
            reason=reason.value,
        )
        return QuoteResult.zero(request.out_asset, reason)

    def _log_failure(self, request: QuoteRequest, error: QuoteError) -> None:
        logger.info(
            "quote_failed",
            lptoken=request.lptoken,
            asset=str(request.asset),
            out_asset=str(request.out_asset),
            amount_in=request.amount,
            error=error.code,
            stage=error.stage.value if error.stage is not None else None,
            detail=str(error),
        )


def get_amount_out(
    pools: PoolStore,
    amount: int,
    asset: Asset,
    out_asset: Asset,
    lptoken: str,
    *,
    config: QuoteConfig | None = None,
    schedules: ScheduleStore | None = None,
    clock: Clock | None = None,
    lending: LendingAdapter | None = None,
) -> QuoteResult:
    """One-shot quote without keeping a Quoter around.

    See Quoter.get_amount_out.
    """
    quoter = Quoter(pools, config=config, schedules=schedules, clock=clock, lending=lending)
    return quoter.get_amount_out(amount, asset, out_asset, lptoken)

"""Quote a swap against a pool snapshot.

Loads a JSON snapshot of markets, amplifier ramps and lending state, then
prints the output of an exact-input swap.

Usage:
    python -m scripts.quote_pool tests/fixtures/pools/snapshot.json USDDAI 10000 USDT DAI
    python -m scripts.quote_pool snapshot.json USDDAI 10000 USDT DAI --lending --now 1700000000
"""

import argparse
import json
import sys
from pathlib import Path

import structlog

from stablequote import EmptyReservesPolicy, FeeUnit, QuoteConfig, QuoteError, Quoter
from stablequote.constants import AMP_PRECISION
from stablequote.lending import StaticLendingAdapter
from stablequote.models import PoolSnapshot
from stablequote.pools import Asset, PoolRegistry

logger = structlog.get_logger()


def load_snapshot(path: Path) -> PoolSnapshot:
    with open(path) as f:
        data = json.load(f)
    return PoolSnapshot.model_validate(data)


def find_asset(registry: PoolRegistry, lptoken: str, symbol: str) -> Asset | None:
    """Look up a pool asset by symbol code."""
    pool = registry.get_pool(lptoken)
    if pool is None:
        return None
    for asset in pool.assets:
        if asset.symbol == symbol:
            return asset
    return None


def main() -> None:
    """Entry point for the snapshot quote script."""
    parser = argparse.ArgumentParser(description="Quote a StableSwap pool snapshot")
    parser.add_argument("snapshot", type=Path, help="Pool snapshot JSON file")
    parser.add_argument("lptoken", help="Pool liquidity token")
    parser.add_argument("amount", type=int, help="Input amount in native precision")
    parser.add_argument("asset", help="Input symbol code")
    parser.add_argument("out_asset", help="Output symbol code")
    parser.add_argument("--now", type=int, default=None, help="Unix time for the amplifier ramp")
    parser.add_argument(
        "--fee-unit",
        choices=[unit.value for unit in FeeUnit],
        default=FeeUnit.BASIS_POINTS.value,
        help="How the snapshot stores fee rates",
    )
    parser.add_argument("--lending", action="store_true", help="Price wrapped reserves via lending")
    parser.add_argument(
        "--empty-reserves",
        choices=[policy.value for policy in EmptyReservesPolicy],
        default=None,
        help="Zero-reserve behavior (default follows --lending)",
    )
    parser.add_argument("--amp-precision", type=int, default=AMP_PRECISION)
    parser.add_argument("--verbose", action="store_true", help="Show stage debug logs")

    args = parser.parse_args()

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(10 if args.verbose else 20),
    )

    snapshot = load_snapshot(args.snapshot)
    registry = PoolRegistry.from_snapshot(snapshot)

    asset = find_asset(registry, args.lptoken, args.asset)
    out_asset = find_asset(registry, args.lptoken, args.out_asset)
    if asset is None or out_asset is None:
        print(f"Pool {args.lptoken} does not hold {args.asset} and {args.out_asset}")
        sys.exit(1)

    config = QuoteConfig(
        fee_unit=FeeUnit(args.fee_unit),
        lending_enabled=args.lending,
        empty_reserves=EmptyReservesPolicy(args.empty_reserves) if args.empty_reserves else None,
        amp_precision=args.amp_precision,
    )
    quoter = Quoter(
        registry,
        config=config,
        schedules=registry,
        clock=(lambda: args.now) if args.now is not None else None,
        lending=StaticLendingAdapter.from_snapshot(snapshot) if args.lending else None,
    )

    try:
        result = quoter.get_amount_out(args.amount, asset, out_asset, args.lptoken)
    except QuoteError as e:
        stage = e.stage.value if e.stage is not None else "-"
        print(f"Quote failed at {stage}: {e.code}: {e}")
        sys.exit(1)

    if result.zero_reason is not None:
        print(f"0 {out_asset.symbol} (unavailable: {result.zero_reason.value})")
    else:
        print(f"{result.amount} {out_asset.symbol}")


if __name__ == "__main__":
    main()

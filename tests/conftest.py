"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from stablequote.config import QuoteConfig
from stablequote.pools import Pool, PoolRegistry
from stablequote.quoter import Quoter
from tests.helpers import FakeLendingAdapter, FixedClock, make_pool, make_registry

FIXTURES_DIR = Path(__file__).parent / "fixtures"
POOLS_DIR = FIXTURES_DIR / "pools"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the fixtures directory path."""
    return FIXTURES_DIR


@pytest.fixture
def snapshot_path() -> Path:
    """Return the pool snapshot fixture path."""
    return POOLS_DIR / "snapshot.json"


@pytest.fixture
def balanced_pool() -> Pool:
    """Balanced 1M/1M pool at 6 decimals, A=100, no fee, no lending."""
    return make_pool()


@pytest.fixture
def registry(balanced_pool: Pool) -> PoolRegistry:
    """Registry holding the balanced pool."""
    return make_registry(balanced_pool)


@pytest.fixture
def quoter(registry: PoolRegistry) -> Quoter:
    """Quoter over the balanced pool with default configuration."""
    return Quoter(registry)


@pytest.fixture
def clock() -> FixedClock:
    """Clock fixed at 2023-11-14T22:13:20Z."""
    return FixedClock(1_700_000_000)


@pytest.fixture
def lending() -> FakeLendingAdapter:
    """Lending adapter unwrapping 1:1 with nothing redeemable."""
    return FakeLendingAdapter()


@pytest.fixture
def lending_config() -> QuoteConfig:
    """Lending-aware configuration."""
    return QuoteConfig(lending_enabled=True)

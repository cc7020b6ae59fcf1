"""Tests for quote pipeline configuration."""

import pytest

from stablequote.config import DEFAULT_QUOTE_CONFIG, EmptyReservesPolicy, QuoteConfig
from stablequote.constants import AMP_PRECISION
from stablequote.fees import FeeUnit

ENV_VARS = ("FEE_UNIT", "LENDING", "RAMP", "EMPTY_RESERVES", "AMP_PRECISION")


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(f"STABLEQUOTE_{name}", raising=False)
    return monkeypatch


class TestQuoteConfig:
    """Tests for QuoteConfig defaults and policies."""

    def test_defaults(self) -> None:
        assert DEFAULT_QUOTE_CONFIG.fee_unit is FeeUnit.BASIS_POINTS
        assert DEFAULT_QUOTE_CONFIG.lending_enabled is False
        assert DEFAULT_QUOTE_CONFIG.ramp_enabled is True
        assert DEFAULT_QUOTE_CONFIG.amp_precision == AMP_PRECISION

    def test_empty_reserves_defaults_follow_lending(self) -> None:
        assert QuoteConfig().empty_reserves_policy is EmptyReservesPolicy.ABORT
        assert QuoteConfig(lending_enabled=True).empty_reserves_policy is EmptyReservesPolicy.ZERO_QUOTE

    def test_explicit_empty_reserves_wins(self) -> None:
        config = QuoteConfig(lending_enabled=True, empty_reserves=EmptyReservesPolicy.ABORT)
        assert config.empty_reserves_policy is EmptyReservesPolicy.ABORT

    def test_non_positive_precision_raises(self) -> None:
        with pytest.raises(ValueError):
            QuoteConfig(amp_precision=0)


class TestFromEnv:
    """Tests for QuoteConfig.from_env."""

    def test_defaults_without_env(self, clean_env) -> None:
        assert QuoteConfig.from_env() == QuoteConfig()

    def test_reads_all_variables(self, clean_env) -> None:
        clean_env.setenv("STABLEQUOTE_FEE_UNIT", "RATIO")
        clean_env.setenv("STABLEQUOTE_LENDING", "yes")
        clean_env.setenv("STABLEQUOTE_RAMP", "false")
        clean_env.setenv("STABLEQUOTE_EMPTY_RESERVES", "abort")
        clean_env.setenv("STABLEQUOTE_AMP_PRECISION", "1")

        config = QuoteConfig.from_env()

        assert config.fee_unit is FeeUnit.RATIO
        assert config.lending_enabled is True
        assert config.ramp_enabled is False
        assert config.empty_reserves_policy is EmptyReservesPolicy.ABORT
        assert config.amp_precision == 1

    def test_custom_prefix(self, clean_env) -> None:
        clean_env.setenv("POOLS_LENDING", "1")
        assert QuoteConfig.from_env(prefix="POOLS_").lending_enabled is True

    def test_unknown_value_raises(self, clean_env) -> None:
        clean_env.setenv("STABLEQUOTE_EMPTY_RESERVES", "sometimes")
        with pytest.raises(ValueError):
            QuoteConfig.from_env()

"""Pydantic models for pool records held by external storage.

These mirror the storage layout of a market row: parallel lists of symbols,
reserves and lendable flags plus a config block. They are validated here and
turned into pool dataclasses by stablequote.pools.parsing.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from stablequote.models.types import Amount, Precision, SymbolCode


class AssetRecord(BaseModel):
    """Asset identity as stored with a market."""

    model_config = ConfigDict(frozen=True)

    symbol: SymbolCode
    precision: Precision
    contract: str = ""


class MarketConfigRecord(BaseModel):
    """Pricing parameters of a market.

    fee_rate is kept as stored: whole basis points or a decimal ratio,
    depending on the deployment's fee unit.
    """

    leverage: int = Field(ge=0)
    fee_rate: int | Decimal = 0


class MarketRecord(BaseModel):
    """A stored market row."""

    lptoken: SymbolCode
    syms: list[AssetRecord]
    reserves: list[Amount]
    lendables: list[int] = Field(default_factory=list)
    config: MarketConfigRecord

    @model_validator(mode="after")
    def _check_parallel_lists(self) -> MarketRecord:
        if len(self.syms) != len(self.reserves):
            raise ValueError(
                f"syms and reserves differ in length: {len(self.syms)} != {len(self.reserves)}"
            )
        if self.lendables and len(self.lendables) != len(self.reserves):
            raise ValueError(
                f"lendables and reserves differ in length: "
                f"{len(self.lendables)} != {len(self.reserves)}"
            )
        return self


class ScheduleRecord(BaseModel):
    """A stored amplifier ramp."""

    lptoken: SymbolCode
    target_leverage: int = Field(gt=0)
    start_time: int = Field(ge=0)
    duration: int = Field(ge=0)


class LendingRecord(BaseModel):
    """Lending state of a wrapped asset.

    Underlying amount of a wrapped balance is
    balance * rate_numerator // rate_denominator.
    """

    asset: AssetRecord
    rate_numerator: int = Field(default=1, gt=0)
    rate_denominator: int = Field(default=1, gt=0)
    redeemable: Amount


class PoolSnapshot(BaseModel):
    """Point-in-time export of markets, ramps and lending state."""

    markets: list[MarketRecord] = Field(default_factory=list)
    schedules: list[ScheduleRecord] = Field(default_factory=list)
    lending: list[LendingRecord] = Field(default_factory=list)

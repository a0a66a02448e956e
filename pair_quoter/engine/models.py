# pair_quoter/engine/models.py
from __future__ import annotations
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

ZERO_ADDRESS = "0x" + "0" * 40


class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    address: str
    decimals: int = Field(ge=0, le=77)


class ReservePair(BaseModel):
    """Raw `getReserves()` result, in pool slot order (token0, token1)."""

    model_config = ConfigDict(frozen=True)

    reserve0: int = Field(ge=0)
    reserve1: int = Field(ge=0)
    block_timestamp_last: int = Field(ge=0)


class QuoteMethod(str, Enum):
    ROUTER = "router"
    SPOT = "spot"
    EFFECTIVE = "effective"


class PriceQuote(BaseModel):
    """Output units per one input unit, tagged with how it was produced."""

    model_config = ConfigDict(frozen=True)

    method: QuoteMethod
    price: Decimal
    slippage_pct: Optional[Decimal] = None


class RouterQuote(BaseModel):
    model_config = ConfigDict(frozen=True)

    token_in: Token
    token_out: Token
    amounts: List[int]
    amount_in: int
    amount_out: int
    amount_out_units: Decimal
    quote: PriceQuote


class ReservePricing(BaseModel):
    """Pure arithmetic result for one oriented reserve pair."""

    model_config = ConfigDict(frozen=True)

    spot: PriceQuote
    effective: PriceQuote
    amount_in: int
    amount_out: int
    reserve_in_units: Decimal
    reserve_out_units: Decimal


class ReservesQuote(BaseModel):
    model_config = ConfigDict(frozen=True)

    token_in: Token
    token_out: Token
    factory: str
    pool: str
    fee_bps: int
    reserves: ReservePair
    pricing: ReservePricing
    fee_to: str
    fee_to_setter: str

    @property
    def block_timestamp_last(self) -> int:
        return self.reserves.block_timestamp_last


class CrossCheck(BaseModel):
    model_config = ConfigDict(frozen=True)

    router_price: Decimal
    reserves_price: Decimal
    divergence_pct: Decimal
    tolerance_pct: Decimal
    within_tolerance: bool


__all__ = [
    "ZERO_ADDRESS",
    "Token",
    "ReservePair",
    "QuoteMethod",
    "PriceQuote",
    "RouterQuote",
    "ReservePricing",
    "ReservesQuote",
    "CrossCheck",
]

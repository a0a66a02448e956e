# pair_quoter/config.py
from __future__ import annotations
from decimal import Decimal
from typing import Annotated, Dict, List, Tuple

import yaml
from pydantic import BaseModel, Field, model_validator

from pair_quoter.engine.amm import DEFAULT_FEE_BPS, FEE_DENOMINATOR
from pair_quoter.engine.cross_check import DEFAULT_TOLERANCE_PCT
from pair_quoter.engine.models import Token


class TokenEntry(BaseModel):
    address: str
    decimals: int = Field(ge=0, le=77)


class TokensConfig(BaseModel):
    chain_id: int = 8453
    router: str
    symbols: Dict[str, TokenEntry]

    def token(self, symbol: str) -> Token:
        entry = self.symbols[symbol]
        return Token(symbol=symbol, address=entry.address, decimals=entry.decimals)


class PairsConfig(BaseModel):
    pairs: List[Tuple[str, str]]
    sizes: List[Annotated[Decimal, Field(ge=0)]] = Field(default_factory=lambda: [Decimal(1)])
    fee_bps: int = Field(default=DEFAULT_FEE_BPS, ge=0, lt=FEE_DENOMINATOR)
    cross_check_tolerance_pct: Decimal = DEFAULT_TOLERANCE_PCT


class Config(BaseModel):
    tokens: TokensConfig
    pairs: PairsConfig

    @model_validator(mode="after")
    def _pairs_use_known_symbols(self):
        for base, quote in self.pairs.pairs:
            for sym in (base, quote):
                if sym not in self.tokens.symbols:
                    raise ValueError(f"pair {base}/{quote} uses unknown symbol {sym}")
        return self


def load_config(tokens_path: str, pairs_path: str) -> Config:
    with open(tokens_path, "r") as f:
        cfg_tokens = yaml.safe_load(f)
    with open(pairs_path, "r") as f:
        cfg_pairs = yaml.safe_load(f)
    return Config(tokens=cfg_tokens, pairs=cfg_pairs)


__all__ = ["TokenEntry", "TokensConfig", "PairsConfig", "Config", "load_config"]

# pair_quoter/engine/reserves_price.py
"""
Reserves-based quote: price a token pair straight from a V2 pair contract.

Read sequence (each read depends on the previous one):
  router.factory() -> factory.getPair(a, b) -> pair.token0/token1/getReserves
  -> factory.feeTo() / factory.feeToSetter()

Spot price is the raw reserve ratio (no fee, no curve impact). Effective price
runs one whole input unit through the constant-product formula. The gap
between them is reported as the slippage rate.
"""
from __future__ import annotations
from decimal import Decimal
from typing import Optional, Tuple

from loguru import logger

from pair_quoter.engine.amm import DEFAULT_FEE_BPS, get_amount_out
from pair_quoter.engine.errors import DegeneratePoolError, QuoteUnavailableError
from pair_quoter.engine.models import (
    ZERO_ADDRESS,
    PriceQuote,
    QuoteMethod,
    ReservePair,
    ReservePricing,
    ReservesQuote,
    Token,
)
from pair_quoter.engine.pricing import from_wei
from pair_quoter.engine.sources import PoolConnector, RouterQuoteSource, read


def orient_reserves(
    reserves: ReservePair,
    pool_tokens: Tuple[str, str],
    token_in: str,
    token_out: str,
) -> Tuple[int, int]:
    """
    Map pool slots (token0, token1) onto (reserve_in, reserve_out).
    Addresses compare case-insensitively (checksummed vs lowercase).
    """
    token0, token1 = (t.lower() for t in pool_tokens)
    t_in, t_out = token_in.lower(), token_out.lower()
    if (token0, token1) == (t_in, t_out):
        return reserves.reserve0, reserves.reserve1
    if (token0, token1) == (t_out, t_in):
        return reserves.reserve1, reserves.reserve0
    raise QuoteUnavailableError(
        f"pool tokens {pool_tokens[0]}/{pool_tokens[1]} do not match {token_in}/{token_out}"
    )


def spot_price(reserve_in: int, reserve_out: int, decimals_in: int, decimals_out: int) -> Decimal:
    if reserve_in == 0 or reserve_out == 0:
        raise DegeneratePoolError(
            f"pool reserves must be positive (reserve_in={reserve_in}, reserve_out={reserve_out})"
        )
    return from_wei(reserve_out, decimals_out) / from_wei(reserve_in, decimals_in)


def slippage_pct(spot: Decimal, effective: Decimal) -> Decimal:
    """(spot - effective) / spot * 100."""
    return (spot - effective) / spot * Decimal(100)


def price_from_reserves(
    reserve_in: int,
    reserve_out: int,
    decimals_in: int,
    decimals_out: int,
    fee_bps: int = DEFAULT_FEE_BPS,
    amount_in: Optional[int] = None,
) -> ReservePricing:
    """
    Spot/effective/slippage for an oriented reserve pair.

    The effective price always uses a one-unit probe (10**decimals_in), so
    spot, effective and slippage do not depend on amount_in; amount_in only
    drives amount_out (defaults to the probe).
    """
    spot = spot_price(reserve_in, reserve_out, decimals_in, decimals_out)

    probe = 10 ** decimals_in
    probe_out = get_amount_out(probe, reserve_in, reserve_out, fee_bps)
    effective = from_wei(probe_out, decimals_out)

    if amount_in is None:
        amount_in, amount_out = probe, probe_out
    else:
        amount_out = get_amount_out(amount_in, reserve_in, reserve_out, fee_bps)

    slip = slippage_pct(spot, effective)
    return ReservePricing(
        spot=PriceQuote(method=QuoteMethod.SPOT, price=spot),
        effective=PriceQuote(method=QuoteMethod.EFFECTIVE, price=effective, slippage_pct=slip),
        amount_in=amount_in,
        amount_out=amount_out,
        reserve_in_units=from_wei(reserve_in, decimals_in),
        reserve_out_units=from_wei(reserve_out, decimals_out),
    )


class ReservesPriceEngine:
    def __init__(
        self,
        router: RouterQuoteSource,
        connect_pools: PoolConnector,
        fee_bps: int = DEFAULT_FEE_BPS,
    ):
        self.router = router
        self.connect_pools = connect_pools
        self.fee_bps = fee_bps

    def quote(self, token_in: Token, token_out: Token, amount_in: Optional[int] = None) -> ReservesQuote:
        """
        One reserves-based quote. All-or-nothing: the first failing read or
        precondition aborts the remaining steps.
        """
        factory = read(self.router.get_factory_address)
        pools = read(self.connect_pools, factory)
        logger.debug(f"factory {factory} for {token_in.symbol}/{token_out.symbol}")

        pool = read(pools.get_pair_address, token_in.address, token_out.address)
        if not pool or pool.lower() == ZERO_ADDRESS:
            raise QuoteUnavailableError(
                f"no {token_in.symbol}/{token_out.symbol} pool on factory {factory}"
            )

        pool_tokens = read(pools.get_pair_tokens, pool)
        reserves = read(pools.get_reserves, pool)
        reserve_in, reserve_out = orient_reserves(reserves, pool_tokens, token_in.address, token_out.address)

        pricing = price_from_reserves(
            reserve_in,
            reserve_out,
            token_in.decimals,
            token_out.decimals,
            fee_bps=self.fee_bps,
            amount_in=amount_in,
        )

        fee_to = read(pools.get_fee_recipient_address)
        fee_to_setter = read(pools.get_fee_recipient_setter_address)

        return ReservesQuote(
            token_in=token_in,
            token_out=token_out,
            factory=factory,
            pool=pool,
            fee_bps=self.fee_bps,
            reserves=reserves,
            pricing=pricing,
            fee_to=fee_to,
            fee_to_setter=fee_to_setter,
        )


__all__ = [
    "orient_reserves",
    "spot_price",
    "slippage_pct",
    "price_from_reserves",
    "ReservesPriceEngine",
]

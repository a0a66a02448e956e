# pair_quoter/quote_once.py
"""
Quote every configured pair twice (router and pair reserves) and cross-check.

    pair-quoter --tokens configs/tokens.base.yml --pairs configs/pairs.base.yml
"""
from __future__ import annotations
import argparse
import os
import sys
from decimal import Decimal
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from pair_quoter.config import Config, load_config
from pair_quoter.engine.cross_check import cross_check
from pair_quoter.engine.errors import QuoteError
from pair_quoter.engine.models import Token
from pair_quoter.engine.pricing import to_wei
from pair_quoter.engine.reserves_price import ReservesPriceEngine
from pair_quoter.engine.router_quote import AmountsOutCalculator
from pair_quoter.engine.sources import PoolConnector, RouterQuoteSource
from pair_quoter.ingestors.uniswapv2 import UniswapV2Pools, UniswapV2Router, connect
from pair_quoter.reporting.console import PAIR_LABEL, ROUTER_LABEL, QuoteReporter

METHODS = ("router", "pair", "both")


def quote_pair(
    *,
    router_calc: AmountsOutCalculator,
    reserves_engine: ReservesPriceEngine,
    token_in: Token,
    token_out: Token,
    size_units: Decimal,
    method: str,
    tolerance_pct: Decimal,
) -> bool:
    """
    Run the selected methods for one pair/size. Each method is attempted on
    its own; returns False when any of them failed. A failure is reported and
    no price is substituted.
    """
    amount_in = to_wei(size_units, token_in.decimals)
    pair_name = f"{token_in.symbol}/{token_out.symbol} size {size_units}"

    rq = None
    pq = None
    ok = True
    if method in ("router", "both"):
        try:
            rq = router_calc.quote(amount_in, [token_in, token_out])
            QuoteReporter(ROUTER_LABEL).router_quote(rq)
        except QuoteError as e:
            logger.error(f"{ROUTER_LABEL}: {pair_name}: quote unavailable: {e}")
            ok = False
    if method in ("pair", "both"):
        try:
            pq = reserves_engine.quote(token_in, token_out, amount_in=amount_in)
            QuoteReporter(PAIR_LABEL).reserves_quote(pq)
        except QuoteError as e:
            logger.error(f"{PAIR_LABEL}: {pair_name}: quote unavailable: {e}")
            ok = False

    if rq is not None and pq is not None:
        QuoteReporter("Cross-check").cross_check(cross_check(rq, pq, tolerance_pct))
    return ok


def run(
    cfg: Config,
    router: RouterQuoteSource,
    connect_pools: PoolConnector,
    method: str = "both",
) -> int:
    router_calc = AmountsOutCalculator(router)
    reserves_engine = ReservesPriceEngine(router, connect_pools, fee_bps=cfg.pairs.fee_bps)

    failures = 0
    for base_sym, quote_sym in cfg.pairs.pairs:
        token_in = cfg.tokens.token(base_sym)
        token_out = cfg.tokens.token(quote_sym)
        for size in cfg.pairs.sizes:
            ok = quote_pair(
                router_calc=router_calc,
                reserves_engine=reserves_engine,
                token_in=token_in,
                token_out=token_out,
                size_units=Decimal(size),
                method=method,
                tolerance_pct=cfg.pairs.cross_check_tolerance_pct,
            )
            if not ok:
                failures += 1
    return 1 if failures else 0


def main(argv: Optional[list] = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Uniswap V2 pair price checker")
    parser.add_argument("--tokens", default="configs/tokens.base.yml")
    parser.add_argument("--pairs", default="configs/pairs.base.yml")
    parser.add_argument("--method", choices=METHODS, default="both")
    parser.add_argument("--rpc-url", default=None)
    args = parser.parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=os.getenv("LOG_LEVEL", "INFO"))

    cfg = load_config(args.tokens, args.pairs)

    web3 = connect(args.rpc_url)
    router = UniswapV2Router(web3, os.getenv("UNIV2_ROUTER") or cfg.tokens.router)
    logger.info(f"Quoting {len(cfg.pairs.pairs)} pair(s) via router {router.router_addr} (chain {cfg.tokens.chain_id})")
    return run(cfg, router, lambda factory: UniswapV2Pools(web3, factory), method=args.method)


if __name__ == "__main__":
    sys.exit(main())

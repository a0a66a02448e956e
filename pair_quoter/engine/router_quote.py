# pair_quoter/engine/router_quote.py
from __future__ import annotations
import operator
from typing import List, Sequence

from loguru import logger

from pair_quoter.engine.errors import InvalidPathError, QuoteUnavailableError
from pair_quoter.engine.models import PriceQuote, QuoteMethod, RouterQuote, Token
from pair_quoter.engine.pricing import from_wei, unit_price
from pair_quoter.engine.sources import RouterQuoteSource, read


class AmountsOutCalculator:
    """
    Router-quoted price. The curve math happens in the router contract;
    this side only validates the path and rescales the last hop.
    """

    def __init__(self, router: RouterQuoteSource):
        self.router = router

    def get_amounts_out(self, amount_in: int, path: Sequence[str]) -> List[int]:
        if len(path) < 2:
            raise InvalidPathError(f"swap path needs at least 2 tokens, got {len(path)}")
        amount_in = operator.index(amount_in)
        if amount_in <= 0:
            # UniswapV2Library reverts with INSUFFICIENT_INPUT_AMOUNT
            raise QuoteUnavailableError(f"router cannot quote a zero input amount (amount_in={amount_in})")

        amounts = [int(a) for a in read(self.router.get_amounts_out, amount_in, list(path))]
        if len(amounts) != len(path) or amounts[0] != amount_in:
            raise QuoteUnavailableError(
                f"router returned {len(amounts)} amounts for a {len(path)}-token path "
                f"(first={amounts[0] if amounts else None}, expected {amount_in})"
            )
        logger.debug(f"getAmountsOut({amount_in}, {list(path)}) -> {amounts}")
        return amounts

    def quote(self, amount_in: int, path: Sequence[Token]) -> RouterQuote:
        if len(path) < 2:
            raise InvalidPathError(f"swap path needs at least 2 tokens, got {len(path)}")
        token_in, token_out = path[0], path[-1]

        amounts = self.get_amounts_out(amount_in, [t.address for t in path])
        amount_out = amounts[-1]
        price = unit_price(amount_out, token_out.decimals, amount_in, token_in.decimals)

        return RouterQuote(
            token_in=token_in,
            token_out=token_out,
            amounts=amounts,
            amount_in=amount_in,
            amount_out=amount_out,
            amount_out_units=from_wei(amount_out, token_out.decimals),
            quote=PriceQuote(method=QuoteMethod.ROUTER, price=price),
        )


__all__ = ["AmountsOutCalculator"]

# pair_quoter/engine/cross_check.py
from __future__ import annotations
from decimal import Decimal

from pair_quoter.engine.models import CrossCheck, ReservesQuote, RouterQuote
from pair_quoter.engine.pricing import unit_price

DEFAULT_TOLERANCE_PCT = Decimal("0.5")


def cross_check(
    router_quote: RouterQuote,
    reserves_quote: ReservesQuote,
    tolerance_pct: Decimal = DEFAULT_TOLERANCE_PCT,
) -> CrossCheck:
    """
    Compare the router's per-unit price with the reserves engine's per-unit
    price for the same input size. A gap beyond tolerance points at stale
    reserves or a mis-wired router/factory address, not at rounding.
    """
    if router_quote.amount_in != reserves_quote.pricing.amount_in:
        raise ValueError(
            f"quotes are for different sizes ({router_quote.amount_in} vs {reserves_quote.pricing.amount_in})"
        )
    pricing = reserves_quote.pricing
    reserves_price = unit_price(
        pricing.amount_out,
        reserves_quote.token_out.decimals,
        pricing.amount_in,
        reserves_quote.token_in.decimals,
    )
    router_price = router_quote.quote.price
    tolerance_pct = Decimal(str(tolerance_pct))

    if reserves_price == 0:
        divergence = Decimal(0) if router_price == 0 else Decimal(100)
    else:
        divergence = abs(router_price - reserves_price) / reserves_price * Decimal(100)

    return CrossCheck(
        router_price=router_price,
        reserves_price=reserves_price,
        divergence_pct=divergence,
        tolerance_pct=tolerance_pct,
        within_tolerance=divergence <= tolerance_pct,
    )


__all__ = ["DEFAULT_TOLERANCE_PCT", "cross_check"]

# pair_quoter/reporting/console.py
from __future__ import annotations

from loguru import logger

from pair_quoter.engine.models import CrossCheck, ReservesQuote, RouterQuote
from pair_quoter.engine.pricing import from_wei

ROUTER_LABEL = "Method 1 (Router)"
PAIR_LABEL = "Method 2 (Pair)"


class QuoteReporter:
    """
    Human-readable quote lines, each prefixed with the method label.
    The sink is injected (loguru logger by default); nothing global is touched.
    """

    def __init__(self, label: str, sink=logger):
        self.label = label
        self._log = sink.bind(method=label)

    def line(self, msg: str):
        self._log.info(f"{self.label}: {msg}")

    def router_quote(self, q: RouterQuote):
        sym_in, sym_out = q.token_in.symbol, q.token_out.symbol
        self.line(f"1 {sym_in} = {q.quote.price:.6f} {sym_out}")
        if q.amount_in != 10 ** q.token_in.decimals:
            size = from_wei(q.amount_in, q.token_in.decimals)
            self.line(f"{size} {sym_in} -> {q.amount_out_units:.6f} {sym_out}")
        if len(q.amounts) > 2:
            self.line(f"hop amounts: {q.amounts}")

    def reserves_quote(self, q: ReservesQuote):
        p = q.pricing
        sym_in, sym_out = q.token_in.symbol, q.token_out.symbol
        self.line(f"1 {sym_in} = {p.spot.price:.6f} {sym_out} (without trading fees and slippage)")
        self.line(f"1 {sym_in} = {p.effective.price:.6f} {sym_out} (with trading fees and slippage)")
        self.line(f"Estimated slippage rate: {p.effective.slippage_pct:.2f}%")
        self.line(f"{sym_in} reserve: {p.reserve_in_units:.6f}")
        self.line(f"{sym_out} reserve: {p.reserve_out_units:.6f}")
        self.line(f"Last update time: {q.block_timestamp_last}")
        self.line(f"FeeTo address: {q.fee_to}")
        self.line(f"FeeToSetter address: {q.fee_to_setter}")

    def cross_check(self, c: CrossCheck):
        msg = (
            f"router {c.router_price:.6f} vs reserves {c.reserves_price:.6f}, "
            f"divergence {c.divergence_pct:.4f}% (tolerance {c.tolerance_pct}%)"
        )
        if c.within_tolerance:
            self.line(f"Cross-check OK: {msg}")
        else:
            self._log.warning(f"{self.label}: Cross-check FAILED: {msg}")


__all__ = ["ROUTER_LABEL", "PAIR_LABEL", "QuoteReporter"]

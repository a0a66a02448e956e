# pair_quoter/engine/pricing.py
from __future__ import annotations
import operator
from decimal import Decimal, ROUND_DOWN, getcontext

from pair_quoter.engine.errors import QuoteUnavailableError

# high precision for token math: a uint112 reserve has at most 34 digits
getcontext().prec = 60

MAX_DECIMALS = 77


def _dec(x) -> Decimal:
    return x if isinstance(x, Decimal) else Decimal(str(x))


def _scale(decimals: int) -> Decimal:
    decimals = operator.index(decimals)
    if not 0 <= decimals <= MAX_DECIMALS:
        raise ValueError(f"token decimals must be in [0, {MAX_DECIMALS}], got {decimals}")
    return Decimal(10) ** decimals


def to_wei(amount, decimals: int) -> int:
    """
    Convert token units -> integer base units (wei-style).
    Rounds DOWN so a configured size never overstates what is sold.
    """
    amt = _dec(amount)
    if amt < 0:
        raise ValueError(f"amount must be >= 0, got {amt}")
    return int((amt * _scale(decimals)).to_integral_value(rounding=ROUND_DOWN))


def from_wei(amount_wei: int, decimals: int) -> Decimal:
    """
    Convert integer base units (wei-style) -> token units (Decimal).
    Exact: no float conversion happens on the way.
    """
    return Decimal(operator.index(amount_wei)) / _scale(decimals)


def unit_price(amount_out_wei: int, decimals_out: int, amount_in_wei: int, decimals_in: int) -> Decimal:
    """Output token units received per one whole input token."""
    amount_in = from_wei(amount_in_wei, decimals_in)
    if amount_in == 0:
        raise QuoteUnavailableError("cannot derive a unit price from a zero input amount")
    return from_wei(amount_out_wei, decimals_out) / amount_in


__all__ = ["MAX_DECIMALS", "to_wei", "from_wei", "unit_price"]

# pair_quoter/engine/amm.py
from __future__ import annotations
import operator

from pair_quoter.engine.errors import DegeneratePoolError

# fee is taken from the input side, expressed over FEE_DENOMINATOR
FEE_DENOMINATOR = 10_000
DEFAULT_FEE_BPS = 30  # 0.3%, i.e. the 997/1000 multiplier


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int, fee_bps: int = DEFAULT_FEE_BPS) -> int:
    """
    Constant-product output for an exact input (UniswapV2Library.getAmountOut).

        amount_in_with_fee = amount_in * (FEE_DENOMINATOR - fee_bps)
        amount_out = amount_in_with_fee * reserve_out
                     // (reserve_in * FEE_DENOMINATOR + amount_in_with_fee)

    All values are integer smallest units. Multiplications happen before the
    single floor division, on Python ints, so uint112 reserves never overflow.
    """
    # operator.index refuses floats/Decimals instead of truncating them
    amount_in = operator.index(amount_in)
    reserve_in = operator.index(reserve_in)
    reserve_out = operator.index(reserve_out)
    fee_bps = operator.index(fee_bps)

    if amount_in < 0:
        raise ValueError(f"amount_in must be >= 0, got {amount_in}")
    if not 0 <= fee_bps < FEE_DENOMINATOR:
        raise ValueError(f"fee_bps must be in [0, {FEE_DENOMINATOR}), got {fee_bps}")
    if reserve_in <= 0 or reserve_out <= 0:
        raise DegeneratePoolError(
            f"pool reserves must be positive (reserve_in={reserve_in}, reserve_out={reserve_out})"
        )

    amount_in_with_fee = amount_in * (FEE_DENOMINATOR - fee_bps)
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * FEE_DENOMINATOR + amount_in_with_fee
    return numerator // denominator


__all__ = ["FEE_DENOMINATOR", "DEFAULT_FEE_BPS", "get_amount_out"]

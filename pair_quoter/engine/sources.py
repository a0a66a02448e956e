# pair_quoter/engine/sources.py
"""
Narrow read-only views of the remote router/factory/pair contracts.

Implementations raise RemoteCallError for any failure; they own timeouts and
any retry policy. See pair_quoter/ingestors/uniswapv2.py for the web3 ones.
"""
from __future__ import annotations
from typing import Callable, List, Protocol, Sequence, Tuple

from pair_quoter.engine.errors import QuoteUnavailableError, RemoteCallError
from pair_quoter.engine.models import ReservePair


class RouterQuoteSource(Protocol):
    def get_amounts_out(self, amount_in: int, path: Sequence[str]) -> List[int]: ...

    def get_factory_address(self) -> str: ...


class PoolStateSource(Protocol):
    def get_pair_address(self, token_a: str, token_b: str) -> str: ...

    def get_pair_tokens(self, pool: str) -> Tuple[str, str]: ...

    def get_reserves(self, pool: str) -> ReservePair: ...

    def get_fee_recipient_address(self) -> str: ...

    def get_fee_recipient_setter_address(self) -> str: ...


# factory address -> pool state source bound to that factory
PoolConnector = Callable[[str], PoolStateSource]


def read(fn, *args):
    """Run one collaborator read; a remote failure ends the quote."""
    try:
        return fn(*args)
    except RemoteCallError as e:
        raise QuoteUnavailableError(str(e)) from e


__all__ = ["RouterQuoteSource", "PoolStateSource", "PoolConnector", "read"]

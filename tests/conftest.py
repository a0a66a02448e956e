"""Shared test doubles for the router and pool collaborators."""

from typing import Dict, List, Sequence, Tuple

import pytest
from loguru import logger

from pair_quoter.engine.amm import get_amount_out
from pair_quoter.engine.errors import RemoteCallError
from pair_quoter.engine.models import ZERO_ADDRESS, ReservePair, Token

WETH = Token(symbol="WETH", address="0x4200000000000000000000000000000000000006", decimals=18)
USDC = Token(symbol="USDC", address="0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913", decimals=6)
DAI = Token(symbol="DAI", address="0x50c5725949A6F0c72E6C4a641F24049A917DB0Cb", decimals=18)

FACTORY = "0x8909000000000000000000000000000000000001"
POOL = "0x8800000000000000000000000000000000000002"
FEE_TO = "0x0000000000000000000000000000000000000000"
FEE_TO_SETTER = "0x1111111111111111111111111111111111111111"

# 1000 WETH / 2,000,000 USDC
WETH_RESERVE = 1_000 * 10**18
USDC_RESERVE = 2_000_000 * 10**6
TIMESTAMP = 1_717_000_000


class FakePools:
    """In-memory factory + pairs. Pools are keyed by (token0, token1) in slot order."""

    def __init__(self, pools: Dict[Tuple[str, str], Tuple[str, ReservePair]] = None, fail_on: str = None):
        self.pools = pools or {}
        self.fail_on = fail_on
        self.calls: List[str] = []

    def _record(self, name: str):
        self.calls.append(name)
        if self.fail_on == name:
            raise RemoteCallError(name, ConnectionError("connection reset"))

    def _find(self, pool: str):
        for tokens, (addr, reserves) in self.pools.items():
            if addr == pool:
                return tokens, reserves
        raise KeyError(pool)

    def get_pair_address(self, token_a: str, token_b: str) -> str:
        self._record("getPair")
        for (t0, t1), (addr, _) in self.pools.items():
            if {t0.lower(), t1.lower()} == {token_a.lower(), token_b.lower()}:
                return addr
        return ZERO_ADDRESS

    def get_pair_tokens(self, pool: str) -> Tuple[str, str]:
        self._record("tokens")
        return self._find(pool)[0]

    def get_reserves(self, pool: str) -> ReservePair:
        self._record("getReserves")
        return self._find(pool)[1]

    def get_fee_recipient_address(self) -> str:
        self._record("feeTo")
        return FEE_TO

    def get_fee_recipient_setter_address(self) -> str:
        self._record("feeToSetter")
        return FEE_TO_SETTER


class FakeRouter:
    """Router double that prices each hop with the V2 formula against FakePools."""

    def __init__(self, pools: FakePools, factory: str = FACTORY, fail_on: str = None, fee_bps: int = 30):
        self.pools = pools
        self.factory = factory
        self.fail_on = fail_on
        self.fee_bps = fee_bps
        self.calls: List[str] = []

    def _record(self, name: str):
        self.calls.append(name)
        if self.fail_on == name:
            raise RemoteCallError(name, TimeoutError("read timed out"))

    def get_factory_address(self) -> str:
        self._record("factory")
        return self.factory

    def get_amounts_out(self, amount_in: int, path: Sequence[str]) -> List[int]:
        self._record("getAmountsOut")
        amounts = [amount_in]
        for a, b in zip(path, path[1:]):
            for (t0, t1), (_, r) in self.pools.pools.items():
                if (t0.lower(), t1.lower()) == (a.lower(), b.lower()):
                    reserve_in, reserve_out = r.reserve0, r.reserve1
                    break
                if (t0.lower(), t1.lower()) == (b.lower(), a.lower()):
                    reserve_in, reserve_out = r.reserve1, r.reserve0
                    break
            else:
                raise RemoteCallError("getAmountsOut", ValueError("execution reverted"))
            amounts.append(get_amount_out(amounts[-1], reserve_in, reserve_out, self.fee_bps))
        return amounts


def weth_usdc_pools(weth_first: bool = True) -> FakePools:
    if weth_first:
        key = (WETH.address, USDC.address)
        reserves = ReservePair(reserve0=WETH_RESERVE, reserve1=USDC_RESERVE, block_timestamp_last=TIMESTAMP)
    else:
        key = (USDC.address, WETH.address)
        reserves = ReservePair(reserve0=USDC_RESERVE, reserve1=WETH_RESERVE, block_timestamp_last=TIMESTAMP)
    return FakePools({key: (POOL, reserves)})


@pytest.fixture
def pools() -> FakePools:
    return weth_usdc_pools()


@pytest.fixture
def router(pools) -> FakeRouter:
    return FakeRouter(pools)


@pytest.fixture
def log_messages():
    """Capture loguru output as plain strings."""
    messages: List[str] = []
    handler_id = logger.add(lambda m: messages.append(str(m).rstrip("\n")), format="{level}|{message}", level="INFO")
    yield messages
    logger.remove(handler_id)

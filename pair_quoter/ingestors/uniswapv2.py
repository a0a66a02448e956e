# pair_quoter/ingestors/uniswapv2.py
from __future__ import annotations
import os
from typing import List, Optional, Sequence, Tuple

from loguru import logger
from web3 import Web3

from pair_quoter.engine.errors import RemoteCallError
from pair_quoter.engine.models import ReservePair

# Base mainnet defaults; override in .env
DEFAULT_RPC_URL = "https://mainnet.base.org"
DEFAULT_ROUTER = "0x4752ba5dbc23f44d87826276bf6fd6b1c372ad24"
DEFAULT_TIMEOUT_S = 10.0

ROUTER_ABI = [
    {
        "name": "getAmountsOut", "type": "function", "stateMutability": "view",
        "inputs": [
            {"name": "amountIn", "type": "uint256"},
            {"name": "path", "type": "address[]"},
        ],
        "outputs": [{"name": "amounts", "type": "uint256[]"}],
    },
    {
        "name": "factory", "type": "function", "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}],
    },
]

FACTORY_ABI = [
    {
        "name": "getPair", "type": "function", "stateMutability": "view",
        "inputs": [
            {"name": "tokenA", "type": "address"},
            {"name": "tokenB", "type": "address"},
        ],
        "outputs": [{"name": "pair", "type": "address"}],
    },
    {
        "name": "feeTo", "type": "function", "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}],
    },
    {
        "name": "feeToSetter", "type": "function", "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}],
    },
]

PAIR_ABI = [
    {
        "name": "getReserves", "type": "function", "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {"name": "reserve0", "type": "uint112"},
            {"name": "reserve1", "type": "uint112"},
            {"name": "blockTimestampLast", "type": "uint32"},
        ],
    },
    {
        "name": "token0", "type": "function", "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}],
    },
    {
        "name": "token1", "type": "function", "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}],
    },
]


def connect(rpc_url: Optional[str] = None, timeout_s: Optional[float] = None) -> Web3:
    """HTTP connection to the node; the request timeout is the only deadline applied."""
    url = rpc_url or os.getenv("RPC_URL") or DEFAULT_RPC_URL
    timeout = timeout_s if timeout_s is not None else float(os.getenv("RPC_TIMEOUT_S", DEFAULT_TIMEOUT_S))
    return Web3(Web3.HTTPProvider(url, request_kwargs={"timeout": timeout}))


def _call(name: str, fn):
    """Run one contract read; any failure becomes RemoteCallError."""
    try:
        result = fn()
    except Exception as e:
        raise RemoteCallError(name, e) from e
    logger.debug(f"{name} -> {result}")
    return result


class UniswapV2Router:
    def __init__(self, web3: Web3, router: Optional[str] = None):
        self.web3 = web3
        self.router_addr = Web3.to_checksum_address(router or os.getenv("UNIV2_ROUTER") or DEFAULT_ROUTER)
        self.router = self.web3.eth.contract(address=self.router_addr, abi=ROUTER_ABI)

    def get_amounts_out(self, amount_in: int, path: Sequence[str]) -> List[int]:
        route = [Web3.to_checksum_address(a) for a in path]
        amounts = _call(
            "Router.getAmountsOut",
            lambda: self.router.functions.getAmountsOut(int(amount_in), route).call(),
        )
        return [int(a) for a in amounts]

    def get_factory_address(self) -> str:
        return _call("Router.factory", lambda: self.router.functions.factory().call())


class UniswapV2Pools:
    """Factory + pair reads for one factory deployment."""

    def __init__(self, web3: Web3, factory: str):
        self.web3 = web3
        # the factory address comes from the router, so a malformed one is a remote fault
        self.factory_addr = _call("Factory.address", lambda: Web3.to_checksum_address(factory))
        self.factory = self.web3.eth.contract(address=self.factory_addr, abi=FACTORY_ABI)

    def _pair(self, pool: str):
        return self.web3.eth.contract(address=Web3.to_checksum_address(pool), abi=PAIR_ABI)

    def get_pair_address(self, token_a: str, token_b: str) -> str:
        t_a = Web3.to_checksum_address(token_a)
        t_b = Web3.to_checksum_address(token_b)
        return _call("Factory.getPair", lambda: self.factory.functions.getPair(t_a, t_b).call())

    def get_pair_tokens(self, pool: str) -> Tuple[str, str]:
        pair = self._pair(pool)
        token0 = _call("Pair.token0", lambda: pair.functions.token0().call())
        token1 = _call("Pair.token1", lambda: pair.functions.token1().call())
        return token0, token1

    def get_reserves(self, pool: str) -> ReservePair:
        pair = self._pair(pool)
        reserve0, reserve1, ts = _call("Pair.getReserves", lambda: pair.functions.getReserves().call())
        return ReservePair(reserve0=int(reserve0), reserve1=int(reserve1), block_timestamp_last=int(ts))

    def get_fee_recipient_address(self) -> str:
        return _call("Factory.feeTo", lambda: self.factory.functions.feeTo().call())

    def get_fee_recipient_setter_address(self) -> str:
        return _call("Factory.feeToSetter", lambda: self.factory.functions.feeToSetter().call())


__all__ = ["connect", "UniswapV2Router", "UniswapV2Pools", "ROUTER_ABI", "FACTORY_ABI", "PAIR_ABI"]

"""AMM router quote clients.

Queries a UniswapV2-style router (PancakeSwap V2 on BSC) for the output
of a swap along a token path.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Protocol

import structlog

from tradecore.constants import (
    AMM_QUERY_TIMEOUT_SECONDS,
    CHAIN_TO_LEDGER_DIGITS,
    MIN_AMM_DIGITS,
    PANCAKE_ROUTER_V2,
)
from tradecore.errors import PriceQueryFailed, PriceTooLow
from tradecore.models.types import normalize_address

logger = structlog.get_logger()


class AmmQuoter(Protocol):
    """Protocol for AMM quote sources.

    This allows swapping between the RPC-backed router client and a mock
    quoter for testing.
    """

    async def get_amount_out(self, amount_in: int, path: Sequence[str]) -> str:
        """Get the output of the final hop for an exact input.

        Args:
            amount_in: Input amount at chain scale
            path: Ordered token addresses, first is the input token

        Returns:
            Output amount as a decimal integer string

        Raises:
            PriceQueryFailed: If the router cannot be queried
        """
        ...


def ledger_amount_from_chain(raw: str) -> int:
    """Rescale a chain-scale digit string to ledger scale.

    Drops the last 8 digits instead of rounding, so
    "123456789012345678" becomes 1234567890.

    Raises:
        PriceTooLow: If the string has fewer than 10 digits or the
            truncated value is zero
    """
    if len(raw) < MIN_AMM_DIGITS:
        raise PriceTooLow(f"amm output too short: {raw}")
    value = int(raw[:-CHAIN_TO_LEDGER_DIGITS])
    if value == 0:
        raise PriceTooLow(f"amm output truncates to zero: {raw}")
    return value


class MockAmmQuoter:
    """Mock quoter for testing without RPC calls.

    Returns a fixed result (or raises a configured error) and tracks calls
    for assertions.
    """

    def __init__(
        self,
        amount_out: str | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        """Initialize mock quoter.

        Args:
            amount_out: Output digit string to return for any quote
            error: If set, raised instead of returning a result
            delay: Seconds to sleep before answering
        """
        self.amount_out = amount_out
        self.error = error
        self.delay = delay
        self.calls: list[tuple[int, tuple[str, ...]]] = []

    async def get_amount_out(self, amount_in: int, path: Sequence[str]) -> str:
        self.calls.append((amount_in, tuple(path)))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.amount_out is None:
            raise PriceQueryFailed("no quote configured")
        return self.amount_out


# UniswapV2Router02 ABI - minimal, just the function we need
ROUTER_V2_ABI = [
    {
        "name": "getAmountsOut",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "amountIn", "type": "uint256"},
            {"name": "path", "type": "address[]"},
        ],
        "outputs": [{"name": "amounts", "type": "uint256[]"}],
    },
]


class Web3RouterQuoter:
    """Real quoter that calls ``getAmountsOut`` on the router via RPC.

    Each call is bounded by ``timeout`` and is cancelled together with the
    awaiting task.
    """

    def __init__(
        self,
        rpc_url: str,
        router_address: str = PANCAKE_ROUTER_V2,
        timeout: float = AMM_QUERY_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize quoter with an async web3 provider.

        Args:
            rpc_url: HTTP JSON-RPC URL (e.g., "https://bsc-dataseed.binance.org/")
            router_address: Router contract address
            timeout: Upper bound for one query in seconds
        """
        from web3 import AsyncWeb3

        self.timeout = timeout
        self.w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        self.router = self.w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(router_address),
            abi=ROUTER_V2_ABI,
        )

    async def get_amount_out(self, amount_in: int, path: Sequence[str]) -> str:
        """Get the final-hop output amount via an eth_call."""
        from web3 import AsyncWeb3

        checksum_path = [AsyncWeb3.to_checksum_address(normalize_address(t)) for t in path]
        try:
            amounts = await asyncio.wait_for(
                self.router.functions.getAmountsOut(amount_in, checksum_path).call(),
                timeout=self.timeout,
            )
        except TimeoutError as e:
            logger.warning(
                "amm_quote_timeout",
                amount_in=amount_in,
                path=checksum_path,
                timeout=self.timeout,
            )
            raise PriceQueryFailed("amm quote timed out") from e
        except Exception as e:
            logger.warning(
                "amm_quote_failed",
                amount_in=amount_in,
                path=checksum_path,
                error=str(e),
            )
            raise PriceQueryFailed("amm quote failed") from e

        if not amounts:
            raise PriceQueryFailed("amm quote returned no amounts")

        # Result is one amount per path element; the last is the final hop
        return str(int(amounts[-1]))


__all__ = [
    "AmmQuoter",
    "MockAmmQuoter",
    "Web3RouterQuoter",
    "ROUTER_V2_ABI",
    "ledger_amount_from_chain",
]

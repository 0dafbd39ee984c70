"""AMM quote sources."""

from tradecore.amm.router import (
    ROUTER_V2_ABI,
    AmmQuoter,
    MockAmmQuoter,
    Web3RouterQuoter,
    ledger_amount_from_chain,
)

__all__ = [
    "AmmQuoter",
    "MockAmmQuoter",
    "Web3RouterQuoter",
    "ROUTER_V2_ABI",
    "ledger_amount_from_chain",
]

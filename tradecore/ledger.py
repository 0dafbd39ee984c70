"""Ledger collaborator interface.

The ledger owns balances and executes a priced trade atomically. This
package only hands it validated amounts and relays its result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import structlog

from tradecore.models.trade import SettlementResult

if TYPE_CHECKING:
    from tradecore.auth import AuthenticatedIdentity
    from tradecore.models.trade import TradeRequest

logger = structlog.get_logger()


class Ledger(Protocol):
    """Protocol for ledger implementations."""

    async def execute_trade(
        self,
        identity: AuthenticatedIdentity,
        request: TradeRequest,
        amount_a: int,
        amount_b: int,
    ) -> SettlementResult:
        """Atomically debit/credit the user for a priced trade.

        Args:
            identity: User the trade is executed for
            request: Original request body
            amount_a: Instrument A amount at ledger scale
            amount_b: Instrument B amount at ledger scale

        Returns:
            The ledger's settlement result
        """
        ...


@dataclass(frozen=True)
class ExecutedTrade:
    """A trade recorded by InMemoryLedger."""

    trade_id: int
    user_id: int
    amount: str
    amount_a: int
    amount_b: int


class InMemoryLedger:
    """Ledger for local runs and tests.

    Records executed trades and assigns sequential ids. Keeps no balances.
    """

    def __init__(self) -> None:
        self.trades: list[ExecutedTrade] = []

    async def execute_trade(
        self,
        identity: AuthenticatedIdentity,
        request: TradeRequest,
        amount_a: int,
        amount_b: int,
    ) -> SettlementResult:
        trade = ExecutedTrade(
            trade_id=len(self.trades) + 1,
            user_id=identity.user_id,
            amount=request.send_body.amount,
            amount_a=amount_a,
            amount_b=amount_b,
        )
        self.trades.append(trade)

        logger.info(
            "ledger_trade_recorded",
            trade_id=trade.trade_id,
            user_id=trade.user_id,
            amount_a=amount_a,
            amount_b=amount_b,
        )
        return SettlementResult(status="ok", trade_id=trade.trade_id)


__all__ = ["Ledger", "ExecutedTrade", "InMemoryLedger"]

"""Settlement dispatch.

Re-prices the request at execution time and hands the amounts to the
ledger. Quotes from an earlier preview are never trusted.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from tradecore.amounts import validate_amount
from tradecore.auth import AuthenticatedIdentity, extract_identity
from tradecore.errors import InvalidAmount, LedgerError, TradeError
from tradecore.ledger import Ledger
from tradecore.models.trade import SettlementResult, TradeRequest
from tradecore.pricing.reconcile import Quote
from tradecore.service import QuoteService

logger = structlog.get_logger()


class SettlementDispatcher:
    """Validates, prices and forwards authenticated trades to the ledger.

    Args:
        quote_service: Prices the request amount
        ledger: Executes the priced trade
    """

    def __init__(self, quote_service: QuoteService, ledger: Ledger) -> None:
        self.quote_service = quote_service
        self.ledger = ledger

    async def settle(
        self,
        claims: Mapping[str, Any] | None,
        request: TradeRequest,
    ) -> SettlementResult:
        """Settle a trade for the user named by ``claims``.

        Unlike the preview path, an amount that fails the minimum check
        returns a ``status="fail"`` result instead of raising.

        Raises:
            Unauthorized: Before any pricing work, if claims carry no user id
            NotAGranularityMultiple, PriceQueryFailed, PriceTooLow, InvalidPrice
            LedgerError: If the ledger fails
        """
        identity = extract_identity(claims)

        try:
            amount = validate_amount(request.send_body.amount)
        except InvalidAmount as e:
            logger.info(
                "settlement_soft_fail",
                user_id=identity.user_id,
                amount=request.send_body.amount,
                reason=e.message,
            )
            return SettlementResult.fail()

        quote = await self.quote_service.price(amount)
        return await self.dispatch(identity, request, quote)

    async def dispatch(
        self,
        identity: AuthenticatedIdentity,
        request: TradeRequest,
        quote: Quote,
    ) -> SettlementResult:
        """Forward a priced trade to the ledger and relay its result."""
        try:
            result = await self.ledger.execute_trade(
                identity, request, quote.amount_a, quote.amount_b
            )
        except TradeError:
            raise
        except Exception as e:
            logger.exception(
                "ledger_execute_failed",
                user_id=identity.user_id,
                amount_a=quote.amount_a,
                amount_b=quote.amount_b,
            )
            raise LedgerError(str(e) or "ledger error", cause=e) from e

        logger.info(
            "settlement_dispatched",
            user_id=identity.user_id,
            amount_a=quote.amount_a,
            amount_b=quote.amount_b,
            status=result.status,
        )
        return result


__all__ = ["SettlementDispatcher"]

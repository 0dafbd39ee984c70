"""Quote service: validates a request amount and prices it from two sources.

The AMM query and the price-feed fetch are independent and run as two
concurrent tasks; both must succeed before reconciliation.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

import structlog

from tradecore.amm.router import AmmQuoter, Web3RouterQuoter, ledger_amount_from_chain
from tradecore.amounts import ScaledAmount, validate_amount
from tradecore.config import DEFAULT_TRADE_CONFIG, TradeConfig
from tradecore.models.trade import QuotePreview
from tradecore.pricing.feed import HttpPriceFeed, PriceSample, PriceSource
from tradecore.pricing.reconcile import Quote, reconcile

logger = structlog.get_logger()


class QuoteService:
    """Prices validated amounts against the AMM router and the price feed.

    Holds no per-request state; one instance serves concurrent requests.

    Args:
        amm: AMM quote source
        price_source: Feed price source for instrument B
        path: Swap path queried on the router, input token first
    """

    def __init__(
        self,
        amm: AmmQuoter,
        price_source: PriceSource,
        path: Sequence[str],
    ) -> None:
        self.amm = amm
        self.price_source = price_source
        self.path = tuple(path)

    @classmethod
    def from_config(cls, config: TradeConfig = DEFAULT_TRADE_CONFIG) -> QuoteService:
        """Build a service wired to the real router and feed."""
        return cls(
            amm=Web3RouterQuoter(
                config.rpc_url,
                router_address=config.router_address,
                timeout=config.amm_timeout,
            ),
            price_source=HttpPriceFeed(
                url=config.price_feed_url,
                coin_id=config.price_coin_id,
                timeout=config.price_feed_timeout,
                strict=config.strict_price_lookup,
            ),
            path=config.swap_path,
        )

    async def _fetch_signals(self, amount: ScaledAmount) -> tuple[str, PriceSample]:
        """Run both remote lookups concurrently.

        The first failure cancels the other lookup; cancelling the caller
        cancels both.
        """
        amm_task = asyncio.create_task(self.amm.get_amount_out(amount.chain, self.path))
        feed_task = asyncio.create_task(self.price_source.fetch_price())
        try:
            raw_out, sample = await asyncio.gather(amm_task, feed_task)
        except BaseException:
            amm_task.cancel()
            feed_task.cancel()
            raise
        return raw_out, sample

    async def price(self, amount: ScaledAmount) -> Quote:
        """Price an already validated amount.

        Raises:
            PriceQueryFailed: If either remote source fails
            PriceTooLow: If the AMM output is too small for ledger scale
            InvalidPrice: If the feed price or derived amount is not positive
        """
        raw_out, sample = await self._fetch_signals(amount)
        amm_ledger_amount = ledger_amount_from_chain(raw_out)
        quote = reconcile(amount.ledger, amm_ledger_amount, sample.usd)

        logger.info(
            "quote_priced",
            amount=amount.raw,
            amm_out=raw_out,
            price=sample.usd,
            amount_a=quote.amount_a,
            amount_b=quote.amount_b,
        )
        return quote

    async def preview(self, amount: str) -> QuotePreview:
        """Quote an amount without settling it.

        Every validation and pricing failure is raised.
        """
        quote = await self.price(validate_amount(amount))
        return QuotePreview(amount_csd=quote.display_a, amount_hbs=quote.display_b)


__all__ = ["QuoteService"]

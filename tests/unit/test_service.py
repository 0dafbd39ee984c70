"""Tests for the quote service."""

import asyncio

import pytest

from tests.helpers import CSD, ONE_TOKEN, TEN_TOKENS, USDT, make_quote_service
from tradecore.amm.router import MockAmmQuoter
from tradecore.amounts import validate_amount
from tradecore.errors import (
    InvalidAmount,
    InvalidPrice,
    NotAGranularityMultiple,
    PriceNotFound,
    PriceQueryFailed,
    PriceTooLow,
)
from tradecore.pricing.feed import StaticPriceFeed
from tradecore.pricing.reconcile import Quote
from tradecore.service import QuoteService


class TestPreview:
    """Tests for QuoteService.preview."""

    def test_reference_scenario(self):
        """10 units, AMM 10 tokens, price 2.0 -> 10.0000 / 50.0000."""
        service, amm, feed = make_quote_service(amount_out=TEN_TOKENS, price=2.0)

        preview = asyncio.run(service.preview("10"))

        assert preview.amount_csd == "10.0000"
        assert preview.amount_hbs == "50.0000"
        assert amm.calls == [(10 * 10**18, (USDT, CSD))]
        assert feed.calls == 1

    def test_amm_one_token(self):
        """An AMM output of 10^18 reports 1.0000 for side A."""
        service, _, _ = make_quote_service(amount_out=ONE_TOKEN, price=2.0)
        preview = asyncio.run(service.preview("10"))
        assert preview.amount_csd == "1.0000"
        assert preview.amount_hbs == "50.0000"

    def test_idempotent(self):
        """The same request with the same remote answers gives the same preview."""
        service, _, _ = make_quote_service()
        first = asyncio.run(service.preview("20"))
        second = asyncio.run(service.preview("20"))
        assert first == second

    def test_below_minimum_is_hard_error(self):
        """The preview path raises InvalidAmount without querying prices."""
        service, amm, feed = make_quote_service()
        with pytest.raises(InvalidAmount):
            asyncio.run(service.preview("9"))
        assert amm.calls == []
        assert feed.calls == 0

    def test_granularity(self):
        """Off-grid amounts raise NotAGranularityMultiple."""
        service, _, _ = make_quote_service()
        with pytest.raises(NotAGranularityMultiple):
            asyncio.run(service.preview("10.0000000001"))

    def test_short_amm_output(self):
        """AMM outputs under 10 digits raise PriceTooLow."""
        service, _, _ = make_quote_service(amount_out="123456789")
        with pytest.raises(PriceTooLow):
            asyncio.run(service.preview("10"))

    @pytest.mark.parametrize("price", [0.0, -2.0])
    def test_non_positive_price(self, price):
        """Zero or negative feed prices raise InvalidPrice, never ZeroDivisionError."""
        service, _, _ = make_quote_service(price=price)
        with pytest.raises(InvalidPrice):
            asyncio.run(service.preview("10"))

    def test_missing_coin_zero_price(self):
        """A feed without the coin yields zero, which is rejected as InvalidPrice."""
        service, _, _ = make_quote_service(price=None)
        with pytest.raises(InvalidPrice):
            asyncio.run(service.preview("10"))

    def test_strict_missing_coin(self):
        """PriceNotFound from a strict feed propagates."""
        service, _, _ = make_quote_service(feed_error=PriceNotFound())
        with pytest.raises(PriceNotFound):
            asyncio.run(service.preview("10"))

    def test_amm_failure(self):
        """AMM query failures raise PriceQueryFailed."""
        service, _, _ = make_quote_service(amm_error=PriceQueryFailed("rpc down"))
        with pytest.raises(PriceQueryFailed):
            asyncio.run(service.preview("10"))

    def test_feed_failure(self):
        """Price feed failures raise PriceQueryFailed."""
        service, _, _ = make_quote_service(feed_error=PriceQueryFailed("feed down"))
        with pytest.raises(PriceQueryFailed):
            asyncio.run(service.preview("10"))


class SlowFeed:
    """Feed that blocks until cancelled, recording the cancellation."""

    def __init__(self) -> None:
        self.cancelled = False

    async def fetch_price(self):
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            self.cancelled = True
            raise


class TestConcurrentLookups:
    """Tests for the concurrent AMM and feed lookups."""

    def test_lookups_overlap(self):
        """Both lookups run concurrently rather than back to back."""
        amm = MockAmmQuoter(amount_out=TEN_TOKENS, delay=0.2)
        feed = StaticPriceFeed(usd=2.0, delay=0.2)
        service = QuoteService(amm=amm, price_source=feed, path=(USDT, CSD))

        async def run():
            loop = asyncio.get_running_loop()
            start = loop.time()
            quote = await service.price(validate_amount("10"))
            return quote, loop.time() - start

        quote, elapsed = asyncio.run(run())
        assert quote == Quote(amount_a=10**11, amount_b=5 * 10**11)
        assert feed.calls == 1
        assert elapsed < 0.35

    def test_amm_failure_cancels_feed(self):
        """A failing AMM lookup cancels the pending feed lookup."""
        feed = SlowFeed()
        amm = MockAmmQuoter(error=PriceQueryFailed("rpc down"))
        service = QuoteService(amm=amm, price_source=feed, path=(USDT, CSD))

        async def run():
            with pytest.raises(PriceQueryFailed):
                await service.price(validate_amount("10"))
            await asyncio.sleep(0)

        asyncio.run(run())
        assert feed.cancelled

    def test_caller_cancellation_propagates(self):
        """Cancelling the caller cancels both lookups."""
        feed = SlowFeed()
        amm = MockAmmQuoter(amount_out=TEN_TOKENS, delay=10)
        service = QuoteService(amm=amm, price_source=feed, path=(USDT, CSD))

        async def run():
            task = asyncio.create_task(service.price(validate_amount("10")))
            await asyncio.sleep(0.01)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(run())
        assert feed.cancelled

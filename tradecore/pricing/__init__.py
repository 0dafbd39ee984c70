"""Price sources and quote reconciliation.

Usage:
    from tradecore.pricing import HttpPriceFeed, reconcile

    sample = await HttpPriceFeed().fetch_price()
    quote = reconcile(amount.ledger, amm_amount, sample.usd)
"""

from tradecore.pricing.feed import (
    HttpPriceFeed,
    PriceSample,
    PriceSource,
    StaticPriceFeed,
    find_price,
)
from tradecore.pricing.reconcile import Quote, reconcile

__all__ = [
    "PriceSample",
    "PriceSource",
    "HttpPriceFeed",
    "StaticPriceFeed",
    "find_price",
    "Quote",
    "reconcile",
]

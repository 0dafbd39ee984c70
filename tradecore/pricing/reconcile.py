"""Quote reconciliation.

Combines the AMM output and the feed price into the two ledger-scale
amounts of a prospective exchange.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import structlog

from tradecore.amounts import format_ledger_amount
from tradecore.constants import HBS_AMOUNT_MULTIPLIER, LEDGER_SCALE
from tradecore.errors import InvalidPrice

logger = structlog.get_logger()


@dataclass(frozen=True)
class Quote:
    """Both sides of a prospective exchange, at ledger scale.

    Attributes:
        amount_a: Instrument A amount (AMM output truncated to ledger scale)
        amount_b: Instrument B amount derived from the feed price
    """

    amount_a: int
    amount_b: int

    @property
    def display_a(self) -> str:
        return format_ledger_amount(self.amount_a)

    @property
    def display_b(self) -> str:
        return format_ledger_amount(self.amount_b)


def reconcile(amount_ledger: int, amm_ledger_amount: int, price: float) -> Quote:
    """Price instrument B for a validated request.

    amount_b = floor((amount_ledger / 10^10) * 10 / price * 10^10)

    Args:
        amount_ledger: Validated request amount at ledger scale
        amm_ledger_amount: AMM output already truncated to ledger scale
        price: Unit price of instrument B from the feed

    Returns:
        Quote of (amm_ledger_amount, amount_b)

    Raises:
        InvalidPrice: If price is not a positive finite number or the
            derived amount is not positive
    """
    if not math.isfinite(price) or price <= 0:
        raise InvalidPrice(f"feed price must be positive: {price}")

    amount_float_b = amount_ledger / LEDGER_SCALE * HBS_AMOUNT_MULTIPLIER
    scaled_b = amount_float_b / price * LEDGER_SCALE
    if not math.isfinite(scaled_b):
        raise InvalidPrice(f"derived amount is not finite for price {price}")

    amount_b = math.floor(scaled_b)
    if amount_b <= 0:
        raise InvalidPrice(f"derived amount is not positive for price {price}")

    quote = Quote(amount_a=amm_ledger_amount, amount_b=amount_b)
    logger.debug(
        "quote_reconciled",
        amount_ledger=amount_ledger,
        amount_a=quote.amount_a,
        amount_b=quote.amount_b,
        price=price,
    )
    return quote


__all__ = ["Quote", "reconcile"]

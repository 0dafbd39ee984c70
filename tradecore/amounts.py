"""Fixed-point amount validation.

A requested amount arrives as a decimal string and is needed at two
scales: the ledger scale (10 implied digits) and the chain scale
(18 implied digits). Both are derived from the same Decimal so that the
chain leg is an exact decimal shift with no float rounding.
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from decimal import Decimal

import structlog

from tradecore.constants import (
    AMOUNT_GRANULARITY,
    CHAIN_DECIMALS,
    DISPLAY_DECIMALS,
    LEDGER_SCALE,
    MAX_CHAIN_AMOUNT,
    MIN_LEDGER_AMOUNT,
)
from tradecore.errors import InvalidAmount, NotAGranularityMultiple

logger = structlog.get_logger()

# 78 digits of precision, enough for any uint256 chain amount
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)

# Largest request amount whose chain-scale form still fits in a uint256
MAX_AMOUNT = Decimal(MAX_CHAIN_AMOUNT).scaleb(-CHAIN_DECIMALS, DECIMAL_HIGH_PREC_CONTEXT)


@dataclass(frozen=True)
class ScaledAmount:
    """A validated request amount at both fixed-point scales.

    Attributes:
        raw: The amount string as supplied by the caller
        ledger: Amount at ledger scale (x 10^10)
        chain: Amount at chain scale (x 10^18), used as the AMM input
    """

    raw: str
    ledger: int
    chain: int


def parse_amount(amount: str) -> Decimal:
    """Parse a user supplied decimal string.

    Raises:
        InvalidAmount: If the string is not a finite, non-negative decimal
            with at most 18 fractional digits, or too large for a
            uint256 at chain scale
    """
    try:
        value = Decimal(amount.strip())
    except (decimal.InvalidOperation, AttributeError) as e:
        raise InvalidAmount(f"amount is not a decimal number: {amount!r}") from e

    if not value.is_finite():
        raise InvalidAmount(f"amount is not finite: {amount!r}")
    if value < 0:
        raise InvalidAmount(f"amount cannot be negative: {amount!r}")

    if value > MAX_AMOUNT:
        raise InvalidAmount(f"amount is too large: {amount!r}")

    exponent = value.as_tuple().exponent
    if isinstance(exponent, int) and -exponent > CHAIN_DECIMALS:
        raise InvalidAmount(f"amount has more than {CHAIN_DECIMALS} decimals: {amount!r}")
    return value


def to_ledger_scale(value: Decimal) -> int:
    """Scale a decimal to ledger units, rounding half to even."""
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return int((value * LEDGER_SCALE).to_integral_value(rounding=decimal.ROUND_HALF_EVEN))


def to_chain_scale(value: Decimal) -> int:
    """Shift a decimal 18 places left.

    For an integer amount this is the same as appending 18 zero digits
    to its string form.
    """
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return int(value.scaleb(CHAIN_DECIMALS))


def validate_amount(amount: str) -> ScaledAmount:
    """Validate a requested amount and derive both scaled forms.

    Checks run in order: parse, minimum quantity, granularity.

    Raises:
        InvalidAmount: Unparseable, or below MIN_LEDGER_AMOUNT at ledger scale
        NotAGranularityMultiple: Ledger amount not a multiple of 10
    """
    value = parse_amount(amount)
    ledger = to_ledger_scale(value)

    if ledger < MIN_LEDGER_AMOUNT:
        raise InvalidAmount(f"amount below minimum: {amount}")

    if ledger % AMOUNT_GRANULARITY != 0:
        raise NotAGranularityMultiple(
            f"amount must be a multiple of {AMOUNT_GRANULARITY}: {amount}"
        )

    scaled = ScaledAmount(raw=amount, ledger=ledger, chain=to_chain_scale(value))
    logger.debug("amount_validated", amount=amount, ledger=scaled.ledger, chain=scaled.chain)
    return scaled


def format_ledger_amount(value: int, decimals: int = DISPLAY_DECIMALS) -> str:
    """Format a ledger-scale integer for display, e.g. 100000000000 -> "10.0000"."""
    return f"{value / LEDGER_SCALE:.{decimals}f}"


__all__ = [
    "ScaledAmount",
    "DECIMAL_HIGH_PREC_CONTEXT",
    "MAX_AMOUNT",
    "parse_amount",
    "to_ledger_scale",
    "to_chain_scale",
    "validate_amount",
    "format_ledger_amount",
]

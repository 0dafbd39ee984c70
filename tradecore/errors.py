"""Trade error classes.

Every error carries a stable ``code`` that is returned to callers
unchanged, and the HTTP status the API layer responds with.
"""

from __future__ import annotations


class TradeError(Exception):
    """Base error for quote and settlement operations."""

    code = "TRADE_ERROR"
    status_code = 500
    default_message = "trade error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        """Serialize for an API error body."""
        return {"code": self.code, "message": self.message}


class InvalidAmount(TradeError):
    """Amount is unparseable or below the minimum quantity."""

    code = "INVALID_AMOUNT"
    status_code = 400
    default_message = "invalid amount"


class NotAGranularityMultiple(TradeError):
    """Scaled amount is not a multiple of the ledger granularity."""

    code = "NOT_GRANULARITY_MULTIPLE"
    status_code = 400
    default_message = "amount must be a multiple of 10"


class PriceQueryFailed(TradeError):
    """A remote price source could not be queried."""

    code = "PRICE_QUERY_FAILED"
    status_code = 502
    default_message = "price query failed"


class PriceTooLow(TradeError):
    """AMM output is too small to express at ledger scale."""

    code = "PRICE_TOO_LOW"
    status_code = 422
    default_message = "price too low"


class InvalidPrice(TradeError):
    """Feed price or derived amount is not positive."""

    code = "INVALID_PRICE"
    status_code = 422
    default_message = "invalid price"


class PriceNotFound(InvalidPrice):
    """The price feed has no entry for the target instrument."""

    code = "PRICE_NOT_FOUND"
    default_message = "price not found"


class Unauthorized(TradeError):
    """Claims are missing or carry no usable user id."""

    code = "UNAUTHORIZED"
    status_code = 401
    default_message = "invalid token"


class AuthorizeError(TradeError):
    """Token issuance was refused."""

    code = "AUTHORIZE_ERROR"
    status_code = 400
    default_message = "authorization failed"


class LedgerError(TradeError):
    """The ledger collaborator reported a failure."""

    code = "LEDGER_ERROR"
    status_code = 500
    default_message = "ledger error"

    def __init__(self, message: str | None = None, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


__all__ = [
    "TradeError",
    "InvalidAmount",
    "NotAGranularityMultiple",
    "PriceQueryFailed",
    "PriceTooLow",
    "InvalidPrice",
    "PriceNotFound",
    "Unauthorized",
    "AuthorizeError",
    "LedgerError",
]

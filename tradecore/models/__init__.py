"""Pydantic models for trade API data structures."""

from tradecore.models.trade import (
    AddressBody,
    AmountBody,
    EthAuthorizeReply,
    EthAuthorizeRequest,
    QuotePreview,
    SettlementResult,
    TradeRequest,
)
from tradecore.models.types import DecimalString

__all__ = [
    # Types
    "DecimalString",
    # Requests
    "AmountBody",
    "TradeRequest",
    "AddressBody",
    "EthAuthorizeRequest",
    # Responses
    "QuotePreview",
    "SettlementResult",
    "EthAuthorizeReply",
]

"""API endpoints for the trade service."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import structlog
from fastapi import APIRouter, Depends, Request

from tradecore.auth import decode_claims, issue_token, validate_wallet_address
from tradecore.config import TradeConfig
from tradecore.ledger import InMemoryLedger, Ledger
from tradecore.models.trade import (
    EthAuthorizeReply,
    EthAuthorizeRequest,
    QuotePreview,
    SettlementResult,
    TradeRequest,
)
from tradecore.service import QuoteService
from tradecore.settlement import SettlementDispatcher
from tradecore.users import InMemoryUserDirectory, UserDirectory

logger = structlog.get_logger()

router = APIRouter(prefix="/api")


@lru_cache
def get_config() -> TradeConfig:
    """Dependency provider for the service configuration."""
    return TradeConfig.from_env()


@lru_cache
def _default_quote_service() -> QuoteService:
    return QuoteService.from_config(get_config())


@lru_cache
def _default_ledger() -> InMemoryLedger:
    return InMemoryLedger()


@lru_cache
def _default_user_directory() -> InMemoryUserDirectory:
    return InMemoryUserDirectory()


def get_quote_service() -> QuoteService:
    """Dependency provider for the quote service.

    Override this in tests to inject mock price sources:
        app.dependency_overrides[get_quote_service] = lambda: service
    """
    return _default_quote_service()


def get_ledger() -> Ledger:
    """Dependency provider for the ledger collaborator."""
    return _default_ledger()


def get_user_directory() -> UserDirectory:
    """Dependency provider for the user directory."""
    return _default_user_directory()


def get_claims(
    request: Request,
    config: TradeConfig = Depends(get_config),
) -> dict[str, Any] | None:
    """Verified claims from the ``Authorization: Bearer`` header, if any.

    Missing or invalid tokens yield None; the operations decide whether
    an identity is required.
    """
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return decode_claims(token.strip(), secret=config.jwt_secret)


@router.post("/eth_authorize")
async def eth_authorize(
    body: EthAuthorizeRequest,
    config: TradeConfig = Depends(get_config),
    users: UserDirectory = Depends(get_user_directory),
) -> EthAuthorizeReply:
    """Issue a bearer token for a wallet address, creating the user if needed."""
    address = validate_wallet_address(body.send_body.address)
    user_id = await users.get_or_create(address)
    token = issue_token(
        user_id,
        secret=config.jwt_secret,
        issuer=config.jwt_issuer,
        ttl=config.token_ttl,
    )
    logger.info("token_issued", user_id=user_id)
    return EthAuthorizeReply(token=token)


@router.post("/get_trade")
async def get_trade(
    body: TradeRequest,
    quote_service: QuoteService = Depends(get_quote_service),
) -> QuotePreview:
    """Preview the amounts a trade would settle at.

    Error Handling:
        - Validation and pricing failures: TradeError body with its code
    """
    logger.info("received_quote_request", amount=body.send_body.amount)
    return await quote_service.preview(body.send_body.amount)


@router.post("/trade", response_model_exclude_none=True)
async def trade(
    body: TradeRequest,
    claims: dict[str, Any] | None = Depends(get_claims),
    quote_service: QuoteService = Depends(get_quote_service),
    ledger: Ledger = Depends(get_ledger),
) -> SettlementResult:
    """Re-price a trade and settle it on the ledger.

    Error Handling:
        - No usable identity: 401 before any price query
        - Amount below minimum: 200 with ``{"status": "fail"}``
        - Other validation, pricing or ledger failures: TradeError body
    """
    logger.info("received_trade_request", amount=body.send_body.amount)
    dispatcher = SettlementDispatcher(quote_service, ledger)
    return await dispatcher.settle(claims, body)

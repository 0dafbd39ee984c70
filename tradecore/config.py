"""Runtime configuration for the trade service."""

from __future__ import annotations

import os
from dataclasses import dataclass

from tradecore.constants import (
    AMM_QUERY_TIMEOUT_SECONDS,
    BSC_RPC_URL,
    CSD_BSC,
    HBS_COIN_ID,
    PANCAKE_ROUTER_V2,
    PRICE_FEED_TIMEOUT_SECONDS,
    PRICE_FEED_URL,
    TOKEN_ISSUER,
    TOKEN_TTL_SECONDS,
    USDT_BSC,
)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class TradeConfig:
    """Centralized configuration for quoting and settlement.

    Attributes:
        rpc_url: JSON-RPC node the AMM router is queried through
        router_address: AMM router contract address
        token_in: First hop of the swap path
        token_out: Last hop of the swap path
        price_feed_url: Market-data endpoint returning the coin rate list
        price_coin_id: ``CoinId`` of the feed entry used as the B price
        price_feed_timeout: Client timeout for the feed request (seconds)
        amm_timeout: Upper bound for the router query (seconds)
        jwt_secret: HS256 key used to sign and verify bearer tokens
        jwt_issuer: ``iss`` claim written into issued tokens
        token_ttl: Lifetime of issued tokens (seconds)
        strict_price_lookup: If True, a feed without the target coin raises
            PriceNotFound. If False, it yields a zero price which the
            reconciler rejects as InvalidPrice.
    """

    rpc_url: str = BSC_RPC_URL
    router_address: str = PANCAKE_ROUTER_V2
    token_in: str = USDT_BSC
    token_out: str = CSD_BSC
    price_feed_url: str = PRICE_FEED_URL
    price_coin_id: str = HBS_COIN_ID
    price_feed_timeout: float = PRICE_FEED_TIMEOUT_SECONDS
    amm_timeout: float = AMM_QUERY_TIMEOUT_SECONDS
    jwt_secret: str = ""
    jwt_issuer: str = TOKEN_ISSUER
    token_ttl: int = TOKEN_TTL_SECONDS
    strict_price_lookup: bool = False

    @property
    def swap_path(self) -> tuple[str, str]:
        return (self.token_in, self.token_out)

    @classmethod
    def from_env(cls) -> TradeConfig:
        """Build a config from ``TRADE_*`` environment variables."""
        return cls(
            rpc_url=os.environ.get("TRADE_RPC_URL", BSC_RPC_URL),
            router_address=os.environ.get("TRADE_ROUTER_ADDRESS", PANCAKE_ROUTER_V2),
            token_in=os.environ.get("TRADE_TOKEN_IN", USDT_BSC),
            token_out=os.environ.get("TRADE_TOKEN_OUT", CSD_BSC),
            price_feed_url=os.environ.get("TRADE_PRICE_FEED_URL", PRICE_FEED_URL),
            price_coin_id=os.environ.get("TRADE_PRICE_COIN_ID", HBS_COIN_ID),
            price_feed_timeout=float(
                os.environ.get("TRADE_PRICE_FEED_TIMEOUT", str(PRICE_FEED_TIMEOUT_SECONDS))
            ),
            amm_timeout=float(os.environ.get("TRADE_AMM_TIMEOUT", str(AMM_QUERY_TIMEOUT_SECONDS))),
            jwt_secret=os.environ.get("TRADE_JWT_SECRET", ""),
            jwt_issuer=os.environ.get("TRADE_JWT_ISSUER", TOKEN_ISSUER),
            strict_price_lookup=_env_bool("TRADE_STRICT_PRICE_LOOKUP", False),
        )


# Default configuration instance
DEFAULT_TRADE_CONFIG = TradeConfig()

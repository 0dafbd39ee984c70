"""Off-chain price feed client.

Fetches the market-data rate list and picks out the unit price of a
single instrument. The feed responds with::

    {"Data": [{"CoinId": "HBS(BEP20)", "Usd": 0.42}, ...]}
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
import structlog

from tradecore.constants import HBS_COIN_ID, PRICE_FEED_TIMEOUT_SECONDS, PRICE_FEED_URL
from tradecore.errors import PriceNotFound, PriceQueryFailed

logger = structlog.get_logger()


@dataclass(frozen=True)
class PriceSample:
    """A unit price for one instrument, used once per request.

    Attributes:
        coin_id: Feed instrument identifier
        usd: Unit price; 0.0 when the feed had no entry for the instrument
        found: Whether the feed actually listed the instrument
    """

    coin_id: str
    usd: float
    found: bool = True

    @classmethod
    def missing(cls, coin_id: str) -> PriceSample:
        return cls(coin_id=coin_id, usd=0.0, found=False)


class PriceSource(Protocol):
    """Protocol for unit price sources."""

    async def fetch_price(self) -> PriceSample:
        """Fetch the current price of the configured instrument.

        Raises:
            PriceQueryFailed: On transport errors, timeouts or bad bodies
            PriceNotFound: If strict lookup is enabled and the instrument
                is not listed
        """
        ...


def find_price(payload: Any, coin_id: str) -> PriceSample | None:
    """Pick the entry for ``coin_id`` out of a decoded feed body.

    When the instrument appears more than once the last entry wins.

    Returns:
        The matching sample, or None if the instrument is not listed

    Raises:
        PriceQueryFailed: If the body does not have the expected shape
    """
    if not isinstance(payload, dict):
        raise PriceQueryFailed("price feed body is not an object")
    entries = payload.get("Data")
    if entries is None:
        entries = []
    if not isinstance(entries, list):
        raise PriceQueryFailed("price feed 'Data' is not a list")

    sample: PriceSample | None = None
    for entry in entries:
        if not isinstance(entry, dict) or entry.get("CoinId") != coin_id:
            continue
        usd = entry.get("Usd")
        if usd is None:
            usd = 0.0
        if isinstance(usd, bool) or not isinstance(usd, (int, float)):
            raise PriceQueryFailed(f"price feed 'Usd' is not a number for {coin_id}")
        sample = PriceSample(coin_id=coin_id, usd=float(usd))
    return sample


class HttpPriceFeed:
    """Price source backed by the market-data HTTP endpoint.

    A fresh client is opened per fetch so the connection and the response
    body are released on every exit path.
    """

    def __init__(
        self,
        url: str = PRICE_FEED_URL,
        coin_id: str = HBS_COIN_ID,
        timeout: float = PRICE_FEED_TIMEOUT_SECONDS,
        strict: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the feed client.

        Args:
            url: Endpoint returning the rate list (no query parameters)
            coin_id: ``CoinId`` to extract
            timeout: Client timeout in seconds
            strict: Raise PriceNotFound instead of returning a zero price
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.url = url
        self.coin_id = coin_id
        self.timeout = timeout
        self.strict = strict
        self._transport = transport

    async def fetch_price(self) -> PriceSample:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.url)
                response.raise_for_status()
                payload = response.json()
        except httpx.TimeoutException as e:
            logger.warning("price_feed_timeout", url=self.url, timeout=self.timeout)
            raise PriceQueryFailed("price feed timed out") from e
        except httpx.HTTPError as e:
            logger.warning("price_feed_request_failed", url=self.url, error=str(e))
            raise PriceQueryFailed("price feed request failed") from e
        except ValueError as e:
            logger.warning("price_feed_body_invalid", url=self.url, error=str(e))
            raise PriceQueryFailed("price feed body is not valid JSON") from e

        sample = find_price(payload, self.coin_id)
        if sample is None:
            if self.strict:
                raise PriceNotFound(f"price feed has no entry for {self.coin_id}")
            logger.warning("price_feed_coin_missing", url=self.url, coin_id=self.coin_id)
            return PriceSample.missing(self.coin_id)

        logger.debug("price_feed_sample", coin_id=sample.coin_id, usd=sample.usd)
        return sample


class StaticPriceFeed:
    """Price source returning a fixed sample; tracks calls for assertions."""

    def __init__(
        self,
        usd: float | None = None,
        error: Exception | None = None,
        coin_id: str = HBS_COIN_ID,
        delay: float = 0.0,
    ) -> None:
        self.usd = usd
        self.error = error
        self.coin_id = coin_id
        self.delay = delay
        self.calls = 0

    async def fetch_price(self) -> PriceSample:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.usd is None:
            return PriceSample.missing(self.coin_id)
        return PriceSample(coin_id=self.coin_id, usd=self.usd)


__all__ = [
    "PriceSample",
    "PriceSource",
    "HttpPriceFeed",
    "StaticPriceFeed",
    "find_price",
]

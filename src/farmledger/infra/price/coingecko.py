"""CoinGecko price provider: historical USD prices by token contract address."""

import asyncio
import logging
from decimal import Decimal

from farmledger.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)

BASE_URL = "https://api.coingecko.com"

# Stablecoins that are always $1 (lowercase contract addresses, Ethereum mainnet)
STABLECOINS: frozenset[str] = frozenset({
    "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",  # USDC
    "0xdac17f958d2ee523a2206206994597c13d831ec7",  # USDT
    "0x6b175474e89094c44da98b954eedeac495271d0f",  # DAI
})

MAX_RETRIES = 3

# Half-width of the query window around the target timestamp
WINDOW_SECONDS = 3600


class CoinGeckoProvider:
    """Fetch historical USD prices from CoinGecko's contract endpoints with rate-limit retry."""

    def __init__(self, http_client: RateLimitedClient, api_key: str = "", platform: str = "ethereum") -> None:
        self._http = http_client
        self._api_key = api_key
        self._platform = platform

    async def get_price(self, token_address: str, timestamp: int) -> Decimal | None:
        """USD price of a token contract closest to a Unix timestamp, or None if unknown."""
        address = token_address.lower()
        if address in STABLECOINS:
            return Decimal("1.0")

        params: dict[str, str] = {
            "vs_currency": "usd",
            "from": str(timestamp - WINDOW_SECONDS),
            "to": str(timestamp + WINDOW_SECONDS),
        }
        headers = {"x-cg-demo-api-key": self._api_key} if self._api_key else None

        url = f"{BASE_URL}/api/v3/coins/{self._platform}/contract/{address}/market_chart/range"

        for attempt in range(MAX_RETRIES):
            response = await self._http.get(url, params=params, headers=headers)

            if response.status_code == 429:
                wait = 2 ** (attempt + 1)  # 2, 4, 8 seconds
                logger.info("CoinGecko 429 rate limit for %s, waiting %ds...", address, wait)
                await asyncio.sleep(wait)
                continue

            if response.status_code != 200:
                logger.warning("CoinGecko returned %d for %s", response.status_code, address)
                return None

            prices = response.json().get("prices", [])
            if not prices:
                return None

            target_ms = timestamp * 1000
            closest = min(prices, key=lambda p: abs(p[0] - target_ms))
            return Decimal(str(closest[1]))

        logger.warning("CoinGecko rate limit exhausted for %s", address)
        return None

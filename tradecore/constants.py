"""Protocol constants for the trade service.

Centralizes fixed-point scales, well-known addresses and remote endpoints.
"""

from tradecore.models.types import is_valid_address

# Ledger balances carry 10 implied decimal digits
LEDGER_SCALE = 10**10

# On-chain token amounts carry 18 implied decimal digits
CHAIN_SCALE = 10**18
CHAIN_DECIMALS = 18

# Digits dropped when rescaling a chain amount to ledger scale (18 - 10)
CHAIN_TO_LEDGER_DIGITS = 8

# An AMM result shorter than this cannot be truncated to a ledger amount
MIN_AMM_DIGITS = 10

# Smallest accepted request: 10 units at ledger scale
MIN_LEDGER_AMOUNT = 10 * LEDGER_SCALE

# Ledger amounts must be a multiple of this
AMOUNT_GRANULARITY = 10

# Largest amount the router accepts as a uint256 argument, at chain scale
MAX_CHAIN_AMOUNT = 2**256 - 1

# Instrument B is quoted against 10x the instrument A amount
HBS_AMOUNT_MULTIPLIER = 10

# Quote previews are printed with 4 fractional digits
DISPLAY_DECIMALS = 4

# Remote call bounds (seconds)
PRICE_FEED_TIMEOUT_SECONDS = 10.0
AMM_QUERY_TIMEOUT_SECONDS = 10.0

# Issued tokens expire after 7 days
TOKEN_TTL_SECONDS = 60 * 60 * 24 * 7
TOKEN_ISSUER = "DHB"


def _validate_token_address(name: str, address: str) -> str:
    """Validate and return a contract address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# BSC public JSON-RPC node
BSC_RPC_URL = "https://bsc-dataseed.binance.org/"

# PancakeSwap V2 router (BSC)
PANCAKE_ROUTER_V2 = _validate_token_address(
    "PancakeRouterV2", "0x10ED43C718714eb63d5aA57B78B54704E256024E"
)

# Swap path: USDT -> CSD
USDT_BSC = _validate_token_address("USDT", "0x55d398326f99059fF775485246999027B3197955")
CSD_BSC = _validate_token_address("CSD", "0x0BAEfDB75cA6CA9A0d1685086829F3Ea9dDA9f5E")

# Market-data endpoint and the instrument we price against
PRICE_FEED_URL = "https://be.api.hbsswap.com/market/coin/rates"
HBS_COIN_ID = "HBS(BEP20)"

# Addresses that can never own an account
BURN_ADDRESS = "0x000000000000000000000000000000000000dead"
MIN_ADDRESS_LENGTH = 20

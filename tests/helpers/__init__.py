"""Test helpers module for shared test utilities.

This module consolidates common test utilities:
- constants: Token addresses, amounts and keys
- factories: Mock collaborators and service builders
"""

from tests.helpers.constants import (
    BURN,
    CSD,
    ONE_TOKEN,
    TEN_TOKENS,
    TEST_SECRET,
    USDT,
    WALLET,
)
from tests.helpers.factories import (
    RecordingLedger,
    auth_header,
    make_quote_service,
    make_token,
)

__all__ = [
    # Constants
    "USDT",
    "CSD",
    "WALLET",
    "BURN",
    "TEST_SECRET",
    "ONE_TOKEN",
    "TEN_TOKENS",
    # Factories
    "RecordingLedger",
    "make_quote_service",
    "make_token",
    "auth_header",
]

"""Shared type definitions for trade models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

_HEX_CHARS = frozenset("0123456789abcdefABCDEF")


def validate_decimal_string(value: Any) -> str:
    """Validate that a value is a plain decimal number string.

    Numbers are accepted and converted to their string form so clients
    that send ``10`` instead of ``"10"`` are not rejected at the schema.
    Range and precision rules are enforced later by the amount validator.

    Raises:
        ValueError: If value is neither a string nor a number
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be a decimal string, got bool")
    if isinstance(value, int | float):
        return str(value)
    if not isinstance(value, str):
        raise ValueError(f"Amount must be a decimal string, got {type(value).__name__}")
    return value.strip()


# User supplied decimal amount, e.g. "10" or "12.5"
DecimalString = Annotated[
    str,
    BeforeValidator(validate_decimal_string),
    Field(description="Decimal amount as string"),
]


def is_valid_address(address: str) -> bool:
    """Check whether a string is a 0x-prefixed 20 byte hex address."""
    if not isinstance(address, str) or len(address) != 42:
        return False
    if not address.startswith(("0x", "0X")):
        return False
    return all(c in _HEX_CHARS for c in address[2:])


def normalize_address(address: str) -> str:
    """Normalize an address to lowercase with a 0x prefix."""
    address = address.strip().lower()
    if not address.startswith("0x"):
        address = "0x" + address
    return address

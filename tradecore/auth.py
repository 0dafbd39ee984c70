"""Bearer token issuance and claims extraction.

Tokens are HS256 JWTs carrying the ledger user id in a ``UserId`` claim.
Every authenticated operation obtains its identity through
``extract_identity`` so the claims rules live in one place.
"""

from __future__ import annotations

import math
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import jwt
import structlog

from tradecore.constants import BURN_ADDRESS, MIN_ADDRESS_LENGTH, TOKEN_ISSUER, TOKEN_TTL_SECONDS
from tradecore.errors import AuthorizeError, Unauthorized

logger = structlog.get_logger()

JWT_ALGORITHM = "HS256"
USER_ID_CLAIM = "UserId"
USER_TYPE_CLAIM = "UserType"


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """The user a request acts on behalf of."""

    user_id: int


def extract_identity(claims: Mapping[str, Any] | None) -> AuthenticatedIdentity:
    """Read the user id out of a verified claims object.

    JSON numbers decode as floats, so any integer-valued number is accepted.

    Raises:
        Unauthorized: If claims are absent, the field is missing or null,
            or the value is not an integer-valued number
    """
    if claims is None:
        raise Unauthorized("missing claims")

    value = claims.get(USER_ID_CLAIM)
    if value is None:
        raise Unauthorized("missing user id")
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise Unauthorized("malformed user id")
    if isinstance(value, float) and (not math.isfinite(value) or not value.is_integer()):
        raise Unauthorized("malformed user id")

    return AuthenticatedIdentity(user_id=int(value))


def validate_wallet_address(address: str) -> str:
    """Reject addresses that cannot own an account.

    Raises:
        AuthorizeError: If the address is empty, too short, or the burn address
    """
    if not address or len(address) < MIN_ADDRESS_LENGTH or address.lower() == BURN_ADDRESS:
        raise AuthorizeError("invalid account address")
    return address


def issue_token(
    user_id: int,
    *,
    secret: str,
    issuer: str = TOKEN_ISSUER,
    ttl: int = TOKEN_TTL_SECONDS,
    now: int | None = None,
) -> str:
    """Sign a bearer token for a user.

    Args:
        user_id: Ledger user id written into the ``UserId`` claim
        secret: HS256 signing key
        issuer: ``iss`` claim
        ttl: Seconds until expiry
        now: Issue time as a unix timestamp (defaults to the current time)

    Raises:
        AuthorizeError: If no secret is configured or signing fails
    """
    if not secret:
        raise AuthorizeError("token signing key not configured")

    issued_at = int(time.time()) if now is None else now
    payload = {
        USER_ID_CLAIM: user_id,
        USER_TYPE_CLAIM: "user",
        "nbf": issued_at,
        "exp": issued_at + ttl,
        "iss": issuer,
    }
    try:
        return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)
    except jwt.PyJWTError as e:
        logger.warning("token_signing_failed", user_id=user_id, error=str(e))
        raise AuthorizeError("failed to sign token") from e


def decode_claims(token: str, *, secret: str) -> dict[str, Any] | None:
    """Verify a bearer token and return its claims.

    Returns:
        The claims dict, or None if the token is invalid or expired
    """
    if not token or not secret:
        return None
    try:
        claims = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        logger.info("token_rejected", error=str(e))
        return None
    return claims if isinstance(claims, dict) else None


__all__ = [
    "AuthenticatedIdentity",
    "JWT_ALGORITHM",
    "USER_ID_CLAIM",
    "extract_identity",
    "validate_wallet_address",
    "issue_token",
    "decode_claims",
]

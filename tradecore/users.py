"""User directory collaborator: maps wallet addresses to ledger user ids."""

from __future__ import annotations

from typing import Protocol

import structlog

from tradecore.models.types import normalize_address

logger = structlog.get_logger()


class UserDirectory(Protocol):
    """Protocol for user lookups."""

    async def get_or_create(self, address: str) -> int:
        """Return the user id for an address, creating the user if absent."""
        ...


class InMemoryUserDirectory:
    """User directory for local runs and tests."""

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}

    async def get_or_create(self, address: str) -> int:
        key = normalize_address(address)
        user_id = self._ids.get(key)
        if user_id is None:
            user_id = len(self._ids) + 1
            self._ids[key] = user_id
            logger.info("user_created", address=key, user_id=user_id)
        return user_id


__all__ = ["UserDirectory", "InMemoryUserDirectory"]

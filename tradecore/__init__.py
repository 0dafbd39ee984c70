"""Token-swap quote and settlement service."""

__version__ = "0.1.0"

from tradecore.service import QuoteService  # noqa: E402
from tradecore.settlement import SettlementDispatcher  # noqa: E402

__all__ = ["QuoteService", "SettlementDispatcher", "__version__"]

"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from tests.helpers import TEST_SECRET, RecordingLedger, make_quote_service
from tradecore.api.endpoints import get_config, get_ledger, get_quote_service
from tradecore.api.main import app
from tradecore.config import TradeConfig
from tradecore.service import QuoteService


@pytest.fixture
def test_config() -> TradeConfig:
    """Config with a known signing key."""
    return TradeConfig(jwt_secret=TEST_SECRET)


@pytest.fixture
def quote_service() -> QuoteService:
    """Quote service: AMM returns 10 tokens, feed price is 2.0."""
    service, _, _ = make_quote_service()
    return service


@pytest.fixture
def recording_ledger() -> RecordingLedger:
    """Ledger that accepts every trade."""
    return RecordingLedger()


@pytest.fixture
def client(test_config, quote_service, recording_ledger):
    """Test client with config, quote service and ledger injected."""
    app.dependency_overrides[get_config] = lambda: test_config
    app.dependency_overrides[get_quote_service] = lambda: quote_service
    app.dependency_overrides[get_ledger] = lambda: recording_ledger
    yield TestClient(app)
    app.dependency_overrides.clear()

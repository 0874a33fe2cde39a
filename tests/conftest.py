"""Shared test fixtures for the parcel ledger."""

import httpx
import pytest
import pytest_asyncio

from parcels.services.history import HistoryLedger
from parcels.services.stats import StatusAggregator
from parcels.storage.sqlite import SQLiteStore


@pytest.fixture
def store(tmp_path):
    """Provide an empty SQLite store in a temporary directory."""
    store = SQLiteStore(tmp_path / "parcels.db", timeout=5.0)
    store.init_db()
    return store


@pytest.fixture
def ledger(store):
    return HistoryLedger(store)


@pytest.fixture
def aggregator(store):
    return StatusAggregator(store)


@pytest_asyncio.fixture
async def client(store):
    """HTTP client bound to the app, with the temporary store injected."""
    from parcels.main import app

    app.state.store = store
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

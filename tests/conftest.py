"""Pytest configuration and fixtures for Vinora tests."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from vinora import database
from vinora.models import WineDraft, WineType
from vinora.services.ledger import StockLedger
from vinora.services.storage import SnapshotStore


def create_test_app():
    """Create a FastAPI app configured for testing (no snapshot lifespan)."""
    from fastapi import FastAPI

    from vinora import __version__
    from vinora.main import app as main_app

    # Empty lifespan for testing - the fixtures manage the ledger themselves
    @asynccontextmanager
    async def test_lifespan(app: FastAPI):
        yield

    test_app = FastAPI(
        title="Vinora Test",
        version=__version__,
        lifespan=test_lifespan,
    )
    for route in main_app.routes:
        test_app.routes.append(route)
    return test_app


_test_app = None


def get_test_app():
    """Get the test app singleton."""
    global _test_app
    if _test_app is None:
        _test_app = create_test_app()
    return _test_app


def _make_draft(**overrides) -> WineDraft:
    """Build a valid wine draft, overriding any field."""
    fields = {
        "name": "Clos des Lys",
        "producer": "Domaine Lys",
        "vintage": 2019,
        "wine_type": WineType.ROUGE,
        "grape_variety": "Pinot Noir",
        "region": "Bourgogne",
        "country": "France",
        "price": 45.00,
        "stock": 10,
        "low_stock_threshold": 6,
    }
    fields.update(overrides)
    return WineDraft(**fields)


def _mock_claude_client(text: str = "", error: Exception | None = None) -> MagicMock:
    """Build a stand-in Anthropic client returning ``text`` or raising ``error``."""
    client = MagicMock()
    if error is not None:
        client.messages.create.side_effect = error
    else:
        client.messages.create.return_value = MagicMock(content=[MagicMock(text=text)])
    return client


@pytest.fixture
def make_draft():
    """Factory for valid wine drafts."""
    return _make_draft


@pytest.fixture
def mock_claude_client():
    """Factory for stand-in Anthropic clients."""
    return _mock_claude_client


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Snapshot directory unique to the test."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def store(data_dir: Path) -> SnapshotStore:
    """Snapshot store that does not seed."""
    return SnapshotStore.from_data_dir(data_dir, seed_on_empty=False)


@pytest.fixture
def ledger() -> StockLedger:
    """Empty in-memory ledger."""
    return StockLedger()


@pytest.fixture
def stocked_ledger(ledger: StockLedger) -> StockLedger:
    """Ledger with one wine: 10 bottles at 45.00, threshold 6."""
    ledger.add_wine(_make_draft())
    return ledger


@pytest_asyncio.fixture(scope="function")
async def client(data_dir: Path) -> AsyncGenerator[AsyncClient, None]:
    """Async test client over an empty ledger stored in a temp directory."""
    database.init_ledger(data_dir=data_dir, seed_on_empty=False)

    transport = ASGITransport(app=get_test_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    database.close_ledger()


@pytest.fixture
def wine_payload() -> dict:
    """JSON body for creating a wine through the API."""
    return {
        "name": "Château Bel-Air",
        "producer": "Domaine de Bel-Air",
        "vintage": 2018,
        "wine_type": "Rouge",
        "grape_variety": "Merlot, Cabernet Franc",
        "region": "Saint-Émilion Grand Cru",
        "country": "France",
        "price": 45.0,
        "stock": 24,
        "low_stock_threshold": 12,
    }

"""Shared test fixtures: no real model or API key needed."""

import os
import random
import tempfile

# Keep test log files out of the working tree
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="storedesk-logs-"))

import pytest
from httpx import ASGITransport, AsyncClient

from storedesk.api.app import create_app
from storedesk.core.database import Database
from storedesk.core.observability import metrics_collector
from storedesk.core.response_engine import ResponseSelector
from storedesk.core.session_store import SessionIntentStore
from storedesk.services.chat_service import ChatService
from storedesk.services.llm_service import LLMService
from storedesk.utils.config import Settings


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics_collector.reset()
    yield
    metrics_collector.reset()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def store() -> SessionIntentStore:
    return SessionIntentStore()


@pytest.fixture
def selector(store: SessionIntentStore, rng: random.Random) -> ResponseSelector:
    return ResponseSelector(store=store, rng=rng)


@pytest.fixture
def mock_settings(tmp_path) -> Settings:
    return Settings(
        use_mock_llm=True,
        mock_latency_min=0.0,
        mock_latency_max=0.0,
        database_path=str(tmp_path / "storedesk.db"),
    )


@pytest.fixture
def db(mock_settings: Settings):
    database = Database(mock_settings.database_path)
    yield database
    database.close()


@pytest.fixture
def llm_service(mock_settings: Settings, selector: ResponseSelector) -> LLMService:
    return LLMService(mock_settings, selector=selector)


@pytest.fixture
def chat_service(db: Database, llm_service: LLMService) -> ChatService:
    return ChatService(db, llm_service)


@pytest.fixture
async def client(chat_service: ChatService, mock_settings: Settings):
    """Async test client for the FastAPI app in mock mode."""
    app = create_app(chat_service=chat_service, settings=mock_settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


import pytest
import pytest_asyncio
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport

from banking_api.main import create_app
from banking_api.services.ledger import Ledger

@pytest.fixture
def ledger() -> Ledger:
    # Fresh account table per test
    return Ledger()

@pytest.fixture
def app(ledger):
    return create_app(ledger)

@pytest_asyncio.fixture(loop_scope="function")
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

@pytest_asyncio.fixture(loop_scope="function")
async def unsafe_client(app) -> AsyncGenerator[AsyncClient, None]:
    # Lets server errors come back as 500 responses instead of propagating
    transport = ASGITransport(app=app, raise_app_exceptions=False)

    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

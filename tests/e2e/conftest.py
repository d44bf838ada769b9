from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from src.core.config import config
from src.search.backends.tavily import TavilySearchClient


@pytest_asyncio.fixture
async def live_client() -> AsyncIterator[TavilySearchClient]:
    """Real provider client for e2e/integration suites only."""
    if not config.tavily_api_key.strip():
        pytest.skip("TAVILY_API_KEY not configured")
    client = TavilySearchClient.from_config(config)
    try:
        yield client
    finally:
        await client.close()

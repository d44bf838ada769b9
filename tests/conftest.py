import json
import os
from collections.abc import Sequence

import httpx
import pytest

# Keep test runs from writing logs/search.log.
os.environ.setdefault("LOG_TO_FILE", "false")

from src.search.backends.tavily import TavilySearchClient  # noqa: E402


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration/e2e tests that require a real search provider.",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "integration: requires runtime services or user configuration"
    )
    config.addinivalue_line("markers", "e2e: end-to-end runtime tests")
    config.addinivalue_line("markers", "property: property-based deterministic tests")


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: Sequence[pytest.Item],
) -> None:
    run_integration = config.getoption("--run-integration")
    skip_integration = pytest.mark.skip(
        reason="integration/e2e is opt-in; rerun with --run-integration"
    )

    for item in items:
        if "tests/e2e/" in item.nodeid:
            item.add_marker("integration")
            item.add_marker("e2e")
        if (
            item.get_closest_marker("integration") or item.get_closest_marker("e2e")
        ) and not run_integration:
            item.add_marker(skip_integration)


class FakeTavily:
    """httpx.MockTransport handler recording every outbound request."""

    def __init__(
        self,
        status: int = 200,
        body: object | None = None,
        exc: type[httpx.HTTPError] | None = None,
    ):
        self.status = status
        self.body = body if body is not None else {"results": [], "images": []}
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc("connection refused", request=request)
        return httpx.Response(self.status, json=self.body)

    @property
    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def fake_tavily() -> FakeTavily:
    return FakeTavily()


@pytest.fixture
def make_client():
    """Build a TavilySearchClient whose HTTP traffic goes to a FakeTavily."""

    def _make(fake: FakeTavily, api_key: str = "tvly-test") -> TavilySearchClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(fake))
        return TavilySearchClient(api_key=api_key, client=http)

    return _make

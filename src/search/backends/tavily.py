"""Web search backend (Tavily)."""

from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import ValidationError

from src.core.config import Config, config
from src.core.logger import logger
from src.search.errors import ConfigurationError, ProviderError
from src.search.interface import SearchProvider
from src.search.models import SearchDepth, SearchResults
from src.search.normalizer import normalize_images

# Tavily rejects queries shorter than this.
MIN_QUERY_LENGTH = 5
# Result quality drops off below this many results.
MIN_MAX_RESULTS = 5
INCLUDE_IMAGE_DESCRIPTIONS = True


def pad_query(query: str) -> str:
    """Trim, then right-pad with spaces up to MIN_QUERY_LENGTH."""
    return query.strip().ljust(MIN_QUERY_LENGTH)


class TavilySearchClient(SearchProvider):
    """Tavily-backed web search over its JSON POST API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.tavily.com",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self._api_key = (api_key or "").strip()
        search_url = base_url.rstrip("/")
        if not search_url.endswith("/search"):
            search_url = search_url + "/search"
        self._search_url = search_url
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    @classmethod
    def from_config(
        cls, cfg: Config | None = None, client: httpx.AsyncClient | None = None
    ) -> "TavilySearchClient":
        cfg = cfg or config
        return cls(
            api_key=cfg.tavily_api_key,
            base_url=cfg.tavily_url,
            timeout=cfg.search_timeout,
            client=client,
        )

    @property
    def search_url(self) -> str:
        return self._search_url

    def get_source_name(self) -> str:
        return "tavily"

    def check_ready(self) -> None:
        if not self._api_key:
            raise ConfigurationError(
                "TAVILY_API_KEY is not set in the environment variables"
            )

    def effective_query(self, query: str) -> str:
        return pad_query(query)

    def build_payload(
        self,
        query: str,
        max_results: int,
        search_depth: SearchDepth,
        include_domains: Sequence[str],
        exclude_domains: Sequence[str],
    ) -> dict[str, Any]:
        return {
            "api_key": self._api_key,
            "query": pad_query(query),
            "max_results": max(max_results, MIN_MAX_RESULTS),
            "search_depth": SearchDepth(search_depth or SearchDepth.BASIC).value,
            "include_images": True,
            "include_image_descriptions": INCLUDE_IMAGE_DESCRIPTIONS,
            "include_answers": True,
            "include_domains": list(include_domains),
            "exclude_domains": list(exclude_domains),
        }

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def search(
        self,
        query: str,
        max_results: int = 10,
        search_depth: SearchDepth = SearchDepth.BASIC,
        include_domains: Sequence[str] = (),
        exclude_domains: Sequence[str] = (),
    ) -> SearchResults:
        self.check_ready()

        payload = self.build_payload(
            query, max_results, search_depth, include_domains, exclude_domains
        )
        logger.external_call(self.get_source_name(), self._search_url, payload)

        try:
            response = await self._get_client().post(self._search_url, json=payload)
        except httpx.HTTPError as e:
            raise ProviderError(None, str(e) or type(e).__name__) from e

        if not response.is_success:
            raise ProviderError(response.status_code, response.reason_phrase)

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(response.status_code, f"invalid JSON body: {e}") from e
        if not isinstance(data, dict):
            raise ProviderError(response.status_code, "unexpected response body")

        return self._to_results(data, payload["query"], response.status_code)

    def _to_results(
        self, data: dict[str, Any], effective_query: str, status_code: int
    ) -> SearchResults:
        body = dict(data)
        body["query"] = effective_query
        body["results"] = body.get("results") or []
        body["images"] = normalize_images(body.get("images"), INCLUDE_IMAGE_DESCRIPTIONS)
        if body.get("number_of_results") is None:
            body["number_of_results"] = len(body["results"])
        try:
            return SearchResults.model_validate(body)
        except ValidationError as e:
            raise ProviderError(status_code, f"malformed response body: {e}") from e

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

"""Standard interface for web search providers used by the search tool."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from src.search.models import SearchDepth, SearchResults


class SearchProvider(ABC):
    """Base for all search providers (Tavily today; others can be substituted)."""

    @abstractmethod
    async def search(
        self,
        query: str,
        max_results: int = 10,
        search_depth: SearchDepth = SearchDepth.BASIC,
        include_domains: Sequence[str] = (),
        exclude_domains: Sequence[str] = (),
    ) -> SearchResults:
        """Execute search and return canonical results.

        Raises ConfigurationError before any I/O if the provider is not
        usable, ProviderError on transport/HTTP failure.
        """
        pass

    @abstractmethod
    def get_source_name(self) -> str:
        """Return provider name (e.g. 'tavily')."""
        pass

    def check_ready(self) -> None:
        """Raise ConfigurationError if the provider cannot be called at all."""
        pass

    def effective_query(self, query: str) -> str:
        """The query as it will be transmitted; providers may reshape it."""
        return query

    async def close(self) -> None:
        pass

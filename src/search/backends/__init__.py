"""Search provider implementations."""

from src.search.backends.tavily import TavilySearchClient

__all__ = ["TavilySearchClient"]

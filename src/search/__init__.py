"""Web search: request/result models, provider interface and the Tavily client."""

from src.search.errors import ConfigurationError, ProviderError, SearchError
from src.search.interface import SearchProvider
from src.search.models import SearchDepth, SearchRequest, SearchResultImage, SearchResults
from src.search.normalizer import normalize_images, sanitize_url

__all__ = [
    "ConfigurationError",
    "ProviderError",
    "SearchError",
    "SearchProvider",
    "SearchDepth",
    "SearchRequest",
    "SearchResultImage",
    "SearchResults",
    "normalize_images",
    "sanitize_url",
]

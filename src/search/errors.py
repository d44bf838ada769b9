"""Search pipeline errors."""


class SearchError(Exception):
    """Base for all search pipeline failures."""


class ConfigurationError(SearchError):
    """Provider cannot run at all (e.g. missing API key). Not retriable."""


class ProviderError(SearchError):
    """Transport or HTTP failure talking to the search provider."""

    def __init__(self, status_code: int | None, reason: str):
        self.status_code = status_code
        self.reason = reason
        if status_code is None:
            super().__init__(f"Search provider error: {reason}")
        else:
            super().__init__(f"Search provider error: {status_code} {reason}")

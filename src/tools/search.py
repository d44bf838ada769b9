"""Web search tool: runs one provider search and streams its state to the UI."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass

from pydantic import ValidationError

from src.core.logger import logger
from src.core.tool_call import validate_tool_arguments
from src.observability import trace
from src.search.errors import ConfigurationError
from src.search.interface import SearchProvider
from src.search.models import SearchRequest, SearchResults
from src.streaming.channel import StreamableValue
from src.streaming.ui import SearchSection, ToolCallState, UISurface
from src.tools.base import Tool, ToolResult

StateObserver = Callable[[ToolCallState], None]


def error_narrative(query: str) -> str:
    return f'An error occurred while searching for "{query}".'


@dataclass
class SearchOutcome:
    results: SearchResults
    state: ToolCallState
    stream: StreamableValue
    # Conversation text replacing the reply when the search failed.
    full_response: str | None = None

    @property
    def failed(self) -> bool:
        return self.state == ToolCallState.FAILED


class SearchTool(Tool):
    """Search the web through a SearchProvider.

    Each call owns its stream: the pending section is pushed before any I/O,
    then the stream is closed with the JSON results on success, or the
    section is retracted and the stream closed with the done sentinel on
    failure. Callers always get a SearchResults back; only a
    ConfigurationError escapes.
    """

    def __init__(self, provider: SearchProvider, ui: UISurface | None = None):
        self._provider = provider
        self._ui = ui

    @property
    def provider(self) -> SearchProvider:
        return self._provider

    @property
    def name(self) -> str:
        return "search"

    @property
    def description(self) -> str:
        return "Search the web for information"

    @property
    def parameters(self) -> dict[str, str]:
        return {
            "query": "The search query string",
            "max_results": "Optional. Max results to return (at least 5 are fetched).",
            "search_depth": "Optional. 'basic' (default) or 'advanced'.",
            "include_domains": "Optional. Only return results from these domains.",
            "exclude_domains": "Optional. Never return results from these domains.",
        }

    def get_examples(self) -> list[str]:
        return [
            '{"tool": "search", "query": "latest python release"}',
            '{"tool": "search", "query": "rust async runtime", "search_depth": "advanced", '
            '"include_domains": ["docs.rs"]}',
        ]

    async def execute(self, **kwargs) -> ToolResult:
        try:
            request = validate_tool_arguments(kwargs).to_request()
        except ValidationError as e:
            return ToolResult.fail(f"Invalid search arguments: {e.errors()[0]['msg']}")

        outcome = await self.search(request)
        return ToolResult.ok(
            outcome.results.to_json(),
            data=outcome.results,
            narrative=outcome.full_response,
        )

    async def search(
        self,
        request: SearchRequest,
        ui: UISurface | None = None,
        on_state: StateObserver | None = None,
    ) -> SearchOutcome:
        surface = ui or self._ui

        def transition(state: ToolCallState) -> None:
            if on_state is not None:
                on_state(state)

        transition(ToolCallState.PENDING)
        # Outside the managed region: nothing is pushed if this raises.
        self._provider.check_ready()

        logger.tool_execute(
            self.name,
            {
                "query": request.query,
                "max_results": request.max_results,
                "search_depth": request.search_depth.value,
            },
        )
        stream = StreamableValue()
        if surface is not None:
            surface.update(SearchSection(stream, request.include_domains))
        transition(ToolCallState.STREAMING)
        logger.stream_update(ToolCallState.STREAMING)

        effective_query = self._provider.effective_query(request.query)
        try:
            async with trace(
                self.name,
                "tool",
                inputs={"query": effective_query},
                metadata={"provider": self._provider.get_source_name()},
            ) as run:
                results = await self._provider.search(
                    request.query,
                    request.max_results,
                    request.search_depth,
                    request.include_domains,
                    request.exclude_domains,
                )
                run.end(outputs={"number_of_results": results.number_of_results})
        except ConfigurationError:
            self._retract(surface, stream)
            logger.tool_result(self.name, 0, False, error_reason="provider not configured")
            raise
        except asyncio.CancelledError:
            self._retract(surface, stream)
            logger.tool_result(self.name, 0, False, error_reason="cancelled")
            raise
        except Exception as e:
            logger.error(f"Search API error: {e}", exception=e)
            self._retract(surface, stream)
            transition(ToolCallState.FAILED)
            logger.stream_update(ToolCallState.FAILED)
            logger.tool_result(self.name, 0, False, error_reason=str(e))
            return SearchOutcome(
                results=SearchResults.empty(effective_query),
                state=ToolCallState.FAILED,
                stream=stream,
                full_response=error_narrative(effective_query),
            )

        payload = results.to_json()
        stream.done(payload)
        transition(ToolCallState.SUCCEEDED)
        logger.stream_update(ToolCallState.SUCCEEDED, len(payload))
        logger.tool_result(self.name, len(payload), True)
        return SearchOutcome(
            results=results, state=ToolCallState.SUCCEEDED, stream=stream
        )

    @staticmethod
    def _retract(surface: UISurface | None, stream: StreamableValue) -> None:
        if surface is not None:
            surface.update(None)
        stream.done()

    async def close(self) -> None:
        await self._provider.close()

"""One-shot interface: run a single web search, stream its state to the console, exit."""

from __future__ import annotations

import asyncio
import json
from dataclasses import asdict
from typing import Any

from pydantic import ValidationError

from src.core.bootstrap import setup_tools
from src.core.config import config
from src.core.messages import Message, transform_tool_messages
from src.core.tool_call import (
    SearchCall,
    get_tool_arguments,
    get_tool_name,
    parse_tool_call_from_response,
)
from src.search.errors import ConfigurationError
from src.search.models import SearchResults
from src.streaming.ui import SearchSection
from src.tools.search import SearchTool


def format_results(results: SearchResults, limit: int = 10) -> str:
    if not results.results:
        return "No results found for that query."
    lines: list[str] = []
    for i, res in enumerate(results.results[:limit]):
        title = res.get("title") or "No Title"
        content = res.get("content") or "No content available"
        url = res.get("url") or "#"
        lines.append(f"[{i+1}] {title}\n    Snippet: {content}\n    URL: {url}")
    if results.images:
        lines.append(f"({len(results.images)} images)")
    return "\n\n".join(lines)


class ConsoleUISurface:
    """Prints the search section as it streams: pending first, results on close."""

    def __init__(self) -> None:
        self._renderers: list[asyncio.Task[None]] = []

    def update(self, node: Any | None) -> None:
        if node is None:
            print("(search section removed)")
            return
        if isinstance(node, SearchSection):
            domains = f" in {', '.join(node.include_domains)}" if node.include_domains else ""
            print(f"Searching{domains}...")
            self._renderers.append(asyncio.create_task(self._render(node)))

    async def _render(self, section: SearchSection) -> None:
        async for value in section.result.updates():
            print(format_results(SearchResults.model_validate_json(value)))

    async def drain(self) -> None:
        if self._renderers:
            await asyncio.gather(*self._renderers)
            self._renderers.clear()


async def run_oneshot(
    query: str,
    max_results: int | None = None,
    search_depth: str | None = None,
    include_domains: list[str] | None = None,
    exclude_domains: list[str] | None = None,
    as_json: bool = False,
) -> int:
    text = (query or "").strip()
    if not text:
        print("Error: query must not be empty")
        return 2

    try:
        request = SearchCall(
            query=text,
            max_results=max_results,
            search_depth=search_depth,
            include_domains=include_domains or [],
            exclude_domains=exclude_domains or [],
        ).to_request()
    except ValidationError as e:
        print(f"Error: invalid search arguments: {e.errors()[0]['msg']}")
        return 2

    surface = ConsoleUISurface()
    registry = setup_tools(ui=surface)
    try:
        tool = registry.get("search")
        if not isinstance(tool, SearchTool):
            print("Error: search tool is not registered")
            return 2
        try:
            outcome = await tool.search(request)
        except ConfigurationError as e:
            print(f"Error: {e}")
            return 2
        await surface.drain()

        history = [
            Message(role="user", content=text),
            Message(role="tool", content=outcome.results.to_payload()),
        ]
        if outcome.full_response:
            print(outcome.full_response)
            history.append(Message(role="assistant", content=outcome.full_response))
        if as_json:
            print(json.dumps([asdict(m) for m in transform_tool_messages(history)], indent=2))
        return 0
    finally:
        await registry.close()


async def run_tool_call(response: str, as_json: bool = False) -> int:
    """Execute the first fenced JSON tool call found in an agent reply."""
    surface = ConsoleUISurface()
    registry = setup_tools(ui=surface)
    try:
        parsed, _ = parse_tool_call_from_response(response, registry.names())
        if parsed is None:
            print("Error: no valid tool call found in the response")
            return 2
        name = get_tool_name(parsed)
        tool = registry.get(name)
        if tool is None:
            print(f"Error: tool '{name}' is not registered")
            return 2
        try:
            result = await tool.execute(**get_tool_arguments(parsed))
        except ConfigurationError as e:
            print(f"Error: {e}")
            return 2
        await surface.drain()

        if not result.success:
            print(f"Error: {result.error}")
            return 2
        if result.narrative:
            print(result.narrative)
        if as_json:
            print(result.output)
        return 0
    finally:
        await registry.close()


async def print_tools() -> int:
    """Print the tool section an agent's system prompt is built from."""
    registry = setup_tools()
    try:
        print(registry.get_tools_prompt())
        examples = registry.get_tools_examples()
        if examples:
            print()
            print(examples)
        return 0
    finally:
        await registry.close()


def main(
    query: str,
    max_results: int | None = None,
    search_depth: str | None = None,
    include_domains: list[str] | None = None,
    exclude_domains: list[str] | None = None,
    as_json: bool = False,
) -> int:
    if max_results is None:
        max_results = config.search_max_results
    return asyncio.run(
        run_oneshot(
            query,
            max_results=max_results,
            search_depth=search_depth,
            include_domains=include_domains,
            exclude_domains=exclude_domains,
            as_json=as_json,
        )
    )

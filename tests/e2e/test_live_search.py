import json

import pytest

from src.streaming.ui import BufferedUISurface, SearchSection, ToolCallState
from src.search.models import SearchRequest
from src.tools.search import SearchTool


@pytest.mark.asyncio
async def test_live_search_streams_results(live_client):
    ui = BufferedUISurface()
    tool = SearchTool(live_client, ui=ui)

    outcome = await tool.search(SearchRequest(query="python programming language", max_results=5))

    assert outcome.state == ToolCallState.SUCCEEDED
    assert isinstance(ui.nodes[0], SearchSection)
    payload = json.loads(outcome.stream.final)
    assert payload["query"] == "python programming language"
    assert len(payload["results"]) >= 1
    for image in payload["images"]:
        assert image["description"]
        assert " " not in image["url"]


@pytest.mark.asyncio
async def test_live_short_query_is_padded(live_client):
    outcome = await SearchTool(live_client).search(SearchRequest(query="AI"))
    assert outcome.results.query == "AI   "

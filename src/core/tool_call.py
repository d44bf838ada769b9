"""Parse JSON tool calls from LLM response; validate with per-tool Pydantic models."""

import json
import re
from typing import Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from src.core.config import config
from src.search.models import SearchDepth, SearchRequest, split_domains


class SearchCall(BaseModel):
    tool: Literal["search"] = "search"
    query: str
    max_results: int | None = Field(default=None, ge=1)
    search_depth: SearchDepth | None = None
    include_domains: list[str] = Field(default_factory=list)
    exclude_domains: list[str] = Field(default_factory=list)

    @field_validator("max_results", mode="before")
    @classmethod
    def coerce_max_results(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            return int(v) if v else None
        return v

    @field_validator("search_depth", mode="before")
    @classmethod
    def coerce_depth(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @field_validator("include_domains", "exclude_domains", mode="before")
    @classmethod
    def coerce_domains(cls, v: object) -> list[str]:
        return split_domains(v)

    def to_request(self, default_max_results: int | None = None) -> SearchRequest:
        return SearchRequest(
            query=self.query,
            max_results=self.max_results or default_max_results or config.search_max_results,
            search_depth=self.search_depth,
            include_domains=self.include_domains,
            exclude_domains=self.exclude_domains,
        )


# Only one tool today; becomes an Annotated union on "tool" when more are added.
ToolCall = SearchCall

_tool_call_adapter: TypeAdapter[ToolCall] = TypeAdapter(ToolCall)


def _extract_fenced_json(text: str) -> tuple[str | None, int]:
    """Extract first ```json...``` block; return (content, end_index) or (None, -1)."""
    match = re.search(r"```(?:json)?\s*(.*?)```", text.strip(), re.DOTALL)
    if not match:
        return None, -1
    return match.group(1).strip(), match.end()


def _normalize_json(s: str) -> str:
    """Remove trailing commas before } or ] so malformed JSON still parses."""
    s = re.sub(r",\s*}", "}", s)
    s = re.sub(r",\s*]", "]", s)
    return s


def validate_tool_arguments(data: dict) -> ToolCall:
    """Validate an agent-supplied argument dict; raises pydantic.ValidationError."""
    return _tool_call_adapter.validate_python({"tool": "search", **data})


def parse_tool_call_from_response(
    response: str,
    valid_tool_names: set[str],
) -> tuple[ToolCall | None, int]:
    """Parse first ```json...``` block; return (parsed_model, end_index) or (None, -1)."""
    raw, end_index = _extract_fenced_json(response)
    if not raw or end_index < 0:
        return None, -1
    raw = _normalize_json(raw)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return None, -1
    if not isinstance(data, dict):
        return None, -1
    tool_name = data.get("tool")
    if not isinstance(tool_name, str) or tool_name not in valid_tool_names:
        return None, -1
    # Some models nest arguments under "args"/"arguments".
    args = data.get("arguments") or data.get("args")
    if isinstance(args, dict):
        data = {"tool": tool_name, **args}
    try:
        parsed: ToolCall = _tool_call_adapter.validate_python(data)
        return parsed, end_index
    except ValidationError:
        return None, -1


def get_tool_name(parsed: ToolCall) -> str:
    return parsed.tool


def get_tool_arguments(parsed: ToolCall) -> dict:
    """Return kwargs for Tool.execute(); excludes 'tool'."""
    d = parsed.model_dump(exclude_none=True)
    d.pop("tool", None)
    return d

"""Search request and canonical result models shared by the tool, the client and the UI stream."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class SearchDepth(StrEnum):
    BASIC = "basic"
    ADVANCED = "advanced"


def split_domains(value: object) -> list[str]:
    """Domains from a list or a comma-separated string, in order, without blanks or repeats.

    ``None`` entries are skipped; any other non-string raises ValueError so
    pydantic reports it as a validation error.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items: list[object] | tuple[object, ...] = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        raise ValueError("domains must be a list of strings or a comma-separated string")
    domains: list[str] = []
    for item in items:
        if item is None:
            continue
        if not isinstance(item, str):
            raise ValueError(f"domain entries must be strings, got {type(item).__name__}")
        domain = item.strip()
        if domain and domain not in domains:
            domains.append(domain)
    return domains


class SearchRequest(BaseModel):
    """One tool invocation's search parameters. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(description="What to search for; non-empty after trimming")
    max_results: int = Field(default=10, ge=1, description="Requested result count")
    search_depth: SearchDepth = Field(default=SearchDepth.BASIC)
    include_domains: tuple[str, ...] = Field(
        default=(), description="Allow-list of domains"
    )
    exclude_domains: tuple[str, ...] = Field(
        default=(), description="Deny-list of domains"
    )

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("query must not be empty")
        return v

    @field_validator("search_depth", mode="before")
    @classmethod
    def default_depth(cls, v: object) -> object:
        if v is None or (isinstance(v, str) and not v.strip()):
            return SearchDepth.BASIC
        return v

    @field_validator("include_domains", "exclude_domains", mode="before")
    @classmethod
    def clean_domains(cls, v: object) -> tuple[str, ...]:
        return tuple(split_domains(v))


class SearchResultImage(BaseModel):
    """Image hit: bare ``{url}`` or annotated ``{url, description}``."""

    url: str
    description: str | None = None

    @field_validator("description")
    @classmethod
    def description_not_empty(cls, v: str | None) -> str | None:
        if v is not None and v == "":
            raise ValueError("description must be non-empty when present")
        return v

    def to_payload(self) -> dict[str, str]:
        if self.description is None:
            return {"url": self.url}
        return {"url": self.url, "description": self.description}


class SearchResults(BaseModel):
    """Canonical payload sent to the UI stream and returned to the agent.

    Unknown provider keys (``answer``, ``response_time``, ...) pass through.
    """

    model_config = ConfigDict(extra="allow")

    query: str = Field(description="Effective query sent to the provider")
    results: list[dict[str, Any]] = Field(default_factory=list)
    images: list[SearchResultImage] = Field(default_factory=list)
    number_of_results: int = Field(default=0, ge=0)

    @field_serializer("images")
    def serialize_images(self, images: list[SearchResultImage]) -> list[dict[str, str]]:
        return [image.to_payload() for image in images]

    @classmethod
    def empty(cls, query: str) -> "SearchResults":
        """Degraded result used when the provider call fails."""
        return cls(query=query, results=[], images=[], number_of_results=0)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump()

    def to_json(self) -> str:
        return self.model_dump_json()

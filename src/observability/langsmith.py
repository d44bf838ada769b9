"""LangSmith tracing integration (enabled with LANGSMITH_TRACING=true)."""

from __future__ import annotations

import atexit
import os
from typing import Any, Literal, cast

from langsmith import Client as LangSmithClient
from langsmith.run_helpers import trace as _ls_trace

_ENABLED = os.getenv("LANGSMITH_TRACING", "").strip().lower() == "true"
_PROJECT = os.getenv("LANGSMITH_PROJECT", "searchstream")

_LangSmithRunType = Literal[
    "tool", "chain", "llm", "retriever", "embedding", "prompt", "parser"
]


class _NoOpRun:
    def end(self, outputs: dict[str, Any] | None = None) -> None:
        pass


class _NoOpTraceContext:
    def __enter__(self) -> _NoOpRun:
        return _NoOpRun()

    def __exit__(self, *args: Any) -> None:
        pass

    async def __aenter__(self) -> _NoOpRun:
        return _NoOpRun()

    async def __aexit__(self, *args: Any) -> None:
        pass


_client: LangSmithClient | None = None


def get_client() -> LangSmithClient | None:
    global _client
    if not _ENABLED:
        return None
    if _client is None:
        _client = LangSmithClient()
    return _client


def trace(
    name: str,
    run_type: str = "chain",
    *,
    inputs: dict[str, Any] | None = None,
    metadata: dict[str, Any] | None = None,
    **kwargs: Any,
):
    """Span context manager; a no-op run when tracing is off."""
    if not _ENABLED:
        return _NoOpTraceContext()
    return _ls_trace(
        name,
        run_type=cast("_LangSmithRunType", run_type),
        inputs=inputs or {},
        metadata=metadata or {},
        project_name=_PROJECT,
        client=get_client(),
        **kwargs,
    )


def flush() -> None:
    if _client is not None:
        _client.flush()


atexit.register(flush)

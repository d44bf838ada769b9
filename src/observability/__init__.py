"""Observability: LangSmith tracing (optional, env-controlled)."""

from src.observability.langsmith import flush, get_client, trace

__all__ = ["trace", "flush", "get_client"]

"""Streaming channel between a running tool call and the UI."""

from src.streaming.channel import DONE_SENTINEL, StreamableValue, StreamClosedError
from src.streaming.ui import BufferedUISurface, SearchSection, ToolCallState, UISurface

__all__ = [
    "DONE_SENTINEL",
    "StreamableValue",
    "StreamClosedError",
    "BufferedUISurface",
    "SearchSection",
    "ToolCallState",
    "UISurface",
]

"""Conversation messages exchanged with the LLM."""

import json
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class Message:
    role: str
    content: Any
    type: str | None = None


def transform_tool_messages(messages: list[Message]) -> list[Message]:
    """Rewrite ``tool`` messages as assistant messages with JSON content.

    Chat backends that reject the tool role still get the tool output in
    the history; ``type="tool"`` marks where it came from.
    """
    return [
        replace(
            msg,
            role="assistant",
            content=json.dumps(msg.content, default=str),
            type="tool",
        )
        if msg.role == "tool"
        else msg
        for msg in messages
    ]

"""UI surface contract and the search section node pushed into it."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Protocol

from src.streaming.channel import StreamableValue


class ToolCallState(StrEnum):
    PENDING = "pending"
    STREAMING = "streaming"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class SearchSection:
    """Renderable node: search in progress, resolved once ``result`` closes with a payload."""

    result: StreamableValue
    include_domains: tuple[str, ...] = ()


class UISurface(Protocol):
    def update(self, node: Any | None) -> None:
        """Replace the current render; None retracts it."""
        ...


@dataclass
class BufferedUISurface:
    """In-memory surface recording every pushed node in order."""

    nodes: list[Any | None] = field(default_factory=list)

    def update(self, node: Any | None) -> None:
        self.nodes.append(node)

    @property
    def current(self) -> Any | None:
        return self.nodes[-1] if self.nodes else None

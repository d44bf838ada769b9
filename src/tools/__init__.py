from src.tools.base import Tool, ToolRegistry, ToolResult
from src.tools.search import SearchOutcome, SearchTool

__all__ = [
    "Tool",
    "ToolRegistry",
    "ToolResult",
    "SearchOutcome",
    "SearchTool",
]

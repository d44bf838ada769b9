"""Tool registration at startup."""

from src.core.config import Config, config
from src.core.logger import logger
from src.search.backends import TavilySearchClient
from src.streaming.ui import UISurface
from src.tools.base import ToolRegistry
from src.tools.search import SearchTool


def setup_tools(ui: UISurface | None = None, cfg: Config | None = None) -> ToolRegistry:
    cfg = cfg or config
    for problem in cfg.validate():
        logger.warning(problem)
    registry = ToolRegistry()
    provider = TavilySearchClient.from_config(cfg)
    registry.register(SearchTool(provider, ui=ui))
    logger.debug(
        f"Registered tools: {', '.join(sorted(registry.names()))} "
        f"(search provider: {provider.get_source_name()})"
    )
    return registry

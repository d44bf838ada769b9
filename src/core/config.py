"""Configuration from environment variables (.env)."""

import os
from pathlib import Path
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass
class Config:
    project_root: Path
    logs_dir: Path
    tavily_api_key: str
    tavily_url: str
    search_timeout: float
    search_max_results: int  # Provider default when the agent omits max_results
    log_to_file: bool

    @classmethod
    def load(cls) -> "Config":
        project_root = Path(__file__).parent.parent.parent
        return cls(
            project_root=project_root,
            logs_dir=Path(os.getenv("LOGS_DIR", str(project_root / "logs"))),
            tavily_api_key=os.getenv("TAVILY_API_KEY", ""),
            tavily_url=os.getenv("TAVILY_URL", "https://api.tavily.com"),
            search_timeout=float(os.getenv("SEARCH_TIMEOUT", "10")),
            search_max_results=int(os.getenv("SEARCH_MAX_RESULTS", "10")),
            log_to_file=os.getenv("LOG_TO_FILE", "true").strip().lower() == "true",
        )

    def validate(self) -> list[str]:
        errors = []
        if not self.tavily_api_key.strip():
            errors.append("TAVILY_API_KEY is not set in the environment variables")
        if self.search_timeout <= 0:
            errors.append(f"SEARCH_TIMEOUT must be positive, got {self.search_timeout}")
        return errors


config = Config.load()
